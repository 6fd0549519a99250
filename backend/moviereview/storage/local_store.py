"""Watchlist, review and theme state kept in a local key/value store.

Every read tolerates malformed stored data and falls back to the empty
value (``[]`` for the watchlist, ``None`` for a review, ``dark`` for the
theme).
"""

import json
import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from ..core.enums import Theme
from ..core.interfaces import StorageBackend
from ..schemas.movie import Review

logger = logging.getLogger(__name__)

WATCHLIST_KEY = "watchlist"
THEME_KEY = "theme"


def review_key(movie_id: int) -> str:
    return f"review_{movie_id}"


class LocalStore:
    def __init__(self, backend: StorageBackend):
        self.backend = backend

    # Watchlist
    def get_watchlist(self) -> List[int]:
        try:
            data = json.loads(self.backend.get_item(WATCHLIST_KEY) or "[]")
        except ValueError:
            return []
        if not isinstance(data, list):
            return []
        return [i for i in data if isinstance(i, int) and not isinstance(i, bool)]

    def set_watchlist(self, ids: Iterable[int]) -> None:
        self.backend.set_item(WATCHLIST_KEY, json.dumps(list(dict.fromkeys(ids))))

    def is_movie_in_watchlist(self, movie_id: int) -> bool:
        return movie_id in self.get_watchlist()

    def add_to_watchlist(self, movie_id: int) -> None:
        watchlist = self.get_watchlist()
        if movie_id not in watchlist:
            watchlist.append(movie_id)
            self.set_watchlist(watchlist)

    def remove_from_watchlist(self, movie_id: int) -> None:
        self.set_watchlist(i for i in self.get_watchlist() if i != movie_id)

    def toggle_watchlist(self, movie_id: int) -> bool:
        """Flip membership and return the new state"""
        if self.is_movie_in_watchlist(movie_id):
            self.remove_from_watchlist(movie_id)
            return False
        self.add_to_watchlist(movie_id)
        return True

    # Reviews
    def save_review(self, movie_id: int, review: Review) -> None:
        self.backend.set_item(review_key(movie_id), review.model_dump_json())

    def get_review(self, movie_id: int) -> Optional[Review]:
        raw = self.backend.get_item(review_key(movie_id))
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return Review.model_validate(data) if data is not None else None
        except (ValueError, ValidationError):
            logger.warning(f"Discarding malformed review for movie {movie_id}")
            return None

    def delete_review(self, movie_id: int) -> None:
        self.backend.remove_item(review_key(movie_id))

    # Theme
    def save_theme(self, theme: Theme) -> None:
        self.backend.set_item(THEME_KEY, Theme(theme).value)

    def get_theme(self) -> Theme:
        try:
            return Theme(self.backend.get_item(THEME_KEY) or Theme.DARK.value)
        except ValueError:
            return Theme.DARK

    def toggle_theme(self) -> Theme:
        theme = self.get_theme().opposite
        self.save_theme(theme)
        return theme
