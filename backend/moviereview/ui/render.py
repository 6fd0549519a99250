"""Pure render functions.

Each function maps data plus the current selection state to a view
description from :mod:`moviereview.schemas.view`; none of them touch the
view context or storage.
"""

import math
from datetime import date
from typing import Collection, Iterable, List, Optional

from moviereview.schemas.movie import Genre, MovieDetailBundle, MovieSummary, Review, Video
from moviereview.schemas.view import (
    DrawerView, GenreChipView, GridView, ModalView, MovieCardView, PaginationView,
    PersonCardView, SimilarCardView, StarView, TrailerView
)

IMG_BASE = "https://image.tmdb.org/t/p/"
IMG_W185 = IMG_BASE + "w185"
IMG_W342 = IMG_BASE + "w342"

PLACEHOLDER = "—"
EMPTY_GRID_MESSAGE = "No movies found."
YOUTUBE_EMBED = "https://www.youtube.com/embed/"


def format_date(value: Optional[str]) -> str:
    if not value:
        return PLACEHOLDER
    try:
        day = date.fromisoformat(value)
    except ValueError:
        return PLACEHOLDER
    return f"{day.month}/{day.day}/{day.year}"


def percent(vote_average: Optional[float]) -> str:
    if not vote_average:
        return PLACEHOLDER
    return f"{math.floor(vote_average * 10 + 0.5)}%"


def one_decimal(value: Optional[float]) -> str:
    if value is None:
        return PLACEHOLDER
    return f"{math.floor(value * 10 + 0.5) / 10:.1f}"


def poster_url(path: Optional[str], size: str = IMG_W342) -> str:
    return f"{size}{path}" if path else ""


def display_title(movie: MovieSummary) -> str:
    return movie.title or movie.name or "Untitled"


def render_movie_card(movie: MovieSummary, in_watchlist: bool = False) -> MovieCardView:
    return MovieCardView(
        movie_id=movie.id,
        title=display_title(movie),
        poster_url=poster_url(movie.poster_path, IMG_W342),
        poster_alt=movie.title or movie.name or "Poster",
        meta=f"{format_date(movie.release_date)} • ★ {one_decimal(movie.vote_average)}",
        rating_badge=percent(movie.vote_average),
        in_watchlist=in_watchlist,
    )


def render_grid(movies: Iterable[MovieSummary], watchlist: Collection[int] = ()) -> GridView:
    movies = list(movies or [])
    if not movies:
        return GridView(empty_message=EMPTY_GRID_MESSAGE)
    return GridView(cards=[render_movie_card(m, m.id in watchlist) for m in movies])


def render_pagination(current_page: int, total_pages: int) -> PaginationView:
    return PaginationView(
        label=f"Page {current_page} of {total_pages}",
        prev_disabled=current_page <= 1,
        next_disabled=current_page >= total_pages,
    )


def render_genre_chips(genres: Iterable[Genre], selected: Collection[str] = ()) -> List[GenreChipView]:
    return [
        GenreChipView(genre_id=str(g.id), label=g.name or "", pressed=str(g.id) in selected)
        for g in genres
    ]


def render_stars(rating: int, count: int = 5) -> List[StarView]:
    return [
        StarView(value=i, filled=i <= rating, label=f"Rate {i} stars")
        for i in range(1, count + 1)
    ]


def find_trailer(videos: Iterable[Video]) -> Optional[TrailerView]:
    for video in videos or []:
        if video.key and video.site == "YouTube" and video.type == "Trailer":
            return TrailerView(key=video.key, embed_url=f"{YOUTUBE_EMBED}{video.key}")
    return None


def render_modal(bundle: MovieDetailBundle, review: Optional[Review] = None,
                 cast_limit: int = 12, crew_limit: int = 10,
                 similar_limit: int = 12, stars_count: int = 5) -> ModalView:
    """Detail modal for a bundle whose ``details`` is present"""
    details = bundle.details
    runtime = details.runtime or PLACEHOLDER
    cast = [
        PersonCardView(name=c.name or "", role=c.character or "", image_url=poster_url(c.profile_path, IMG_W185))
        for c in bundle.credits.cast[:cast_limit]
    ]
    crew = [
        PersonCardView(name=p.name or "", role=p.job or "", image_url=poster_url(p.profile_path, IMG_W185))
        for p in bundle.credits.crew[:crew_limit]
    ]
    similar = [
        SimilarCardView(movie_id=m.id, title=display_title(m), poster_url=poster_url(m.poster_path, IMG_W342))
        for m in bundle.similar[:similar_limit]
    ]
    return ModalView(
        movie_id=details.id,
        title=display_title(details),
        poster_url=poster_url(details.poster_path, IMG_W342),
        subtitle=f"{format_date(details.release_date)} • {runtime} min • ★ {one_decimal(details.vote_average)}",
        tagline=details.tagline or None,
        overview=details.overview or "",
        genres=[g.name for g in details.genres if g.name],
        trailer=find_trailer(bundle.videos),
        cast=cast,
        crew=crew,
        stars=render_stars(review.rating if review else 0, stars_count),
        review_text=review.text if review else "",
        similar=similar,
    )


def render_drawer(is_open: bool, viewport_width: int, breakpoint: int = 700) -> DrawerView:
    if viewport_width <= breakpoint:
        return DrawerView(off_canvas=True, open=is_open, collapsed=False, backdrop_hidden=not is_open)
    return DrawerView(off_canvas=False, open=is_open, collapsed=not is_open, backdrop_hidden=True)
