from typing import Collection, Iterable, List, Optional

from moviereview.core.config import Settings, get_settings
from moviereview.core.enums import StatusType, Theme
from moviereview.schemas.movie import Genre, MovieDetailBundle, MovieSummary, Review
from moviereview.schemas.view import (
    DocumentView, GenreChipView, GridView, ModalView, PaginationView, StatusView
)
from moviereview.ui import render


class ViewContext:
    """Current state of the rendered screen.

    Built once and handed to the controller. Form state (search box, sort
    selector, star widget, review text) is read and written through the
    getters/setters here; everything else is replaced wholesale from the
    pure functions in :mod:`moviereview.ui.render`.
    """

    def __init__(self, settings: Optional[Settings] = None, viewport_width: int = 1280):
        self.settings = settings or get_settings()
        self.viewport_width = viewport_width

        self.theme = Theme.DARK
        self.status = StatusView()
        self.loader_visible = False

        self.search_value = ""
        self.sort_value = self.settings.DEFAULT_SORT

        self.genres: List[Genre] = []
        self.genre_chips: List[GenreChipView] = []
        self.grid = GridView()
        self.pagination = PaginationView()

        self.menu_expanded = False
        self.drawer = render.render_drawer(False, viewport_width, self.settings.DRAWER_BREAKPOINT)

        self.modal: Optional[ModalView] = None
        self.star_rating = 0
        self.review_text = ""

    # Loading and status
    def show_loader(self) -> None:
        self.loader_visible = True

    def hide_loader(self) -> None:
        self.loader_visible = False

    def set_status(self, message: str = "", type: StatusType = StatusType.INFO) -> None:
        self.status = StatusView(message=message or "", type=type)

    # Grid and pagination
    def display_movies(self, movies: Iterable[MovieSummary], watchlist: Collection[int] = ()) -> None:
        self.grid = render.render_grid(movies, watchlist)

    def set_card_watchlist(self, movie_id: int, active: bool) -> None:
        self.grid = GridView(
            cards=[
                c.model_copy(update={"in_watchlist": active}) if c.movie_id == movie_id else c
                for c in self.grid.cards
            ],
            empty_message=self.grid.empty_message,
        )

    def update_pagination(self, current_page: int, total_pages: int) -> None:
        self.pagination = render.render_pagination(current_page, total_pages)

    # Genres
    def render_genres(self, genres: Iterable[Genre], selected: Collection[str] = ()) -> None:
        self.genres = list(genres)
        self.genre_chips = render.render_genre_chips(self.genres, selected)

    def set_genre_pressed(self, genre_id: str, pressed: bool) -> None:
        self.genre_chips = [
            c.model_copy(update={"pressed": pressed}) if c.genre_id == str(genre_id) else c
            for c in self.genre_chips
        ]

    # Modal
    @property
    def modal_open(self) -> bool:
        return self.modal is not None

    def open_modal(self, bundle: MovieDetailBundle, review: Optional[Review] = None) -> None:
        self.modal = render.render_modal(
            bundle,
            review,
            cast_limit=self.settings.CAST_LIMIT,
            crew_limit=self.settings.CREW_LIMIT,
            similar_limit=self.settings.SIMILAR_LIMIT,
            stars_count=self.settings.STARS_COUNT,
        )
        self.star_rating = review.rating if review else 0
        self.review_text = self.modal.review_text

    def close_modal(self) -> None:
        self.modal = None
        self.star_rating = 0
        self.review_text = ""

    def set_star_rating(self, rating: int) -> None:
        self.star_rating = max(0, min(self.settings.STARS_COUNT, rating))
        if self.modal is not None:
            self.modal = self.modal.model_copy(
                update={"stars": render.render_stars(self.star_rating, self.settings.STARS_COUNT)}
            )

    def set_review_text(self, text: str) -> None:
        self.review_text = text

    def collect_review(self) -> Review:
        return Review(rating=self.star_rating, text=self.review_text.strip())

    # Theme
    def apply_theme(self, theme: Theme) -> None:
        self.theme = Theme(theme)

    # Filters drawer
    @property
    def off_canvas(self) -> bool:
        return self.viewport_width <= self.settings.DRAWER_BREAKPOINT

    def toggle_filters_drawer(self, is_open: bool) -> None:
        self.drawer = render.render_drawer(is_open, self.viewport_width, self.settings.DRAWER_BREAKPOINT)

    def close_drawer(self) -> None:
        # the inline panel only collapses through the menu button
        if self.off_canvas:
            self.drawer = render.render_drawer(False, self.viewport_width, self.settings.DRAWER_BREAKPOINT)
            self.menu_expanded = False

    def reset_drawer(self) -> None:
        self.menu_expanded = False
        self.drawer = render.render_drawer(False, self.viewport_width, self.settings.DRAWER_BREAKPOINT)

    # Form controls
    def clear_filters(self) -> None:
        self.search_value = ""
        self.sort_value = self.settings.DEFAULT_SORT
        self.genre_chips = [c.model_copy(update={"pressed": False}) for c in self.genre_chips]

    def get_search_query(self) -> str:
        return self.search_value.strip()

    def set_search_value(self, value: str) -> None:
        self.search_value = value

    def get_sort_value(self) -> str:
        return self.sort_value

    def set_sort_value(self, value: str) -> None:
        self.sort_value = value

    def snapshot(self) -> DocumentView:
        return DocumentView(
            theme=self.theme,
            status=self.status,
            loader_visible=self.loader_visible,
            search=self.search_value,
            sort=self.sort_value,
            genres=self.genre_chips,
            grid=self.grid,
            pagination=self.pagination,
            drawer=self.drawer,
            menu_expanded=self.menu_expanded,
            modal=self.modal,
        )
