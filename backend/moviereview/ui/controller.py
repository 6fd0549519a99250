import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Set

from moviereview.core.cancellation import CancellationSlot
from moviereview.core.config import Settings, get_settings
from moviereview.core.enums import LoadMode, StatusType
from moviereview.core.services import MovieService, apply_client_sort
from moviereview.core.tmdb_service import MovieServiceFactory
from moviereview.schemas.movie import MoviePage, Review
from moviereview.storage import LocalStore
from moviereview.ui.context import ViewContext

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesce rapid calls into one, run ``wait`` seconds after the last"""

    def __init__(self, fn: Callable, wait: float):
        self.fn = fn
        self.wait = wait
        self._pending: Optional[asyncio.Task] = None

    @property
    def pending(self) -> Optional[asyncio.Task]:
        return self._pending

    def __call__(self, *args) -> asyncio.Task:
        self.cancel()
        self._pending = asyncio.ensure_future(self._run(*args))
        return self._pending

    async def _run(self, *args) -> None:
        await asyncio.sleep(self.wait)
        result = self.fn(*args)
        if inspect.isawaitable(result):
            await result

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()


@dataclass
class BrowseState:
    """Transient filter/sort/page state"""
    default_sort: str = "popularity.desc"
    current_page: int = 1
    total_pages: int = 1
    current_query: str = ""
    current_genres: Set[str] = field(default_factory=set)
    current_sort: str = ""

    def __post_init__(self):
        self.current_sort = self.current_sort or self.default_sort

    @property
    def load_mode(self) -> LoadMode:
        if self.current_query:
            return LoadMode.SEARCH
        if self.current_genres or self.current_sort != self.default_sort:
            return LoadMode.FILTERED
        return LoadMode.POPULAR

    def reset(self) -> None:
        self.current_genres.clear()
        self.current_sort = self.default_sort
        self.current_query = ""
        self.current_page = 1


class Controller:
    """Owns the browse state and routes UI events to loads and renders"""

    def __init__(self, view: ViewContext, store: LocalStore,
                 movie_service: Optional[MovieService] = None,
                 settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.view = view
        self.store = store
        self.list_slot = CancellationSlot("list")
        self.movies = movie_service or MovieServiceFactory.create_movie_service(self.settings)
        self.movies.list_slot = self.list_slot
        self.state = BrowseState(default_sort=self.settings.DEFAULT_SORT)
        self.search_debouncer = Debouncer(self.handle_search, self.settings.DEBOUNCE_DELAY)
        self.handlers: Dict[str, Callable] = self._bind_events()

    def _bind_events(self) -> Dict[str, Callable]:
        return {
            "prev": lambda: self.handle_pagination("prev"),
            "next": lambda: self.handle_pagination("next"),
            "search-input": self.handle_search_input,
            "sort-change": self.handle_sort_change,
            "genre": self.handle_genre_click,
            "clear-filters": self.handle_clear_filters,
            "theme-toggle": self.handle_theme_toggle,
            "menu-toggle": self.handle_menu_toggle,
            "drawer-backdrop": self.view.close_drawer,
            "home": self.handle_home_click,
            "movie": self.handle_movie_click,
            "similar": self.handle_similar_movie_click,
            "watchlist": self.handle_watchlist_toggle,
            "star": self.view.set_star_rating,
            "review-save": self.handle_review_save,
            "review-delete": self.handle_review_delete,
            "modal-close": self.view.close_modal,
            "keydown": self.handle_keydown,
        }

    async def dispatch(self, event: str, *args) -> Any:
        """Run the handler bound to ``event``, awaiting it when async"""
        try:
            handler = self.handlers[event]
        except KeyError:
            raise ValueError(f"Unknown UI event: {event}")
        result = handler(*args)
        if inspect.isawaitable(result):
            result = await result
        return result

    # Data loading
    def _show_page(self, page: MoviePage, movies=None) -> None:
        self.state.total_pages = page.total_pages
        self.state.current_page = max(1, min(self.state.current_page, page.total_pages))
        self.view.display_movies(page.movies if movies is None else movies, self.store.get_watchlist())
        self.view.update_pagination(self.state.current_page, self.state.total_pages)

    async def load_popular_movies(self) -> None:
        self.view.set_status("Loading popular movies…")
        self.view.show_loader()
        try:
            result = await self.movies.get_popular_movies(self.state.current_page)
            if result is None:
                return
            self._show_page(result)
            self.view.set_status("")
        except Exception as e:
            logger.error(f"Error loading popular movies: {str(e)}")
            self.view.set_status("Failed to load movies.", StatusType.ERROR)
        finally:
            self.view.hide_loader()

    async def load_search_results(self) -> None:
        if not self.state.current_query:
            return await self.load_popular_movies()
        self.view.set_status(f'Searching for "{self.state.current_query}"…')
        self.view.show_loader()
        try:
            result = await self.movies.search_movies(self.state.current_query, self.state.current_page)
            if result is None:
                return
            self._show_page(result, apply_client_sort(result.movies, self.state.current_sort))
            self.view.set_status("" if result.total_results else "No results.")
        except Exception as e:
            logger.error(f"Error searching movies: {str(e)}")
            self.view.set_status("Search failed.", StatusType.ERROR)
        finally:
            self.view.hide_loader()

    async def load_filtered_movies(self) -> None:
        self.view.set_status("Applying filters…")
        self.view.show_loader()
        try:
            result = await self.movies.discover_movies(
                self.state.current_page, self.state.current_sort, sorted(self.state.current_genres)
            )
            if result is None:
                return
            self._show_page(result)
            self.view.set_status("")
        except Exception as e:
            logger.error(f"Error applying filters: {str(e)}")
            self.view.set_status("Failed to apply filters.", StatusType.ERROR)
        finally:
            self.view.hide_loader()

    async def route_load(self) -> None:
        mode = self.state.load_mode
        if mode is LoadMode.SEARCH:
            await self.load_search_results()
        elif mode is LoadMode.FILTERED:
            await self.load_filtered_movies()
        else:
            await self.load_popular_movies()

    # Detail modal
    async def handle_movie_click(self, movie_id: int) -> None:
        self.view.show_loader()
        try:
            bundle = await self.movies.get_complete_movie_details(movie_id)
            if bundle is None or bundle.details is None:
                return
            self.view.open_modal(bundle, self.store.get_review(bundle.details.id))
        except Exception as e:
            logger.error(f"Error loading movie {movie_id}: {str(e)}")
            self.view.set_status("Failed to load movie details.", StatusType.ERROR)
        finally:
            self.view.hide_loader()

    async def handle_similar_movie_click(self, movie_id: int) -> None:
        self.view.close_modal()
        await self.handle_movie_click(movie_id)

    # Local state
    def handle_watchlist_toggle(self, movie_id: int) -> bool:
        active = self.store.toggle_watchlist(movie_id)
        self.view.set_card_watchlist(movie_id, active)
        return active

    def handle_review_save(self, movie_id: int, review: Optional[Review] = None) -> None:
        self.store.save_review(movie_id, review or self.view.collect_review())
        self.view.set_status("Review saved.")

    def handle_review_delete(self, movie_id: int) -> None:
        self.store.delete_review(movie_id)
        self.view.set_status("Review removed.")

    def handle_theme_toggle(self) -> None:
        self.view.apply_theme(self.store.toggle_theme())

    # Filters
    def handle_search_input(self, value: str) -> None:
        self.view.set_search_value(value)
        self.search_debouncer()

    async def handle_search(self) -> None:
        self.state.current_query = self.view.get_search_query()
        self.state.current_page = 1
        await self.route_load()

    async def handle_sort_change(self, value: Optional[str] = None) -> None:
        if value is not None:
            self.view.set_sort_value(value)
        self.state.current_sort = self.view.get_sort_value()
        self.state.current_page = 1
        await self.route_load()

    async def handle_genre_click(self, genre_id) -> None:
        genre_id = str(genre_id)
        active = genre_id in self.state.current_genres
        if active:
            self.state.current_genres.discard(genre_id)
        else:
            self.state.current_genres.add(genre_id)
        self.view.set_genre_pressed(genre_id, not active)
        self.state.current_page = 1
        await self.route_load()

    async def handle_pagination(self, direction: str) -> None:
        if direction == "prev" and self.state.current_page > 1:
            self.state.current_page -= 1
        elif direction == "next" and self.state.current_page < self.state.total_pages:
            self.state.current_page += 1
        else:
            return
        await self.route_load()

    async def handle_clear_filters(self) -> None:
        self.search_debouncer.cancel()
        self.state.reset()
        self.view.clear_filters()
        await self.route_load()

    async def handle_home_click(self) -> None:
        self.search_debouncer.cancel()
        self.state.reset()
        self.view.clear_filters()
        self.view.close_drawer()
        await self.load_popular_movies()

    # Chrome
    def handle_menu_toggle(self) -> None:
        self.view.menu_expanded = not self.view.menu_expanded
        self.view.toggle_filters_drawer(self.view.menu_expanded)

    def handle_keydown(self, key: str) -> None:
        if key != "Escape":
            return
        if self.view.modal_open:
            self.view.close_modal()
        else:
            self.view.close_drawer()

    async def initialize(self) -> None:
        try:
            self.view.apply_theme(self.store.get_theme())
            genres = await self.movies.get_genres()
            self.view.render_genres(genres)
            self.view.reset_drawer()
            await self.load_popular_movies()
        except Exception as e:
            logger.error(f"Failed to initialize app: {str(e)}")
            self.view.set_status("Something went wrong. Please try again later.", StatusType.ERROR)
