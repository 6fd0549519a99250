import asyncio
import logging
import math
from datetime import date
from typing import Iterable, List, Optional

from ..cancellation import CancellationSlot
from ..enums import SortKey
from ..interfaces import MovieApiClientInterface, MovieServiceInterface
from ...schemas.movie import (
    Credits, Genre, MovieDetailBundle, MovieDetails, MoviePage, MovieSummary, Video
)

logger = logging.getLogger(__name__)

LIST_TAG = "list"

def clamp(n: int, low: int, high: int) -> int:
    return max(low, min(high, n))

class MovieService(MovieServiceInterface):
    """Service class for movie-related operations"""

    def __init__(self, client: MovieApiClientInterface, list_slot: Optional[CancellationSlot] = None,
                 max_pages: int = 500):
        self.client = client
        self.list_slot = list_slot or CancellationSlot(LIST_TAG)
        self.max_pages = max_pages

    def _to_page(self, data: dict) -> MoviePage:
        return MoviePage(
            movies=[MovieSummary.model_validate(m) for m in data.get("results") or []],
            total_pages=clamp(data.get("total_pages") or 1, 1, self.max_pages),
            total_results=data.get("total_results") or 0,
        )

    async def _fetch_list(self, path: str, params: dict) -> Optional[MoviePage]:
        data = await self.client.fetch_json(path, params, token=self.list_slot.renew())
        if data is None:
            return None
        return self._to_page(data)

    async def get_popular_movies(self, page: int = 1) -> Optional[MoviePage]:
        """Get popular movies"""
        return await self._fetch_list("movie/popular", {"page": page})

    async def search_movies(self, query: str, page: int = 1) -> Optional[MoviePage]:
        """Search movies by query"""
        if not query:
            return None
        params = {"query": query, "page": page, "include_adult": False}
        return await self._fetch_list("search/movie", params)

    async def discover_movies(self, page: int = 1, sort_by: str = SortKey.POPULARITY.value,
                              genres: Iterable[str] = ()) -> Optional[MoviePage]:
        """Discover movies with sort and genre filters"""
        params = {
            "page": page,
            "sort_by": sort_by,
            "with_genres": list(genres),
            "include_adult": False,
        }
        return await self._fetch_list("discover/movie", params)

    async def get_genres(self) -> List[Genre]:
        """Get movie genres list"""
        data = await self.client.fetch_json("genre/movie/list", {"language": "en-US"})
        return [Genre.model_validate(g) for g in (data or {}).get("genres") or []]

    async def get_movie_details(self, movie_id: int) -> Optional[MovieDetails]:
        """Get movie details by ID"""
        data = await self.client.fetch_json(f"movie/{movie_id}")
        return MovieDetails.model_validate(data) if data else None

    async def get_movie_videos(self, movie_id: int) -> List[Video]:
        data = await self.client.fetch_json(f"movie/{movie_id}/videos")
        return [Video.model_validate(v) for v in (data or {}).get("results") or []]

    async def get_movie_credits(self, movie_id: int) -> Credits:
        """Get movie credits by ID"""
        data = await self.client.fetch_json(f"movie/{movie_id}/credits")
        data = data or {}
        return Credits.model_validate({"cast": data.get("cast") or [], "crew": data.get("crew") or []})

    async def get_similar_movies(self, movie_id: int) -> List[MovieSummary]:
        data = await self.client.fetch_json(f"movie/{movie_id}/similar")
        return [MovieSummary.model_validate(m) for m in (data or {}).get("results") or []]

    async def get_complete_movie_details(self, movie_id: int) -> MovieDetailBundle:
        """Fetch details, videos, credits and similar movies concurrently"""
        try:
            details, videos, credits, similar = await asyncio.gather(
                self.get_movie_details(movie_id),
                self.get_movie_videos(movie_id),
                self.get_movie_credits(movie_id),
                self.get_similar_movies(movie_id),
            )
        except Exception as e:
            logger.error(f"Error fetching complete movie details: {str(e)}")
            raise
        return MovieDetailBundle(details=details, videos=videos, credits=credits, similar=similar)

def _number(value: Optional[float]) -> float:
    return -math.inf if value is None else value

def _release_day(movie: MovieSummary) -> date:
    try:
        return date.fromisoformat(movie.release_date or "")
    except ValueError:
        return date.min

def apply_client_sort(movies: List[MovieSummary], sort_by: str) -> List[MovieSummary]:
    """Re-order an already fetched result set; search cannot sort upstream."""
    if sort_by == SortKey.RATING:
        key = lambda m: _number(m.vote_average)
    elif sort_by == SortKey.RELEASE_DATE:
        key = _release_day
    elif sort_by == SortKey.REVENUE:
        key = lambda m: _number(m.revenue if m.revenue is not None else m.popularity)
    else:
        key = lambda m: _number(m.popularity)
    return sorted(movies, key=key, reverse=True)
