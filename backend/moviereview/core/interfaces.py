from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional
from dataclasses import dataclass

@dataclass
class ClientConfig:
    """Configuration class for the movie API client"""
    base_url: str = "http://localhost:8000/api"
    timeout: int = 30

class MovieApiClientInterface(ABC):
    """Abstract interface for the movie API client"""

    @abstractmethod
    async def fetch_json(self, path: str, params: Optional[Dict] = None, token=None) -> Optional[Any]:
        pass

class MovieServiceInterface(ABC):
    """Abstract interface for movie service"""

    @abstractmethod
    async def get_popular_movies(self, page: int = 1):
        pass

    @abstractmethod
    async def search_movies(self, query: str, page: int = 1):
        pass

    @abstractmethod
    async def discover_movies(self, page: int = 1, sort_by: str = "popularity.desc", genres: Iterable[str] = ()):
        pass

    @abstractmethod
    async def get_genres(self) -> List:
        pass

    @abstractmethod
    async def get_complete_movie_details(self, movie_id: int):
        pass

class StorageBackend(ABC):
    """Mapping-backed string key/value store"""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        pass
