import logging
from typing import Optional

import requests

from .cancellation import CancellationSlot
from .config import Settings, get_settings
from .interfaces import ClientConfig
from .tmdb_client import MovieApiClient
from .services import MovieService

logger = logging.getLogger(__name__)

class MovieServiceFactory:
    """Factory class for creating movie services"""

    @staticmethod
    def create_client(settings: Optional[Settings] = None,
                      session: Optional[requests.Session] = None) -> MovieApiClient:
        settings = settings or get_settings()
        config = ClientConfig(
            base_url=settings.PROXY_BASE_URL,
            timeout=settings.REQUEST_TIMEOUT,
        )
        return MovieApiClient(config, session=session)

    @staticmethod
    def create_movie_service(settings: Optional[Settings] = None,
                             session: Optional[requests.Session] = None,
                             list_slot: Optional[CancellationSlot] = None) -> MovieService:
        """Create a new movie service instance talking to the proxy"""
        settings = settings or get_settings()
        client = MovieServiceFactory.create_client(settings, session)
        logger.info(f"Movie service using proxy at {client.config.base_url}")
        return MovieService(client, list_slot=list_slot, max_pages=settings.MAX_PAGES)
