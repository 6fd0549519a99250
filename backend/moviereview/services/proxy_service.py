import logging
from typing import Iterable, Optional, Tuple

import requests
from fastapi.responses import JSONResponse, Response

from moviereview.core.config import Settings
from moviereview.core.exceptions import (
    MissingApiKeyException, ProxyException, UpstreamFetchException
)

logger = logging.getLogger(__name__)

API_KEY_PARAM = "api_key"

class ProxyService:
    """Forwards client requests to TMDB with the server-held key injected"""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def build_upstream_url(self, path: str) -> str:
        return f"{self.settings.TMDB_BASE_URL.rstrip('/')}/{path.lstrip('/')}"

    def build_params(self, query_items: Iterable[Tuple[str, str]], api_key: str) -> dict:
        """Copy client params, never letting a client-supplied key through"""
        params = {}
        for key, value in query_items:
            if key.lower() != API_KEY_PARAM:
                params[key] = value
        params[API_KEY_PARAM] = api_key
        return params

    def forward(self, path: str, query_items: Iterable[Tuple[str, str]]) -> Response:
        api_key = self.settings.tmdb_api_key
        if not api_key:
            logger.error("Refusing to proxy: no TMDB API key configured")
            raise MissingApiKeyException()

        url = self.build_upstream_url(path)
        params = self.build_params(query_items, api_key)

        try:
            logger.info(f"Proxying request to: {url}")
            upstream = self.session.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.settings.REQUEST_TIMEOUT,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Upstream request failed: {str(e)}")
            raise UpstreamFetchException(str(e))

        content_type = upstream.headers.get("content-type") or ""
        try:
            if "application/json" in content_type:
                return JSONResponse(content=upstream.json(), status_code=upstream.status_code)
            return Response(
                content=upstream.content,
                status_code=upstream.status_code,
                media_type=content_type or "application/octet-stream",
            )
        except Exception as e:
            logger.error(f"Proxy error for {path}: {str(e)}")
            raise ProxyException(str(e))
