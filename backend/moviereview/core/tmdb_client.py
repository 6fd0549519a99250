import asyncio
import functools
import logging
from typing import Any, Dict, Optional

import requests

from .cancellation import CancellationToken
from .exceptions import UpstreamError
from .interfaces import ClientConfig, MovieApiClientInterface

logger = logging.getLogger(__name__)

class MovieApiClient(MovieApiClientInterface):
    """HTTP client for the key-injecting proxy"""

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "accept": "application/json"
        })

    def build_url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    @staticmethod
    def build_params(params: Optional[Dict] = None) -> Dict[str, str]:
        """Drop empty values, join sequences with commas, lowercase booleans"""
        query = {}
        for key, value in (params or {}).items():
            if isinstance(value, (list, tuple, set, frozenset)):
                query[key] = ",".join(str(v) for v in value)
            elif isinstance(value, bool):
                query[key] = "true" if value else "false"
            elif value is not None and value != "":
                query[key] = str(value)
        return query

    def _get(self, url: str, query: Dict[str, str]) -> Any:
        try:
            logger.info(f"Making request to: {url}")
            response = self.session.get(url, params=query, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request exception: {str(e)}")
            raise UpstreamError(f"Request failed: {str(e)}")

        if not response.ok:
            logger.error(f"API request failed: {response.status_code}")
            raise UpstreamError(f"API error {response.status_code}", response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from {url}: {str(e)}", response.status_code)

    async def fetch_json(self, path: str, params: Optional[Dict] = None,
                         token: Optional[CancellationToken] = None) -> Optional[Any]:
        """GET ``path`` from the proxy.

        Returns ``None`` instead of raising when ``token`` is signalled
        before the response is consumed.
        """
        url = self.build_url(path)
        query = self.build_params(params)
        loop = asyncio.get_running_loop()
        request = loop.run_in_executor(None, functools.partial(self._get, url, query))

        if token is None:
            return await request

        superseded = asyncio.ensure_future(token.wait())
        try:
            await asyncio.wait({request, superseded}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if not superseded.done():
                superseded.cancel()

        if token.cancelled:
            if request.done():
                request.exception()
            else:
                request.add_done_callback(_consume_result)
            return None
        return request.result()

def _consume_result(future: "asyncio.Future") -> None:
    if not future.cancelled():
        future.exception()
