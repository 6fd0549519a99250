from typing import Optional

import requests
from fastapi import APIRouter, Depends, Request

from moviereview.core.config import Settings, get_settings
from moviereview.services.proxy_service import ProxyService

router = APIRouter(prefix="/api", tags=["proxy"])

_session: Optional[requests.Session] = None

def get_http_session() -> requests.Session:
    """Get the upstream session shared by every proxied request"""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session

def get_proxy_service(
    settings: Settings = Depends(get_settings),
    session: requests.Session = Depends(get_http_session),
) -> ProxyService:
    return ProxyService(settings, session=session)

@router.get("/{path:path}")
def proxy_tmdb(
    path: str,
    request: Request,
    service: ProxyService = Depends(get_proxy_service),
):
    """Forward ``/api/<path>?<query>`` to TMDB with the server key"""
    return service.forward(path, request.query_params.items())
