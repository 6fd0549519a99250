from typing import Optional

from moviereview.core.config import Settings, get_settings
from moviereview.storage import LocalStore, create_storage
from moviereview.ui.context import ViewContext
from moviereview.ui.controller import Controller


def build_controller(settings: Optional[Settings] = None, viewport_width: int = 1280) -> Controller:
    """Wire storage, view context and movie service from settings"""
    settings = settings or get_settings()
    store = LocalStore(create_storage(settings))
    view = ViewContext(settings, viewport_width=viewport_width)
    return Controller(view, store, settings=settings)


__all__ = ['Controller', 'ViewContext', 'build_controller']
