import os
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Application settings using Pydantic BaseSettings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # TMDB
    TMDB_API_KEY: str = ""
    VITE_TMDB_API_KEY: str = ""
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))

    # Client side of the proxy
    PROXY_BASE_URL: str = os.getenv("PROXY_BASE_URL", "http://localhost:8000/api")

    # CORS
    CORS_ALLOW_ORIGINS: Optional[str] = None

    # Local persistence
    STORAGE_BACKEND: str = "memory"  # memory | file | redis
    STORAGE_PATH: str = os.getenv("STORAGE_PATH", "data/local_storage.json")
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    STORAGE_PREFIX: str = "moviereview:"

    # Browsing behaviour
    DEBOUNCE_DELAY: float = 0.5
    MAX_PAGES: int = 500
    STARS_COUNT: int = 5
    CAST_LIMIT: int = 12
    CREW_LIMIT: int = 10
    SIMILAR_LIMIT: int = 12
    DEFAULT_SORT: str = "popularity.desc"
    DRAWER_BREAKPOINT: int = 700

    # Environment
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    @property
    def tmdb_api_key(self) -> str:
        """Server-held key, VITE_ prefixed name first"""
        return self.VITE_TMDB_API_KEY or self.TMDB_API_KEY

    @property
    def cors_origins(self) -> list:
        origins = [o.strip() for o in (self.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]
        return origins or [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]

# Singleton instance
_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """Get settings singleton instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
