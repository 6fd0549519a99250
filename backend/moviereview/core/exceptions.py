from typing import Optional
from fastapi import status

class BaseAppException(Exception):
    """Base exception for application"""
    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self):
        """Return error response body"""
        return {"error": self.message}

class MissingApiKeyException(BaseAppException):
    """Raised when the server has no TMDB key configured"""
    def __init__(self, message: str = "Missing TMDB API key on server"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)

class UpstreamFetchException(BaseAppException):
    """Raised when the upstream API cannot be reached"""
    def __init__(self, details: str, message: str = "API fetch failed"):
        self.details = details
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)

    def to_dict(self):
        return {"error": self.message, "details": self.details}

class ProxyException(BaseAppException):
    """Raised for any other failure while forwarding a request"""
    def __init__(self, details: str, message: str = "Proxy error"):
        self.details = details
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)

    def to_dict(self):
        return {"error": self.message, "details": self.details}

class UpstreamError(Exception):
    """Raised by the movie API client on transport or HTTP errors"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)
