import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from moviereview.core.config import get_settings
from moviereview.core.exceptions import BaseAppException
from moviereview.routers import health, proxy

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="MovieReview API",
    description="Key-injecting proxy in front of the TMDB API",
    version="1.0.0",
    debug=settings.DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

@app.exception_handler(BaseAppException)
async def handle_app_exception(request: Request, exc: BaseAppException):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

app.include_router(health.router)
app.include_router(proxy.router)
