import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.deps import get_radarr_api
from app.api.routes_api import router as api_router
from app.core.auth import BasicAuthMiddleware
from app.core.config import get_settings
from app.services.radarr import MovieNotFoundError, RadarrError

load_dotenv()

logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Application lifespan context manager."""
    try:
        yield
    finally:
        # Only close the adapter if something built it
        if get_radarr_api.cache_info().currsize:
            try:
                await get_radarr_api().aclose()
            except Exception as e:
                logger.error(f"Error closing Radarr session: {e}")
            get_radarr_api.cache_clear()


app = FastAPI(
    title="Requestarr",
    description="Media request broker for Radarr",
    version="0.1.0",
    lifespan=app_lifespan,
)

app.add_middleware(BasicAuthMiddleware)


@app.exception_handler(MovieNotFoundError)
async def movie_not_found_handler(request: Request, exc: MovieNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(RadarrError)
async def radarr_error_handler(request: Request, exc: RadarrError):
    logger.warning("Radarr request for %s failed: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


app.include_router(api_router, prefix="/api")
