import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from dtogen import __version__
from dtogen.core.config import settings
from dtogen.core.logging import configure_logging
from dtogen.api.routes import router as api_router

configure_logging(settings.log_level)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    log.info("Starting DTO preview API...")
    yield
    log.info("Shutting down DTO preview API...")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    lifespan=lifespan
)
app.include_router(api_router, prefix="/v1")
