import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from blob_commit.api.router import api_router
from blob_commit.config import settings
from blob_commit.services.github import close_github_client


def setup_logging() -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    setup_logging()
    logger.info("Blob commit API starting up")
    yield
    await close_github_client()
    logger.info("Blob commit API shutting down")


app = FastAPI(
    title="Blob Commit API",
    description="Commit batches of files to GitHub branches via the Git Data API",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log failed requests and commits."""
    if request.url.path == "/health":
        return await call_next(request)

    response = await call_next(request)

    path = request.url.path
    if response.status_code >= 400 or path.endswith("/commits"):
        logger.info(f"{request.method} {path} → {response.status_code}")

    return response


app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
