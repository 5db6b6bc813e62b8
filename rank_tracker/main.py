"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rank_tracker.api import auth, tracked_urls
from rank_tracker.app_logging import configure_logging
from rank_tracker.config import get_settings
from rank_tracker.database import close_db, init_db
from rank_tracker.errors import InvalidInput, RankTrackerError

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging(settings.log_level)
    init_db()
    yield
    close_db()


app = FastAPI(
    title="Rank Tracker API",
    description="Track where your pages rank for a search phrase",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:3001",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RankTrackerError)
async def rank_tracker_error_handler(request: Request, exc: RankTrackerError):
    content = {"error": exc.category, "detail": exc.message}
    if isinstance(exc, InvalidInput):
        content["fields"] = exc.fields

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = {}
    for error in exc.errors():
        # loc is ("body", field, ...) for body errors
        name = ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0])
        fields[name] = error["msg"]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "invalid_input", "detail": "Invalid input", "fields": fields},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "detail": "Something went wrong"},
    )


# Register routers
app.include_router(auth.router)
app.include_router(tracked_urls.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
