"""FastAPI application entry point."""

from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.logging_config import setup_logging, get_logger
from app.routers import locations, chat, observability
from app.services.location_store import get_location_store

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting Athens cooling map API...")
    store = get_location_store()
    logger.info(f"Location store ready with {len(store.list_locations())} places")
    yield
    # Shutdown
    logger.info("Shutting down Athens cooling map API...")


settings = get_settings()

app = FastAPI(
    title="Athens Cooling Map",
    description="Athens points of interest with cooling priority scores and a chat assistant",
    version="0.1.0",
    lifespan=lifespan,
)

# Request timing middleware
@app.middleware("http")
async def log_request_timing(request: Request, call_next):
    """Log the time taken for each API request."""
    start_time = time.time()

    logger.info(f"→ API_REQUEST | {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time

    status_emoji = "✓" if response.status_code < 400 else "✗"
    logger.info(
        f"{status_emoji} API_RESPONSE | {request.method} {request.url.path} | "
        f"status={response.status_code} | duration={duration:.3f}s"
    )

    return response

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(observability.router, prefix="/api", tags=["Observability"])
app.include_router(locations.router, prefix="/api", tags=["Locations"])
app.include_router(chat.router, prefix="/api", tags=["Chat"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Athens Cooling Map",
        "version": "0.1.0",
        "description": "Athens points of interest with cooling priority scores",
    }
