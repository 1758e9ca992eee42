"""
Hike Tracker FastAPI application.

Entry point for the web server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from hike_tracker import db
from hike_tracker.config import settings
from hike_tracker.logging_config import configure_logging
from hike_tracker.repos.postgres_tracker_repo import PostgresTrackerStore
from hike_tracker.repos.tracker_repo import MemoryTrackerStore, StoreUnavailable, TrackerStore
from hike_tracker.routes import pages as pages_routes
from hike_tracker.routes import trackers as tracker_routes
from hike_tracker.services import fragments
from hike_tracker.services.peaks import load_peaks
from hike_tracker.services.tracker_views import TrackerViews

logger = logging.getLogger(__name__)


async def build_store() -> TrackerStore:
    """Create the configured store. Postgres opens the shared pool."""
    if settings.STORE_BACKEND == "memory":
        logger.warning("Using in-memory tracker store; data is lost on restart")
        return MemoryTrackerStore()
    return await PostgresTrackerStore.connect()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Startup order matters: the unique index must exist before the seed
    insert, and both before any request is served. Any failure here
    propagates and aborts the process.
    """
    configure_logging(settings.LOG_LEVEL)

    try:
        settings.validate()
        store = await build_store()
        await store.ensure_index()
        seed = await store.seed_if_absent(settings.SEED_TRACKER_NAME)
        logger.info("Seed tracker %r ready (%s)", seed.name, seed.id)

        app.state.store = store
        app.state.views = TrackerViews(store)
        app.state.peaks = load_peaks(settings.PEAKS_FILE)
    except Exception:
        logger.critical("Startup failed", exc_info=True)
        await db.close_pool()
        raise

    yield

    await db.close_pool()


app = FastAPI(
    title="Hike Tracker",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(pages_routes.router)
app.include_router(tracker_routes.router)


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> HTMLResponse:
    """A store failure mid-request is a 500 fragment, not a crash."""
    logger.error("Store unavailable during %s %s: %s", request.method, request.url.path, exc)
    return HTMLResponse(content=fragments.render_server_error(), status_code=500)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}


def run() -> None:
    """Serve the app with uvicorn on HOST:PORT."""
    configure_logging(settings.LOG_LEVEL)
    logger.info("Listening on %s:%d", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
