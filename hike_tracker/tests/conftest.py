"""
Pytest configuration and fixtures for Hike Tracker tests.

Everything runs against the in-memory store unless a test asks for the
Postgres store, which needs DATABASE_URL and is skipped otherwise.
"""

from __future__ import annotations

import os

import httpx
import pytest
import pytest_asyncio

from hike_tracker.config import settings
from hike_tracker.main import app, lifespan
from hike_tracker.repos.tracker_repo import MemoryTrackerStore
from hike_tracker.services.tracker_views import TrackerViews


@pytest.fixture
def memory_store():
    """A fresh, empty in-memory store."""
    return MemoryTrackerStore()


@pytest.fixture
def views(memory_store):
    return TrackerViews(memory_store)


@pytest_asyncio.fixture
async def pg_store():
    """PostgresTrackerStore on a real database; trackers table emptied first."""
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set")

    from hike_tracker import db
    from hike_tracker.repos.postgres_tracker_repo import PostgresTrackerStore

    store = await PostgresTrackerStore.connect(database_url)
    await store.ensure_index()
    async with store.pool.acquire() as conn:
        await conn.execute("DELETE FROM trackers")
    yield store
    await db.close_pool()


@pytest_asyncio.fixture
async def running_app(monkeypatch):
    """The app after a real startup on the memory backend."""
    monkeypatch.setattr(settings, "STORE_BACKEND", "memory")
    monkeypatch.setattr(settings, "SEED_TRACKER_NAME", "first")
    async with lifespan(app):
        yield app


@pytest_asyncio.fixture
async def async_client(running_app):
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=running_app),
        base_url="http://test",
    ) as client:
        yield client
