"""
Tracker store contract and in-memory implementation.

A tracker is one document: its hikes are embedded, so every write touches
exactly one document and needs no cross-document transaction.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from hike_tracker.models.tracker import Hike, Tracker

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TrackerNameConflict(Exception):
    """Another tracker already uses the requested name."""

    def __init__(self, name: str):
        super().__init__(f"A tracker named {name!r} already exists")
        self.name = name


class StoreUnavailable(Exception):
    """The document store cannot be reached or refused the operation."""

    pass


# ---------------------------------------------------------------------------
# Store protocol
# ---------------------------------------------------------------------------


class TrackerStore:
    """
    Abstract storage interface.
    Implement with Postgres for production, or in-memory for tests.

    Lookups return None for "not found"; that is a normal outcome.
    """

    async def ensure_index(self) -> None:
        """Establish the unique constraint on tracker name. Run once at startup."""
        raise NotImplementedError

    async def seed_if_absent(self, name: str, created_by: UUID | None = None) -> Tracker:
        """Return the tracker called `name`, inserting an empty one if absent."""
        raise NotImplementedError

    async def find_by_name(self, name: str) -> Tracker | None:
        """Fetch a tracker by its unique name."""
        raise NotImplementedError

    async def find_by_id(self, tracker_id: UUID) -> Tracker | None:
        """Fetch a tracker by id."""
        raise NotImplementedError

    async def rename(self, tracker_id: UUID, new_name: str) -> Tracker | None:
        """
        Rename a tracker. Returns None if it does not exist.

        Raises:
            TrackerNameConflict: If another tracker already has `new_name`
        """
        raise NotImplementedError

    async def add_hike(self, tracker_id: UUID, name: str, rank: int) -> Tracker | None:
        """Append a hike to a tracker. Returns None if the tracker does not exist."""
        raise NotImplementedError


def new_tracker(name: str, created_by: UUID | None = None) -> Tracker:
    """Build a fresh, empty tracker with created_at == updated_at."""
    now = datetime.now(UTC)
    return Tracker(
        id=uuid4(),
        name=name,
        created_by=created_by or uuid4(),
        hikes=[],
        created_at=now,
        updated_at=now,
    )


def bump(previous: datetime) -> datetime:
    """Next updated_at value; never earlier than the previous one."""
    return max(datetime.now(UTC), previous)


class MemoryTrackerStore(TrackerStore):
    """
    In-memory store for tests and local development.

    Each operation runs without awaiting, so on a single event loop every
    write is atomic just like a single-document update.
    """

    def __init__(self) -> None:
        self._trackers: dict[UUID, Tracker] = {}
        self._ids_by_name: dict[str, UUID] = {}

    async def ensure_index(self) -> None:
        # The name -> id map is the unique index.
        pass

    async def seed_if_absent(self, name: str, created_by: UUID | None = None) -> Tracker:
        existing = await self.find_by_name(name)
        if existing is not None:
            return existing

        tracker = new_tracker(name, created_by)
        self._trackers[tracker.id] = tracker
        self._ids_by_name[name] = tracker.id
        logger.info("Seeded tracker %r (%s)", name, tracker.id)
        return tracker.model_copy(deep=True)

    async def find_by_name(self, name: str) -> Tracker | None:
        tracker_id = self._ids_by_name.get(name)
        if tracker_id is None:
            return None
        return await self.find_by_id(tracker_id)

    async def find_by_id(self, tracker_id: UUID) -> Tracker | None:
        tracker = self._trackers.get(tracker_id)
        return tracker.model_copy(deep=True) if tracker else None

    async def rename(self, tracker_id: UUID, new_name: str) -> Tracker | None:
        tracker = self._trackers.get(tracker_id)
        if tracker is None:
            return None

        holder = self._ids_by_name.get(new_name)
        if holder is not None and holder != tracker_id:
            raise TrackerNameConflict(new_name)

        updated = tracker.model_copy(update={"name": new_name, "updated_at": bump(tracker.updated_at)})
        del self._ids_by_name[tracker.name]
        self._ids_by_name[new_name] = tracker_id
        self._trackers[tracker_id] = updated
        return updated.model_copy(deep=True)

    async def add_hike(self, tracker_id: UUID, name: str, rank: int) -> Tracker | None:
        tracker = self._trackers.get(tracker_id)
        if tracker is None:
            return None

        now = bump(tracker.updated_at)
        hike = Hike(name=name, rank=rank, created_at=now, updated_at=now)
        updated = tracker.model_copy(update={"hikes": [*tracker.hikes, hike], "updated_at": now})
        self._trackers[tracker_id] = updated
        return updated.model_copy(deep=True)
