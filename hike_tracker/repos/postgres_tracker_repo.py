"""
Postgres-backed tracker store.

Trackers live in one table, one row per document. The embedded hikes are a
JSONB array on the row, so reads and writes of a tracker and its hikes are
always a single-row statement.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID

import asyncpg

from hike_tracker import db
from hike_tracker.db import CONNECTION_ERRORS
from hike_tracker.models.tracker import Hike, Tracker
from hike_tracker.repos.tracker_repo import StoreUnavailable, TrackerNameConflict, TrackerStore, new_tracker

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS trackers (
    id UUID PRIMARY KEY,
    name TEXT NOT NULL,
    created_by UUID NOT NULL,
    hikes JSONB NOT NULL DEFAULT '[]'::jsonb,
    created_at TIMESTAMPTZ NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL,
    CHECK (updated_at >= created_at)
)
"""

CREATE_NAME_INDEX_SQL = "CREATE UNIQUE INDEX IF NOT EXISTS trackers_name_key ON trackers (name)"


def _row_to_tracker(row: asyncpg.Record) -> Tracker:
    """Convert a database row to a Tracker model."""
    return Tracker(
        id=row["id"],
        name=row["name"],
        created_by=row["created_by"],
        hikes=[Hike.model_validate(h) for h in row["hikes"]],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class PostgresTrackerStore(TrackerStore):
    """Tracker store over a shared asyncpg pool."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    @classmethod
    async def connect(cls, dsn: str | None = None) -> PostgresTrackerStore:
        """Open the shared pool and wrap it in a store."""
        try:
            pool = await db.init_pool(dsn)
        except (*CONNECTION_ERRORS, asyncpg.PostgresError) as e:
            raise StoreUnavailable(f"Could not connect to database: {e}") from e
        return cls(pool)

    @asynccontextmanager
    async def _conn(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Acquire a connection for one statement.

        Connectivity failures and any database error that reaches this point
        become StoreUnavailable. Unique violations are mapped by the caller
        before they get here.
        """
        try:
            async with self.pool.acquire() as conn:
                yield conn
        except CONNECTION_ERRORS as e:
            logger.error("Tracker store unreachable: %s", e)
            raise StoreUnavailable(str(e)) from e
        except asyncpg.PostgresError as e:
            logger.error("Tracker store rejected the operation: %s", e)
            raise StoreUnavailable(str(e)) from e

    async def ensure_index(self) -> None:
        try:
            async with self._conn() as conn:
                await conn.execute(CREATE_TABLE_SQL)
                await conn.execute(CREATE_NAME_INDEX_SQL)
        except StoreUnavailable as e:
            raise StoreUnavailable(f"Could not create unique index on trackers.name: {e}") from e
        logger.info("Unique index on trackers.name is in place")

    async def seed_if_absent(self, name: str, created_by: UUID | None = None) -> Tracker:
        existing = await self.find_by_name(name)
        if existing is not None:
            return existing

        tracker = new_tracker(name, created_by)
        async with self._conn() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO trackers (id, name, created_by, hikes, created_at, updated_at)
                VALUES ($1, $2, $3, $4, $5, $5)
                ON CONFLICT (name) DO NOTHING
                RETURNING *
                """,
                tracker.id,
                tracker.name,
                tracker.created_by,
                [],
                tracker.created_at,
            )

        if row is None:
            # Lost the race to a concurrent seed; the winner's document stands.
            winner = await self.find_by_name(name)
            if winner is None:
                raise StoreUnavailable(f"Tracker {name!r} vanished while seeding")
            return winner

        logger.info("Seeded tracker %r (%s)", name, tracker.id)
        return _row_to_tracker(row)

    async def find_by_name(self, name: str) -> Tracker | None:
        # Postgres text cannot hold NUL, so no stored name can match.
        if "\x00" in name:
            return None
        async with self._conn() as conn:
            row = await conn.fetchrow("SELECT * FROM trackers WHERE name = $1", name)
            return _row_to_tracker(row) if row else None

    async def find_by_id(self, tracker_id: UUID) -> Tracker | None:
        async with self._conn() as conn:
            row = await conn.fetchrow("SELECT * FROM trackers WHERE id = $1", tracker_id)
            return _row_to_tracker(row) if row else None

    async def rename(self, tracker_id: UUID, new_name: str) -> Tracker | None:
        async with self._conn() as conn:
            try:
                row = await conn.fetchrow(
                    """
                    UPDATE trackers
                    SET name = $2, updated_at = GREATEST($3, updated_at)
                    WHERE id = $1
                    RETURNING *
                    """,
                    tracker_id,
                    new_name,
                    datetime.now(UTC),
                )
            except asyncpg.UniqueViolationError as e:
                raise TrackerNameConflict(new_name) from e
            return _row_to_tracker(row) if row else None

    async def add_hike(self, tracker_id: UUID, name: str, rank: int) -> Tracker | None:
        async with self._conn() as conn:
            # Every SET expression sees the old row, so the hike and the
            # tracker get the same GREATEST(now, updated_at) stamp.
            # jsonb || jsonb-array appends in place, keeping insertion order.
            row = await conn.fetchrow(
                """
                UPDATE trackers
                SET hikes = hikes || jsonb_build_array(jsonb_build_object(
                        'name', $2::text,
                        'rank', $3::int,
                        'created_at', GREATEST($4::timestamptz, updated_at),
                        'updated_at', GREATEST($4::timestamptz, updated_at)
                    )),
                    updated_at = GREATEST($4::timestamptz, updated_at)
                WHERE id = $1
                RETURNING *
                """,
                tracker_id,
                name,
                rank,
                datetime.now(UTC),
            )
            return _row_to_tracker(row) if row else None
