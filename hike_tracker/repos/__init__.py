"""
Repository layer for Hike Tracker.

All store access lives here and ONLY here.
"""

from hike_tracker.repos.postgres_tracker_repo import PostgresTrackerStore
from hike_tracker.repos.tracker_repo import (
    MemoryTrackerStore,
    StoreUnavailable,
    TrackerNameConflict,
    TrackerStore,
)

__all__ = [
    "TrackerStore",
    "MemoryTrackerStore",
    "PostgresTrackerStore",
    "TrackerNameConflict",
    "StoreUnavailable",
]
