"""
Pydantic models for Hike Tracker.

All data shapes defined here. No imports from db, repos, or routes.
"""

from hike_tracker.models.peak import HikePeak
from hike_tracker.models.tracker import AddHikeForm, Hike, RenameTrackerForm, Tracker

__all__ = [
    "Tracker",
    "Hike",
    "RenameTrackerForm",
    "AddHikeForm",
    "HikePeak",
]
