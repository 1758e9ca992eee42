"""FastAPI dependencies for objects built once at startup."""

from __future__ import annotations

from fastapi import Request

from hike_tracker.models.peak import HikePeak
from hike_tracker.services.tracker_views import TrackerViews


def get_views(request: Request) -> TrackerViews:
    """The TrackerViews bound to the shared store."""
    return request.app.state.views


def get_peaks(request: Request) -> list[HikePeak]:
    """The peak list loaded at startup."""
    return request.app.state.peaks
