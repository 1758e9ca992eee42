"""Tracker fragment routes: display, edit, submit, add hike."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse

from hike_tracker.dependencies import get_views
from hike_tracker.services.fragments import HIKE_NAME_FIELD, HIKE_RANK_FIELD, TRACKER_NAME_FIELD
from hike_tracker.services.tracker_views import Fragment, TrackerViews

router = APIRouter(prefix="/tracker", tags=["trackers"])


def _html(fragment: Fragment) -> HTMLResponse:
    return HTMLResponse(content=fragment.html, status_code=fragment.status_code)


@router.get("/{key}", response_class=HTMLResponse)
async def display_tracker(key: str, views: TrackerViews = Depends(get_views)) -> HTMLResponse:
    """Display fragment. Also the target of the edit form's Cancel button."""
    return _html(await views.display(key))


@router.get("/{key}/edit", response_class=HTMLResponse)
async def edit_tracker(key: str, views: TrackerViews = Depends(get_views)) -> HTMLResponse:
    """Edit form pre-filled with the persisted name."""
    return _html(await views.edit(key))


@router.api_route("/{key}", methods=["PUT", "POST"], response_class=HTMLResponse)
async def submit_tracker(
    key: str,
    tracker_name: str = Form("", alias=TRACKER_NAME_FIELD),
    views: TrackerViews = Depends(get_views),
) -> HTMLResponse:
    """
    Rename a tracker from the edit form.

    Returns the display fragment on success, or the edit form again with the
    submitted value and an inline error.
    """
    return _html(await views.submit(key, tracker_name))


@router.post("/{key}/hikes", response_class=HTMLResponse)
async def add_hike(
    key: str,
    hike_name: str = Form("", alias=HIKE_NAME_FIELD),
    hike_rank: str = Form("1", alias=HIKE_RANK_FIELD),
    views: TrackerViews = Depends(get_views),
) -> HTMLResponse:
    """Append a hike and return the refreshed display fragment."""
    return _html(await views.add_hike(key, hike_name, hike_rank))
