"""Page and static fragment routes: home page, peaks, demo button."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from hike_tracker.config import settings
from hike_tracker.dependencies import get_peaks, get_views
from hike_tracker.models.peak import HikePeak
from hike_tracker.services import fragments
from hike_tracker.services.tracker_views import TrackerViews

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def home(views: TrackerViews = Depends(get_views)) -> HTMLResponse:
    """Full page showing the seed tracker."""
    fragment = await views.home(settings.SEED_TRACKER_NAME)
    return HTMLResponse(content=fragment.html, status_code=fragment.status_code)


@router.get("/peaks", response_class=HTMLResponse)
async def peak_list(peaks: list[HikePeak] = Depends(get_peaks)) -> HTMLResponse:
    """Static peak list. Never touches the store."""
    return HTMLResponse(content=fragments.render_peak_list(peaks))


@router.post("/clicked", response_class=HTMLResponse)
async def clicked() -> HTMLResponse:
    return HTMLResponse(content=fragments.render_clicked())
