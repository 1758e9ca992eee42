"""
HTML fragment rendering for tracker views.

Pure functions: data in, markup out. No I/O, no store access.

Each tracker fragment declares its own swap target (hx-target="this",
hx-swap="outerHTML") and the endpoints of its next legal transitions, so the
client needs no per-view script. Links always use the tracker's id, never the
key the request happened to use.
"""

from __future__ import annotations

from collections.abc import Iterable
from html import escape as _html_escape

from hike_tracker.models.peak import HikePeak
from hike_tracker.models.tracker import Hike, Tracker

HTMX_SRC = "https://unpkg.com/htmx.org@1.9.11"
HTMX_INTEGRITY = "sha384-0gxUXCCR8yv9FM2b+U3FDbsKthCI66oH5IA9fHppQq9DDMHuMauqq1ZHBpJxQ0J0"

# Form field names shared with the routes
TRACKER_NAME_FIELD = "trackerName"
HIKE_NAME_FIELD = "hikeName"
HIKE_RANK_FIELD = "hikeRank"


def escape(text: object) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)


def tracker_url(tracker: Tracker) -> str:
    return f"/tracker/{tracker.id}"


# ---------------------------------------------------------------------------
# Tracker fragments
# ---------------------------------------------------------------------------


def render_display(tracker: Tracker, hike_error: str | None = None) -> str:
    """
    Read-only view of a tracker.

    Carries one control back into Edit, plus the add-hike form. Both swap
    this whole div.
    """
    url = tracker_url(tracker)
    return (
        f'<div id="tracker-{tracker.id}" class="tracker" hx-target="this" hx-swap="outerHTML">'
        f"<div><label>Name: </label>{escape(tracker.name)}</div>"
        f"{_render_hikes(tracker.hikes)}"
        f"{_render_add_hike_form(url, hike_error)}"
        f'<button hx-get="{url}/edit" class="btn btn-primary">Click To Edit</button>'
        "</div>"
    )


def render_edit(tracker: Tracker, value: str | None = None, error: str | None = None) -> str:
    """
    Edit form for a tracker's name.

    `value` is what the input shows; it defaults to the persisted name and is
    the submitted text when re-rendering after a failed submit.
    """
    url = tracker_url(tracker)
    shown = tracker.name if value is None else value
    invalid = ' aria-invalid="true"' if error else ""
    error_html = f'<p class="error" role="alert">{escape(error)}</p>' if error else ""
    return (
        f'<form id="tracker-{tracker.id}" class="tracker" hx-put="{url}" hx-target="this" hx-swap="outerHTML">'
        "<div>"
        "<label>Name</label>"
        f'<input type="text" name="{TRACKER_NAME_FIELD}" value="{escape(shown)}"{invalid}>'
        "</div>"
        f"{error_html}"
        '<button class="btn">Submit</button>'
        f'<button type="button" class="btn" hx-get="{url}">Cancel</button>'
        "</form>"
    )


def render_not_found() -> str:
    """Terminal fragment: no tracker matches, and nothing to do next."""
    return '<h1 class="not-found">Not Found</h1>'


def render_server_error() -> str:
    """Generic failure fragment; hides the cause from the client."""
    return '<h1 class="server-error">Something went wrong</h1>'


def _render_hikes(hikes: list[Hike]) -> str:
    if not hikes:
        return '<p class="hikes-empty">No hikes yet.</p>'
    items = "".join(
        f'<li class="hike"><span class="hike-name">{escape(h.name)}</span>'
        f' <span class="hike-rank">rank {h.rank}</span></li>'
        for h in hikes
    )
    return f'<ol class="hikes">{items}</ol>'


def _render_add_hike_form(url: str, error: str | None) -> str:
    error_html = f'<p class="error" role="alert">{escape(error)}</p>' if error else ""
    return (
        f'<form class="add-hike" hx-post="{url}/hikes">'
        f'<input type="text" name="{HIKE_NAME_FIELD}" placeholder="Hike name">'
        f'<input type="number" name="{HIKE_RANK_FIELD}" min="1" max="255" value="1">'
        f"{error_html}"
        '<button class="btn">Add Hike</button>'
        "</form>"
    )


# ---------------------------------------------------------------------------
# Static fragments
# ---------------------------------------------------------------------------


def render_peak_list(peaks: Iterable[HikePeak]) -> str:
    """One list item per peak, in file order."""
    return "".join(f"<li>name: {escape(p.name)}, elevation: {p.elevation}</li>" for p in peaks)


def render_clicked() -> str:
    """Demo fragment for the /clicked button."""
    return '<div id="clicked">You clicked the button.</div>'


# ---------------------------------------------------------------------------
# Full page
# ---------------------------------------------------------------------------


def render_page(body: str, title: str = "Hike Tracker") -> str:
    """Wrap a fragment in the full HTML document that loads htmx."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{escape(title)}</title>
  <script src="{HTMX_SRC}" integrity="{HTMX_INTEGRITY}" crossorigin="anonymous"></script>
</head>
<body>
  <h1>{escape(title)}</h1>
  <button hx-post="/clicked" hx-swap="outerHTML">Click Me</button>
  <ul hx-get="/peaks" hx-trigger="load"></ul>
  <main>{body}</main>
</body>
</html>
"""
