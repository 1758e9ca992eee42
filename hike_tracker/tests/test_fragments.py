"""Tests for the pure fragment renderers."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from hike_tracker.models.peak import HikePeak
from hike_tracker.models.tracker import Hike, Tracker
from hike_tracker.services import fragments


def _tracker(name: str = "first", hikes: list[Hike] | None = None) -> Tracker:
    now = datetime.now(UTC)
    return Tracker(
        id=uuid4(),
        name=name,
        created_by=uuid4(),
        hikes=hikes or [],
        created_at=now,
        updated_at=now,
    )


class TestDisplay:
    def test_swap_target_and_edit_control(self):
        t = _tracker()
        html = fragments.render_display(t)

        assert html.startswith(f'<div id="tracker-{t.id}"')
        assert 'hx-target="this"' in html
        assert 'hx-swap="outerHTML"' in html
        assert f'hx-get="/tracker/{t.id}/edit"' in html
        assert "first" in html

    def test_hikes_in_insertion_order(self):
        now = datetime.now(UTC)
        t = _tracker(
            hikes=[
                Hike(name="Zeta Ridge", rank=3, created_at=now, updated_at=now),
                Hike(name="Alpha Peak", rank=1, created_at=now, updated_at=now),
            ]
        )
        html = fragments.render_display(t)

        assert html.index("Zeta Ridge") < html.index("Alpha Peak")
        assert "rank 3" in html

    def test_empty_hikes(self):
        assert "No hikes yet." in fragments.render_display(_tracker())

    def test_add_hike_form_posts_to_tracker(self):
        t = _tracker()
        html = fragments.render_display(t, hike_error="Name is required.")

        assert f'hx-post="/tracker/{t.id}/hikes"' in html
        assert 'name="hikeName"' in html
        assert "Name is required." in html

    def test_name_is_escaped(self):
        html = fragments.render_display(_tracker(name='<script>alert("x")</script>'))

        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestEdit:
    def test_prefilled_form_with_submit_and_cancel(self):
        t = _tracker()
        html = fragments.render_edit(t)

        assert f'hx-put="/tracker/{t.id}"' in html
        assert 'name="trackerName" value="first"' in html
        assert f'hx-get="/tracker/{t.id}"' in html
        assert "Submit" in html
        assert "Cancel" in html
        assert "error" not in html

    def test_retains_submitted_value_with_error(self):
        t = _tracker()
        html = fragments.render_edit(t, value="taken", error="A tracker named 'taken' already exists.")

        assert 'value="taken"' in html
        assert 'aria-invalid="true"' in html
        assert "A tracker named &#x27;taken&#x27; already exists." in html

    def test_value_is_escaped(self):
        html = fragments.render_edit(_tracker(), value='"><b>x')

        assert 'value="&quot;&gt;&lt;b&gt;x"' in html


def test_not_found_has_no_controls():
    html = fragments.render_not_found()

    assert "Not Found" in html
    assert "hx-" not in html


def test_peak_list():
    html = fragments.render_peak_list(
        [HikePeak(name="Mount Hood", elevation=3429), HikePeak(name="Half Dome", elevation=2694)]
    )

    assert html == (
        "<li>name: Mount Hood, elevation: 3429</li>"
        "<li>name: Half Dome, elevation: 2694</li>"
    )


def test_peak_list_empty():
    assert fragments.render_peak_list([]) == ""


def test_page_wraps_body_and_loads_htmx():
    html = fragments.render_page("<p>inner</p>")

    assert html.startswith("<!DOCTYPE html>")
    assert fragments.HTMX_SRC in html
    assert "<main><p>inner</p></main>" in html
