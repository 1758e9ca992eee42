"""
Tracker view state machine.

Display -> Edit          GET  /tracker/{key}/edit   (no write)
Edit -> Display (commit) PUT  /tracker/{key}        (rename)
Edit -> Display (cancel) GET  /tracker/{key}        (no write)
any -> NotFound          when the key resolves to no tracker

Nothing is kept between requests: the mode comes from which endpoint was
called, the data from the store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from pydantic import ValidationError

from hike_tracker.models.tracker import AddHikeForm, RenameTrackerForm, Tracker
from hike_tracker.repos.tracker_repo import TrackerNameConflict, TrackerStore
from hike_tracker.services import fragments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fragment:
    """Rendered markup plus the status code to send it with."""

    html: str
    status_code: int = 200


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    if err["type"] == "string_too_short":
        return "Name is required."
    if err["type"] == "string_too_long":
        return "Name is too long."
    if err["type"] == "value_error" and err["loc"] and err["loc"][0] == "name":
        return "Name must not contain control characters."
    if err["loc"] and err["loc"][0] == "rank":
        return "Rank must be a whole number from 1 to 255."
    return "Invalid input."


class TrackerViews:
    """Resolves trackers from the store and renders the fragment for each mode."""

    def __init__(self, store: TrackerStore):
        self.store = store

    async def resolve(self, key: str) -> Tracker | None:
        """
        Find a tracker by id or by name.

        Keys that parse as a UUID are tried as an id first; everything else
        is a name.
        """
        try:
            tracker_id = UUID(key)
        except ValueError:
            return await self.store.find_by_name(key)

        tracker = await self.store.find_by_id(tracker_id)
        if tracker is None:
            tracker = await self.store.find_by_name(key)
        return tracker

    async def display(self, key: str) -> Fragment:
        tracker = await self.resolve(key)
        if tracker is None:
            return Fragment(fragments.render_not_found())
        return Fragment(fragments.render_display(tracker))

    async def edit(self, key: str) -> Fragment:
        tracker = await self.resolve(key)
        if tracker is None:
            return Fragment(fragments.render_not_found())
        return Fragment(fragments.render_edit(tracker))

    async def cancel(self, key: str) -> Fragment:
        """Drop unsubmitted input; show what is persisted."""
        return await self.display(key)

    async def submit(self, key: str, submitted: str) -> Fragment:
        """
        Commit a rename.

        On a blank name or a name clash the edit form comes back with the
        submitted text still in it and an inline error.
        """
        tracker = await self.resolve(key)
        if tracker is None:
            return Fragment(fragments.render_not_found())

        try:
            form = RenameTrackerForm(name=submitted)
        except ValidationError as e:
            return Fragment(fragments.render_edit(tracker, value=submitted, error=_first_error(e)))

        try:
            renamed = await self.store.rename(tracker.id, form.name)
        except TrackerNameConflict:
            logger.info("Rename of tracker %s to %r rejected: name taken", tracker.id, form.name)
            return Fragment(
                fragments.render_edit(
                    tracker,
                    value=submitted,
                    error=f"A tracker named '{form.name}' already exists.",
                )
            )

        if renamed is None:
            # Disappeared between lookup and update.
            return Fragment(fragments.render_not_found())
        return Fragment(fragments.render_display(renamed))

    async def add_hike(self, key: str, name: str, rank: str | int) -> Fragment:
        tracker = await self.resolve(key)
        if tracker is None:
            return Fragment(fragments.render_not_found())

        try:
            form = AddHikeForm(name=name, rank=rank)
        except ValidationError as e:
            return Fragment(fragments.render_display(tracker, hike_error=_first_error(e)))

        updated = await self.store.add_hike(tracker.id, form.name, form.rank)
        if updated is None:
            return Fragment(fragments.render_not_found())
        return Fragment(fragments.render_display(updated))

    async def home(self, seed_name: str) -> Fragment:
        """Full page around the seed tracker; 404 if it has gone missing."""
        tracker = await self.store.find_by_name(seed_name)
        if tracker is None:
            return Fragment(fragments.render_page(fragments.render_not_found()), status_code=404)
        return Fragment(fragments.render_page(fragments.render_display(tracker)))
