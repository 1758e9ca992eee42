"""
Seed a tracker, optionally with demo hikes.

Usage:
    python -m hike_tracker.seed NAME [--hike NAME:RANK ...]

Creates the tracker called NAME if it does not exist yet (existing trackers
are left alone), then appends each --hike to it, in order. A hike without
":RANK" gets rank 1.

Example:
    python -m hike_tracker.seed first --hike "Half Dome:2" --hike "Mount Whitney:1"
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from hike_tracker import db
from hike_tracker.config import settings
from hike_tracker.logging_config import configure_logging
from hike_tracker.models.tracker import AddHikeForm, RenameTrackerForm, Tracker
from hike_tracker.repos.postgres_tracker_repo import PostgresTrackerStore
from hike_tracker.repos.tracker_repo import StoreUnavailable, TrackerStore

logger = logging.getLogger(__name__)


def parse_hike(arg: str) -> AddHikeForm:
    """Parse "Name:rank" into a validated hike. Used as an argparse type."""
    name, sep, rank = arg.rpartition(":")
    if not sep:
        name, rank = arg, "1"
    try:
        return AddHikeForm(name=name, rank=rank)
    except ValidationError as e:
        err = e.errors()[0]
        raise argparse.ArgumentTypeError(f"invalid hike {arg!r}: {err['loc'][0]} {err['msg'].lower()}") from e


def parse_tracker_name(arg: str) -> str:
    try:
        return RenameTrackerForm(name=arg).name
    except ValidationError as e:
        raise argparse.ArgumentTypeError(f"invalid tracker name {arg!r}: {e.errors()[0]['msg'].lower()}") from e


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hike-tracker-seed", description="Seed a tracker and optional demo hikes")
    p.add_argument("name", type=parse_tracker_name, help="tracker name")
    p.add_argument(
        "--hike",
        dest="hikes",
        action="append",
        default=[],
        type=parse_hike,
        metavar="NAME:RANK",
        help="hike to append (repeatable, rank defaults to 1)",
    )
    return p


async def seed(store: TrackerStore, name: str, hikes: list[AddHikeForm]) -> Tracker:
    """Ensure the index, seed `name` and append `hikes` in order."""
    await store.ensure_index()
    tracker = await store.seed_if_absent(name)
    print(f"Tracker {tracker.name!r}: {tracker.id}")

    for hike in hikes:
        tracker = await store.add_hike(tracker.id, hike.name, hike.rank)
        print(f"  + {hike.name} (rank {hike.rank})")
    return tracker


async def _run(name: str, hikes: list[AddHikeForm]) -> None:
    store = await PostgresTrackerStore.connect()
    try:
        await seed(store, name, hikes)
    finally:
        await db.close_pool()


def main(argv: list[str] | None = None) -> int:
    # Arguments are fully validated here, before anything touches the store.
    args = build_parser().parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    if settings.STORE_BACKEND == "memory":
        print("STORE_BACKEND=memory keeps nothing between processes; nothing to seed.", file=sys.stderr)
        return 1
    settings.validate()

    try:
        asyncio.run(_run(args.name, args.hikes))
    except StoreUnavailable as e:
        logger.error("Seeding failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
