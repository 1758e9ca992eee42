"""Tests for the seed command."""

from __future__ import annotations

import argparse
from unittest.mock import AsyncMock

import pytest

from hike_tracker import seed
from hike_tracker.config import settings
from hike_tracker.repos.postgres_tracker_repo import PostgresTrackerStore


class TestParseHike:
    def test_name_and_rank(self):
        hike = seed.parse_hike("Half Dome:2")

        assert hike.name == "Half Dome"
        assert hike.rank == 2

    def test_rank_defaults_to_one(self):
        assert seed.parse_hike("Mount Hood").rank == 1

    def test_splits_on_last_colon(self):
        hike = seed.parse_hike("Trail: North Ridge:3")

        assert hike.name == "Trail: North Ridge"
        assert hike.rank == 3

    @pytest.mark.parametrize("arg", ["Half Dome:abc", "Half Dome:0", "Half Dome:256", ":2", "  :1"])
    def test_invalid(self, arg):
        with pytest.raises(argparse.ArgumentTypeError, match="invalid hike"):
            seed.parse_hike(arg)


class TestMain:
    @pytest.mark.parametrize(
        "argv",
        [
            [],
            ["first", "--hike", "Half Dome:abc"],
            ["first", "--hike", "Mount Hood:1", "--hike", "Half Dome:0"],
            ["   "],
        ],
    )
    def test_bad_arguments_exit_before_touching_store(self, monkeypatch, argv):
        connect = AsyncMock()
        monkeypatch.setattr(PostgresTrackerStore, "connect", connect)

        with pytest.raises(SystemExit) as exc_info:
            seed.main(argv)

        assert exc_info.value.code == 2
        connect.assert_not_called()

    def test_memory_backend_is_refused(self, monkeypatch, capsys):
        monkeypatch.setattr(settings, "STORE_BACKEND", "memory")
        connect = AsyncMock()
        monkeypatch.setattr(PostgresTrackerStore, "connect", connect)

        assert seed.main(["first"]) == 1
        assert "nothing to seed" in capsys.readouterr().err
        connect.assert_not_called()


async def test_seed_appends_hikes_in_order(memory_store, capsys):
    hikes = [seed.parse_hike("Half Dome:2"), seed.parse_hike("Mount Whitney")]

    tracker = await seed.seed(memory_store, "first", hikes)

    assert [(h.name, h.rank) for h in tracker.hikes] == [("Half Dome", 2), ("Mount Whitney", 1)]
    assert (await memory_store.find_by_name("first")).id == tracker.id
    assert "Half Dome (rank 2)" in capsys.readouterr().out


async def test_seed_leaves_existing_tracker(memory_store):
    existing = await memory_store.seed_if_absent("first")

    tracker = await seed.seed(memory_store, "first", [])

    assert tracker.id == existing.id
    assert tracker.created_at == existing.created_at
