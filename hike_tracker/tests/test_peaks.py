"""Tests for the static peak list loader."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from hike_tracker.config import settings
from hike_tracker.services.peaks import load_peaks


def test_load_peaks(tmp_path):
    path = tmp_path / "peaks.json"
    path.write_text(json.dumps([{"name": "Mount Hood", "elevation": 3429}]))

    peaks = load_peaks(path)

    assert len(peaks) == 1
    assert peaks[0].name == "Mount Hood"
    assert peaks[0].elevation == 3429


def test_bundled_peaks_file_loads():
    peaks = load_peaks(settings.PEAKS_FILE)

    assert peaks
    assert all(p.elevation > 0 for p in peaks)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_peaks(tmp_path / "absent.json")


@pytest.mark.parametrize(
    "payload",
    [
        '{"name": "not a list", "elevation": 1}',
        '[{"name": "Too High", "elevation": 70000}]',
        '[{"name": "No Elevation"}]',
        "not json",
    ],
)
def test_malformed_file(tmp_path, payload):
    path = tmp_path / "peaks.json"
    path.write_text(payload)

    with pytest.raises(ValidationError):
        load_peaks(path)
