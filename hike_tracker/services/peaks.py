"""Loader for the static peak list shown at /peaks."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter

from hike_tracker.models.peak import HikePeak

logger = logging.getLogger(__name__)

_PEAK_LIST = TypeAdapter(list[HikePeak])


def load_peaks(path: str | Path) -> list[HikePeak]:
    """
    Read and validate the peak list. Called once at startup.

    Raises:
        OSError: If the file cannot be read
        pydantic.ValidationError: If it is not a JSON array of {name, elevation}
    """
    raw = Path(path).read_text(encoding="utf-8")
    peaks = _PEAK_LIST.validate_json(raw)
    logger.info("Loaded %d peaks from %s", len(peaks), path)
    return peaks
