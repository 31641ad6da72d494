"""Shared fixtures for library domain tests."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from tabshelf.domain.library.metadata_store import MetadataStore


class StepClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture
def clock() -> StepClock:
    return StepClock(datetime(2026, 1, 6, 10, 0, 0, 123456, tzinfo=timezone.utc))


@pytest.fixture
def store(clock) -> MetadataStore:
    return MetadataStore(clock=clock)


@pytest.fixture
def library(tmp_path: Path) -> Path:
    """Create a small tab library.

    Lib/
      ArtistA/Song1/Song1.pdf
      ArtistA/Song2/Song2.pdf, Song2.mp4
      ArtistB/            (no songs)
      notes.txt           (ignored, not a folder)
    """
    root = tmp_path / "Lib"
    song1 = root / "ArtistA" / "Song1"
    song2 = root / "ArtistA" / "Song2"
    song1.mkdir(parents=True)
    song2.mkdir(parents=True)
    (root / "ArtistB").mkdir()

    (song1 / "Song1.pdf").write_bytes(b"%PDF-1.4 song1")
    (song2 / "Song2.pdf").write_bytes(b"%PDF-1.4 song2")
    (song2 / "Song2.mp4").write_bytes(b"video")
    (root / "notes.txt").write_text("not an artist")

    return root
