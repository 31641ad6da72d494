"""
Tab library domain models.

Contains the persisted per-song metadata record and the in-memory catalog
(artists and songs) built from the library folder tree.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional


CURRENT_SCHEMA_VERSION = "1.0"

# Reserved names inside a song folder
SIDECAR_FILENAME = ".metadata.json"
BACKUP_SUFFIX = ".backup"
TEMP_SUFFIX = ".tmp"

DOCUMENT_EXTENSIONS = frozenset({".pdf"})
MEDIA_EXTENSIONS = frozenset({".mp4", ".mov", ".m4v"})
SUPPORTED_EXTENSIONS = DOCUMENT_EXTENSIONS | MEDIA_EXTENSIONS


class SongStatus(Enum):
    """Practice status of a song.

    NONE is a real member rather than a missing value so call sites can
    match on all three cases. It has no wire token: an unset status is
    stored by leaving the key out of the sidecar file.
    """

    NONE = None
    IN_PROGRESS = "en_cours"
    DONE = "termine"

    @property
    def token(self) -> Optional[str]:
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_token(cls, token: Optional[str]) -> "SongStatus":
        """Map a sidecar token (or None) to a status.

        Raises:
            ValueError: If the token is not a known status
        """
        if token is None:
            return cls.NONE
        for status in (cls.IN_PROGRESS, cls.DONE):
            if status.value == token:
                return status
        raise ValueError(f"Unknown status token: {token!r}")


_DISPLAY_NAMES = {
    SongStatus.NONE: "No status",
    SongStatus.IN_PROGRESS: "In progress",
    SongStatus.DONE: "Done",
}


@dataclass(frozen=True)
class SongMetadata:
    """Persisted metadata for one song folder (the sidecar record)."""

    version: str
    song_id: uuid.UUID
    status: SongStatus
    created_at: datetime
    last_modified: datetime

    def __post_init__(self) -> None:
        # Sidecars store UTC instants; a naive value would not survive a round trip
        for name in ("created_at", "last_modified"):
            if getattr(self, name).tzinfo is None:
                raise ValueError(f"{name} must be a timezone-aware datetime")

    @classmethod
    def new(cls, now: datetime) -> "SongMetadata":
        """Synthesize a fresh record with a new stable id and no status."""
        return cls(
            version=CURRENT_SCHEMA_VERSION,
            song_id=uuid.uuid4(),
            status=SongStatus.NONE,
            created_at=now,
            last_modified=now,
        )

    def with_status(self, status: SongStatus, now: datetime) -> "SongMetadata":
        """Return a copy with a new status and bumped last_modified."""
        return replace(self, status=status, last_modified=now)


@dataclass
class Song:
    """A song folder as seen by the catalog.

    `id` comes from the sidecar record and is stable across scans. Title and
    file paths are derived from the folder on every scan and never persisted.
    """

    id: uuid.UUID
    title: str
    folder_path: Path
    document_path: Optional[Path] = None
    media_path: Optional[Path] = None
    status: SongStatus = SongStatus.NONE


@dataclass
class Artist:
    """An artist folder. `id` is regenerated on every scan; the name is the identity."""

    name: str
    folder_path: Path
    songs: list[Song] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)
