"""
Per-song sidecar metadata persistence.

Each song folder owns one sidecar file holding its SongMetadata. This module
implements the load-or-create protocol (including corruption backup and
schema version gating) and the atomic save.
"""

import errno
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from .codec import DecodeError, decode_metadata, encode_metadata
from .models import (
    BACKUP_SUFFIX,
    CURRENT_SCHEMA_VERSION,
    SIDECAR_FILENAME,
    TEMP_SUFFIX,
    SongMetadata,
)


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _version_tuple(version: str) -> Optional[tuple[int, ...]]:
    """Parse "1.0" style versions; trailing zero components are dropped."""
    parts = version.split(".")
    if not all(part.isascii() and part.isdigit() for part in parts):
        return None
    numbers = tuple(int(part) for part in parts)
    while len(numbers) > 1 and numbers[-1] == 0:
        numbers = numbers[:-1]
    return numbers


def migrate_metadata(record: SongMetadata) -> Optional[SongMetadata]:
    """Bring a decoded record up to the current schema version.

    Records from an older version keep their song id, status and
    timestamps; only the version field is rewritten. Records written by any
    newer version (including a newer minor of the current major), or with an
    unreadable version string, cannot be trusted and yield None.

    Args:
        record: Decoded sidecar record

    Returns:
        The current-version record, or None if it cannot be migrated
    """
    if record.version == CURRENT_SCHEMA_VERSION:
        return record

    version = _version_tuple(record.version)
    current = _version_tuple(CURRENT_SCHEMA_VERSION)
    if version is None or current is None or version > current:
        return None

    return SongMetadata(
        version=CURRENT_SCHEMA_VERSION,
        song_id=record.song_id,
        status=record.status,
        created_at=record.created_at,
        last_modified=record.last_modified,
    )


class MetadataStore:
    """Reads and writes sidecar metadata for song folders.

    Holds no per-folder state; one instance can be shared by the scanner,
    the status transaction and anything else that needs it.
    """

    def __init__(
        self, clock: Optional[Clock] = None, sidecar_name: str = SIDECAR_FILENAME
    ) -> None:
        self.clock = clock or utc_now
        self.sidecar_name = sidecar_name

    def sidecar_path(self, folder: Path) -> Path:
        return Path(folder) / self.sidecar_name

    def backup_path(self, folder: Path) -> Path:
        return Path(folder) / (self.sidecar_name + BACKUP_SUFFIX)

    def load_or_create(self, folder: Path) -> SongMetadata:
        """Load the folder's metadata, creating it if missing or unusable.

        Never raises: read errors, corrupt content and untrusted versions all
        fall back to a freshly synthesized record, which is saved in place.
        A corrupt, unreadable or untrusted file is first copied to the backup
        path, best effort.

        Args:
            folder: Song folder path

        Returns:
            A usable SongMetadata at the current schema version
        """
        folder = Path(folder)
        path = self.sidecar_path(folder)

        try:
            data = path.read_bytes()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not read metadata at {path}, recreating: {e}")
            self._backup(folder)
        else:
            try:
                record = decode_metadata(data)
            except DecodeError as e:
                logger.warning(f"Corrupted metadata at {folder.name}, recreating: {e}")
                self._backup(folder)
            else:
                migrated = migrate_metadata(record)
                if migrated is record:
                    return record
                if migrated is not None:
                    logger.info(
                        f"Upgrading metadata at {folder.name} "
                        f"from version {record.version} to {migrated.version}"
                    )
                    self.save(migrated, folder)
                    return migrated
                logger.warning(
                    f"Unsupported metadata version {record.version!r} "
                    f"at {folder.name}, recreating"
                )
                self._backup(folder)

        record = SongMetadata.new(self.clock())
        self.save(record, folder)
        return record

    def save(self, record: SongMetadata, folder: Path) -> bool:
        """Write a record to the folder's sidecar file atomically.

        The encoded bytes go to a temp file next to the sidecar, which is
        fsynced and then renamed over the sidecar. Readers see either the old
        file or the new one.

        Args:
            record: Metadata to persist
            folder: Song folder path

        Returns:
            True if successful, False otherwise
        """
        path = self.sidecar_path(folder)
        temp_path = str(path) + TEMP_SUFFIX

        try:
            data = encode_metadata(record)
            with open(temp_path, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())

            # Atomic replace
            os.replace(temp_path, path)
            return True

        except OSError as e:
            if e.errno in (errno.EACCES, errno.EPERM):
                logger.error(f"Permission denied writing to {path}")
            elif e.errno == errno.ENOSPC:
                logger.error(f"Disk full, cannot write metadata to {path}")
            else:
                logger.error(f"Error saving metadata to {path}: {e}")
            if os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError as cleanup_error:
                    logger.debug(f"Could not remove temp file {temp_path}: {cleanup_error}")
            return False

    def _backup(self, folder: Path) -> None:
        """Copy the current sidecar aside before it gets overwritten. Best effort."""
        source = self.sidecar_path(folder)
        target = self.backup_path(folder)
        try:
            shutil.copyfile(source, target)
            logger.info(f"Backed up unreadable metadata to {target}")
        except OSError as e:
            logger.warning(f"Could not back up metadata at {source}: {e}")
