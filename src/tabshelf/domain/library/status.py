"""
Song status updates.

The only write path that changes a song's status. Callers rescan afterwards
to refresh their catalog; the update itself is correct without one.
"""

from typing import Optional

from loguru import logger

from .metadata_store import MetadataStore
from .models import Song, SongStatus


STATUS_SAVE_FAILED_MESSAGE = (
    "Could not save the status for '{title}'. Check the folder permissions."
)


def set_song_status(
    song: Song, status: SongStatus, store: Optional[MetadataStore] = None
) -> bool:
    """Persist a new status for a song.

    Loads (or creates) the song's metadata, replaces its status, bumps
    last_modified and saves. Setting the same status twice is allowed and
    still advances last_modified.

    Args:
        song: Song to update (only its folder path is used)
        status: New status, SongStatus.NONE to clear it
        store: Metadata store to use (a default one is created if omitted)

    Returns:
        True if the new status was saved, False otherwise
    """
    store = store or MetadataStore()
    metadata = store.load_or_create(song.folder_path)
    updated = metadata.with_status(status, store.clock())

    saved = store.save(updated, song.folder_path)
    if saved:
        logger.info(f"Status for '{song.title}' set to {status.display_name}")
    else:
        logger.error(f"Failed to save status for '{song.title}' at {song.folder_path}")
    return saved
