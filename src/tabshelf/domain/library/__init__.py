"""Library domain - tab library scanning and song metadata.

This domain handles:
- Artist/song catalog models and the persisted song metadata record
- Sidecar metadata encoding and crash-safe persistence
- Library scanning
- Song status updates
- Artist and song folder creation
- Catalog filtering and statistics
"""

# Models
from .models import (
    CURRENT_SCHEMA_VERSION,
    SIDECAR_FILENAME,
    Artist,
    Song,
    SongMetadata,
    SongStatus,
)

# Sidecar codec and store
from .codec import DecodeError, decode_metadata, encode_metadata
from .metadata_store import MetadataStore, migrate_metadata

# Scanning and status
from .scanner import catalog_sort_key, classify_files, find_song, scan_library
from .status import STATUS_SAVE_FAILED_MESSAGE, set_song_status

# Creation
from .creation import (
    AlreadyExistsError,
    InvalidNameError,
    LibraryCreationError,
    LibraryIOError,
    create_artist_folder,
    create_song_folder,
)

# Queries
from .filters import StatusFilter, catalog_stats, filter_catalog

__all__ = [
    # Models
    "CURRENT_SCHEMA_VERSION",
    "SIDECAR_FILENAME",
    "Artist",
    "Song",
    "SongMetadata",
    "SongStatus",
    # Codec and store
    "DecodeError",
    "decode_metadata",
    "encode_metadata",
    "MetadataStore",
    "migrate_metadata",
    # Scanner and status
    "catalog_sort_key",
    "classify_files",
    "find_song",
    "scan_library",
    "STATUS_SAVE_FAILED_MESSAGE",
    "set_song_status",
    # Creation
    "AlreadyExistsError",
    "InvalidNameError",
    "LibraryCreationError",
    "LibraryIOError",
    "create_artist_folder",
    "create_song_folder",
    # Queries
    "StatusFilter",
    "catalog_stats",
    "filter_catalog",
]
