"""
Tab library scanning.

Walks the two-level library tree (artist folder -> song folder -> files),
classifies song files by role and attaches each song to its sidecar
metadata record.
"""

import os
import unicodedata
from pathlib import Path
from typing import Callable, Iterable, Optional

from loguru import logger

from .metadata_store import MetadataStore
from .models import DOCUMENT_EXTENSIONS, MEDIA_EXTENSIONS, Artist, Song


ProgressCallback = Callable[[Song], None]


def catalog_sort_key(name: str) -> tuple[str, str, str]:
    """Locale-aware, case-insensitive sort key.

    Accents are folded onto their base letter for the primary comparison, so
    "élan" sorts between "Adèle" and "Zoé" instead of after "z".
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), name.casefold(), name)


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def _list_dir(directory: Path) -> list[Path]:
    """List a directory's entries sorted by name. Raises OSError."""
    with os.scandir(directory) as entries:
        names = sorted(entry.name for entry in entries)
    return [directory / name for name in names]


def _is_dir(path: Path) -> bool:
    """Path.is_dir that logs and returns False when the entry can't be stat'ed."""
    try:
        return path.is_dir()
    except OSError as e:
        logger.warning(f"Could not inspect {path}, skipping: {e}")
        return False


def classify_files(paths: Iterable[Path]) -> tuple[Optional[Path], Optional[Path]]:
    """Pick the document and media file for a song.

    The first path (in iteration order) with a matching extension wins for
    each role. Extensions are compared case-insensitively.

    Returns:
        (document_path, media_path), either may be None
    """
    document = None
    media = None
    for path in paths:
        ext = path.suffix.lower()
        if document is None and ext in DOCUMENT_EXTENSIONS:
            document = path
        elif media is None and ext in MEDIA_EXTENSIONS:
            media = path
        if document is not None and media is not None:
            break
    return document, media


def scan_song_folder(folder: Path, store: MetadataStore) -> Song:
    """Build a Song from one song folder.

    Raises:
        OSError: If the folder cannot be listed
    """
    files = [
        path for path in _list_dir(folder) if not is_hidden(path) and path.is_file()
    ]
    document, media = classify_files(files)
    metadata = store.load_or_create(folder)

    return Song(
        id=metadata.song_id,
        title=folder.name,
        folder_path=folder,
        document_path=document,
        media_path=media,
        status=metadata.status,
    )


def scan_artist_folder(
    folder: Path, store: MetadataStore, progress_callback: Optional[ProgressCallback] = None
) -> Artist:
    """Build an Artist and its songs from one artist folder.

    An unreadable artist folder yields an artist with no songs; an unreadable
    song folder is skipped. Both are logged.
    """
    artist = Artist(name=folder.name, folder_path=folder)

    try:
        children = _list_dir(folder)
    except OSError as e:
        logger.warning(f"Could not list artist folder {folder}: {e}")
        return artist

    for child in children:
        if not _is_dir(child):
            continue
        try:
            song = scan_song_folder(child, store)
        except OSError as e:
            logger.warning(f"Could not list song folder {child}: {e}")
            continue

        artist.songs.append(song)
        if progress_callback:
            progress_callback(song)

    artist.songs.sort(key=lambda song: catalog_sort_key(song.title))
    return artist


def scan_library(
    root: Path,
    store: Optional[MetadataStore] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> list[Artist]:
    """Scan the library root into a sorted catalog.

    Artists are included even when they have no songs. The result is sorted
    by artist name and each artist's songs by title, independent of
    filesystem listing order. Creates sidecar metadata for song folders that
    don't have one yet.

    Args:
        root: Library root directory
        store: Metadata store to use (a default one is created if omitted)
        progress_callback: Optional callback(song) called for each song found

    Returns:
        List of Artist objects; empty if the root can't be read
    """
    root = Path(root).expanduser()
    store = store or MetadataStore()

    try:
        children = _list_dir(root)
    except OSError as e:
        logger.warning(f"Could not scan library root {root}: {e}")
        return []

    logger.info(f"Scanning library: {root}")

    artists = [
        scan_artist_folder(child, store, progress_callback=progress_callback)
        for child in children
        if _is_dir(child)
    ]
    artists.sort(key=lambda artist: catalog_sort_key(artist.name))

    song_count = sum(len(artist.songs) for artist in artists)
    logger.info(f"Library scan complete: {len(artists)} artists, {song_count} songs")
    return artists


def find_song(artists: list[Artist], artist_name: str, title: str) -> Optional[Song]:
    """Find a song in a catalog by artist name and song title (exact match)."""
    for artist in artists:
        if artist.name != artist_name:
            continue
        for song in artist.songs:
            if song.title == title:
                return song
    return None
