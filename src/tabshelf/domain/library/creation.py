"""
Artist and song folder creation.

Used by import flows to add content to the library. Folder names must be
unique and nothing existing is ever overwritten, so the scanner and the
metadata store can rely on one song folder per title.
"""

import shutil
from pathlib import Path
from typing import Iterable

from loguru import logger

from .models import SUPPORTED_EXTENSIONS


INVALID_NAME_CHARACTERS = frozenset(':/\\?*|"<>')


class LibraryCreationError(Exception):
    """Base exception for library creation operations."""

    pass


class AlreadyExistsError(LibraryCreationError):
    """Raised when the target folder already exists."""

    def __init__(self, path: Path, message: str = None):
        self.path = path
        super().__init__(message or f"Folder already exists: {path}")


class InvalidNameError(LibraryCreationError):
    """Raised when an artist or song name can't be used as a folder name."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name {name!r}: {reason}")


class LibraryIOError(LibraryCreationError):
    """Raised when a filesystem operation fails during creation."""

    pass


def validate_folder_name(name: str) -> str:
    """Validate a user-supplied artist or song name.

    Args:
        name: Raw name as typed by the user

    Returns:
        The name with surrounding whitespace removed

    Raises:
        InvalidNameError: If the name is empty or not a safe folder name
    """
    cleaned = name.strip()
    if not cleaned:
        raise InvalidNameError(name, "name is empty")
    bad = sorted(set(cleaned) & INVALID_NAME_CHARACTERS)
    if bad:
        raise InvalidNameError(name, f"contains invalid characters: {' '.join(bad)}")
    if cleaned in (".", ".."):
        raise InvalidNameError(name, "reserved name")
    if cleaned.startswith("."):
        raise InvalidNameError(name, "name cannot start with '.'")
    return cleaned


def _require_root(root: Path) -> Path:
    root = Path(root).expanduser()
    if not root.is_dir():
        raise LibraryIOError(f"Library root is not a directory: {root}")
    return root


def create_artist_folder(name: str, root: Path) -> Path:
    """Create a new, empty artist folder under the library root.

    Returns:
        Path of the created folder

    Raises:
        InvalidNameError: If the name is not a valid folder name
        AlreadyExistsError: If the artist folder already exists
        LibraryIOError: If the root is missing or the folder can't be created
    """
    artist_name = validate_folder_name(name)
    artist_folder = _require_root(root) / artist_name

    if artist_folder.exists():
        raise AlreadyExistsError(artist_folder, f"An artist named '{artist_name}' already exists")

    try:
        artist_folder.mkdir()
    except FileExistsError as e:
        raise AlreadyExistsError(artist_folder) from e
    except OSError as e:
        raise LibraryIOError(f"Could not create artist folder {artist_folder}: {e}") from e

    logger.info(f"Created artist folder: {artist_folder}")
    return artist_folder


def create_song_folder(
    artist_name: str, title: str, source_files: Iterable[Path], root: Path
) -> Path:
    """Create a song folder and copy its files into it.

    Each source file with a supported extension is copied as
    `<title><ext>` (extension lowercased); other files are skipped. The
    artist folder is created if needed. If any copy fails the new song
    folder is removed again.

    Args:
        artist_name: Artist folder name
        title: Song title (becomes the folder name)
        source_files: Files to import
        root: Library root directory

    Returns:
        Path of the created song folder

    Raises:
        InvalidNameError: If the artist name or title is not a valid folder name
        AlreadyExistsError: If the song folder already exists
        LibraryIOError: If a folder can't be created or a file can't be copied
    """
    artist_name = validate_folder_name(artist_name)
    song_title = validate_folder_name(title)
    artist_folder = _require_root(root) / artist_name

    if not artist_folder.exists():
        try:
            artist_folder.mkdir()
        except OSError as e:
            raise LibraryIOError(f"Could not create artist folder {artist_folder}: {e}") from e

    song_folder = artist_folder / song_title
    if song_folder.exists():
        raise AlreadyExistsError(
            song_folder, f"A song named '{song_title}' already exists for this artist"
        )

    try:
        song_folder.mkdir()
    except FileExistsError as e:
        raise AlreadyExistsError(song_folder) from e
    except OSError as e:
        raise LibraryIOError(f"Could not create song folder {song_folder}: {e}") from e

    copied = 0
    for source in source_files:
        source = Path(source)
        ext = source.suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            logger.debug(f"Skipping unsupported file: {source}")
            continue

        destination = song_folder / f"{song_title}{ext}"
        try:
            if destination.exists():
                raise FileExistsError(f"{destination.name} was already imported")
            shutil.copyfile(source, destination)
        except OSError as e:
            _remove_partial_folder(song_folder)
            raise LibraryIOError(f"Could not copy {source.name}: {e}") from e
        copied += 1

    logger.info(f"Created song folder: {song_folder} ({copied} files)")
    return song_folder


def _remove_partial_folder(folder: Path) -> None:
    try:
        shutil.rmtree(folder)
    except OSError as e:
        logger.error(f"Could not remove partially created folder {folder}: {e}")
