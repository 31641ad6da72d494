"""
Tests for song status updates.
"""

import errno
from pathlib import Path
from unittest.mock import patch

from tabshelf.domain.library.codec import decode_metadata
from tabshelf.domain.library.models import SIDECAR_FILENAME, SongStatus
from tabshelf.domain.library.scanner import find_song, scan_library
from tabshelf.domain.library.status import STATUS_SAVE_FAILED_MESSAGE, set_song_status


def read_sidecar(folder: Path):
    return decode_metadata((folder / SIDECAR_FILENAME).read_bytes())


class TestSetSongStatus:
    """Test the status update transaction."""

    def test_end_to_end_status_survives_rescan(self, tmp_path, store):
        """Test scan -> set status -> rescan keeps the id and shows the status."""
        root = tmp_path / "Lib"
        folder = root / "ArtistA" / "Song1"
        folder.mkdir(parents=True)
        (folder / "Song1.pdf").write_bytes(b"%PDF")

        song = find_song(scan_library(root, store), "ArtistA", "Song1")
        first = read_sidecar(folder)
        assert first.song_id == song.id
        assert first.status is SongStatus.NONE

        assert set_song_status(song, SongStatus.IN_PROGRESS, store) is True

        rescanned = find_song(scan_library(root, store), "ArtistA", "Song1")
        assert rescanned.id == song.id
        assert rescanned.status is SongStatus.IN_PROGRESS

    def test_is_idempotent_and_advances_last_modified(self, library, store):
        song = scan_library(library, store)[0].songs[0]

        assert set_song_status(song, SongStatus.DONE, store)
        first = read_sidecar(song.folder_path)
        assert set_song_status(song, SongStatus.DONE, store)
        second = read_sidecar(song.folder_path)

        assert first.status is second.status is SongStatus.DONE
        assert second.last_modified > first.last_modified
        assert second.song_id == first.song_id
        assert second.created_at == first.created_at

    def test_clearing_status(self, library, store):
        song = scan_library(library, store)[0].songs[0]
        set_song_status(song, SongStatus.IN_PROGRESS, store)
        set_song_status(song, SongStatus.NONE, store)
        assert read_sidecar(song.folder_path).status is SongStatus.NONE

    def test_does_not_touch_other_songs(self, library, store):
        song1, song2 = scan_library(library, store)[0].songs
        before = (song2.folder_path / SIDECAR_FILENAME).read_bytes()

        set_song_status(song1, SongStatus.DONE, store)

        assert (song2.folder_path / SIDECAR_FILENAME).read_bytes() == before

    def test_works_without_prior_scan_sidecar(self, library, store):
        """Test a song whose sidecar was deleted gets one on update."""
        song = scan_library(library, store)[0].songs[0]
        (song.folder_path / SIDECAR_FILENAME).unlink()

        assert set_song_status(song, SongStatus.DONE, store)
        assert read_sidecar(song.folder_path).status is SongStatus.DONE

    def test_save_failure_returns_false(self, library, store):
        song = scan_library(library, store)[0].songs[0]
        before = read_sidecar(song.folder_path)

        with patch(
            "tabshelf.domain.library.metadata_store.os.replace",
            side_effect=OSError(errno.EACCES, "Permission denied"),
        ):
            assert set_song_status(song, SongStatus.DONE, store) is False

        assert read_sidecar(song.folder_path) == before

    def test_failure_message_names_song(self):
        message = STATUS_SAVE_FAILED_MESSAGE.format(title="Song1")
        assert "Song1" in message
        assert "permission" in message.lower()
