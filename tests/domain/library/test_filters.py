"""
Tests for catalog filtering and statistics.
"""

import uuid
from pathlib import Path

import pytest

from tabshelf.domain.library.filters import StatusFilter, catalog_stats, filter_catalog
from tabshelf.domain.library.models import Artist, Song, SongStatus


def song(title: str, status: SongStatus = SongStatus.NONE, pdf: bool = False) -> Song:
    folder = Path("/Lib/x") / title
    return Song(
        id=uuid.uuid4(),
        title=title,
        folder_path=folder,
        document_path=folder / f"{title}.pdf" if pdf else None,
        status=status,
    )


@pytest.fixture
def catalog() -> list[Artist]:
    return [
        Artist(
            name="Adèle",
            folder_path=Path("/Lib/Adèle"),
            songs=[
                song("Hello", SongStatus.DONE, pdf=True),
                song("Skyfall", SongStatus.IN_PROGRESS),
            ],
        ),
        Artist(
            name="Muse",
            folder_path=Path("/Lib/Muse"),
            songs=[song("Hysteria", SongStatus.IN_PROGRESS, pdf=True), song("Uprising")],
        ),
        Artist(name="Empty", folder_path=Path("/Lib/Empty")),
    ]


class TestFilterCatalog:
    """Test status and text filtering."""

    def test_no_filter_returns_everything(self, catalog):
        result = filter_catalog(catalog)
        assert [a.name for a in result] == ["Adèle", "Muse", "Empty"]

    def test_status_filter_drops_empty_artists(self, catalog):
        result = filter_catalog(catalog, StatusFilter.DONE)
        assert [a.name for a in result] == ["Adèle"]
        assert [s.title for s in result[0].songs] == ["Hello"]

    def test_in_progress_filter(self, catalog):
        result = filter_catalog(catalog, StatusFilter.IN_PROGRESS)
        assert [(a.name, [s.title for s in a.songs]) for a in result] == [
            ("Adèle", ["Skyfall"]),
            ("Muse", ["Hysteria"]),
        ]

    def test_artist_name_match_keeps_all_songs(self, catalog):
        result = filter_catalog(catalog, query="muse")
        assert [a.name for a in result] == ["Muse"]
        assert len(result[0].songs) == 2

    def test_song_title_match_keeps_only_matches(self, catalog):
        result = filter_catalog(catalog, query="SKY")
        assert [a.name for a in result] == ["Adèle"]
        assert [s.title for s in result[0].songs] == ["Skyfall"]

    def test_status_and_query_combined(self, catalog):
        result = filter_catalog(catalog, StatusFilter.IN_PROGRESS, "muse")
        assert [s.title for s in result[0].songs] == ["Hysteria"]

    def test_no_match(self, catalog):
        assert filter_catalog(catalog, query="zzz") == []

    def test_does_not_mutate_input(self, catalog):
        filter_catalog(catalog, StatusFilter.DONE, "hello")
        assert len(catalog[0].songs) == 2
        assert len(catalog[1].songs) == 2

    def test_filtered_artist_keeps_id(self, catalog):
        result = filter_catalog(catalog, StatusFilter.DONE)
        assert result[0].id == catalog[0].id


class TestCatalogStats:
    """Test catalog statistics."""

    def test_counts(self, catalog):
        stats = catalog_stats(catalog)
        assert stats == {
            "artists": 3,
            "songs": 4,
            "in_progress": 2,
            "done": 1,
            "no_status": 1,
            "with_document": 2,
            "with_media": 0,
        }

    def test_empty_catalog(self):
        assert catalog_stats([])["songs"] == 0
