"""
Catalog queries: status filtering, text search and statistics.
"""

from enum import Enum
from typing import Any

from .models import Artist, SongStatus


class StatusFilter(Enum):
    ALL = "all"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    def matches(self, status: SongStatus) -> bool:
        if self is StatusFilter.ALL:
            return True
        if self is StatusFilter.IN_PROGRESS:
            return status is SongStatus.IN_PROGRESS
        return status is SongStatus.DONE


def _copy_with_songs(artist: Artist, songs: list) -> Artist:
    return Artist(name=artist.name, folder_path=artist.folder_path, songs=songs, id=artist.id)


def filter_catalog(
    artists: list[Artist], status_filter: StatusFilter = StatusFilter.ALL, query: str = ""
) -> list[Artist]:
    """Filter a catalog by song status and a search string.

    The status filter runs first and drops artists left without songs. Then
    an artist whose name matches the query is kept with all its remaining
    songs; otherwise only songs whose title matches are kept. Matching is
    case-insensitive substring search. The input catalog is not modified.
    """
    result = artists
    if status_filter is not StatusFilter.ALL:
        result = []
        for artist in artists:
            songs = [song for song in artist.songs if status_filter.matches(song.status)]
            if songs:
                result.append(_copy_with_songs(artist, songs))

    needle = query.strip().casefold()
    if not needle:
        return list(result)

    matched = []
    for artist in result:
        if needle in artist.name.casefold():
            matched.append(artist)
            continue
        songs = [song for song in artist.songs if needle in song.title.casefold()]
        if songs:
            matched.append(_copy_with_songs(artist, songs))
    return matched


def catalog_stats(artists: list[Artist]) -> dict[str, Any]:
    """Get statistics about a catalog."""
    songs = [song for artist in artists for song in artist.songs]
    return {
        "artists": len(artists),
        "songs": len(songs),
        "in_progress": sum(1 for song in songs if song.status is SongStatus.IN_PROGRESS),
        "done": sum(1 for song in songs if song.status is SongStatus.DONE),
        "no_status": sum(1 for song in songs if song.status is SongStatus.NONE),
        "with_document": sum(1 for song in songs if song.document_path is not None),
        "with_media": sum(1 for song in songs if song.media_path is not None),
    }
