"""
Tabshelf CLI - Entry point

Scans the tab library, updates song status and imports new artists/songs.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.tree import Tree

from tabshelf.core import (
    create_default_config,
    get_console,
    get_log_file_path,
    load_config,
    log,
    setup_loguru,
)
from tabshelf.domain.library import (
    STATUS_SAVE_FAILED_MESSAGE,
    LibraryCreationError,
    MetadataStore,
    SongStatus,
    StatusFilter,
    catalog_stats,
    create_artist_folder,
    create_song_folder,
    filter_catalog,
    find_song,
    scan_library,
    set_song_status,
)


STATUS_CHOICES = {
    "none": SongStatus.NONE,
    "in-progress": SongStatus.IN_PROGRESS,
    "done": SongStatus.DONE,
}

STATUS_STYLES = {
    SongStatus.NONE: "dim",
    SongStatus.IN_PROGRESS: "yellow",
    SongStatus.DONE: "green",
}


def render_catalog(artists, root: Path) -> Tree:
    """Build a Rich tree of artists and songs."""
    tree = Tree(f"[bold]{escape(str(root))}[/bold]")
    for artist in artists:
        branch = tree.add(f"[bold cyan]{escape(artist.name)}[/bold cyan] ({len(artist.songs)})")
        for song in artist.songs:
            files = []
            if song.document_path:
                files.append("pdf")
            if song.media_path:
                files.append("video")
            style = STATUS_STYLES[song.status]
            label = f"{escape(song.title)} [{style}]{song.status.display_name}[/{style}]"
            if files:
                label += f" [dim]({', '.join(files)})[/dim]"
            branch.add(label)
    return tree


def run_scan(root: Path, status: str = "all", search: str = "") -> int:
    """Scan the library and print the catalog.

    Returns:
        Exit code (0 for success)
    """
    artists = scan_library(root, MetadataStore())
    shown = filter_catalog(artists, StatusFilter(status), search)

    console = get_console()
    console.print(render_catalog(shown, root))

    stats = catalog_stats(artists)
    console.print(
        f"{stats['artists']} artists, {stats['songs']} songs "
        f"({stats['in_progress']} in progress, {stats['done']} done)"
    )
    return 0


def run_set_status(root: Path, artist_name: str, title: str, status: str) -> int:
    """Set the status of one song.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    store = MetadataStore()
    song = find_song(scan_library(root, store), artist_name, title)
    if song is None:
        log(f"Song not found: {artist_name} / {title}", level="error")
        return 1

    new_status = STATUS_CHOICES[status]
    if not set_song_status(song, new_status, store):
        log(STATUS_SAVE_FAILED_MESSAGE.format(title=song.title), level="error")
        return 1

    log(f"'{song.title}' is now: {new_status.display_name}", level="success")
    return 0


def run_add_artist(root: Path, name: str) -> int:
    try:
        path = create_artist_folder(name, root)
    except LibraryCreationError as e:
        log(str(e), level="error")
        return 1

    log(f"Created artist: {path.name}", level="success")
    return 0


def run_add_song(root: Path, artist_name: str, title: str, files: list[str]) -> int:
    try:
        path = create_song_folder(artist_name, title, [Path(f) for f in files], root)
    except LibraryCreationError as e:
        log(str(e), level="error")
        return 1

    log(f"Created song: {path.parent.name} / {path.name}", level="success")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabshelf",
        description="Tabshelf - Tab & play-along video library",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument(
        "--root",
        help="Library root folder (default: [library] root_path from config.toml)",
    )
    parser.add_argument(
        "--config",
        help="Path to config.toml (default: ./config.toml or ~/.config/tabshelf)",
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    scan_parser = subparsers.add_parser("scan", help="Scan the library and list songs")
    scan_parser.add_argument(
        "--status",
        choices=[f.value for f in StatusFilter],
        default=StatusFilter.ALL.value,
        help="Only show songs with this status",
    )
    scan_parser.add_argument("--search", default="", help="Filter by artist or song title")

    status_parser = subparsers.add_parser("status", help="Set the status of a song")
    status_parser.add_argument("artist", help="Artist name")
    status_parser.add_argument("title", help="Song title")
    status_parser.add_argument("status", choices=list(STATUS_CHOICES), help="New status")

    artist_parser = subparsers.add_parser("add-artist", help="Create an artist folder")
    artist_parser.add_argument("name", help="Artist name")

    song_parser = subparsers.add_parser(
        "add-song", help="Create a song folder from PDF/video files"
    )
    song_parser.add_argument("artist", help="Artist name")
    song_parser.add_argument("title", help="Song title")
    song_parser.add_argument("files", nargs="+", help="PDF/MP4/MOV/M4V files to import")

    subparsers.add_parser("default-config", help="Print a default config.toml")

    return parser


def run(argv: Optional[list[str]] = None) -> int:
    """Parse arguments and run a command.

    Returns:
        Exit code (0 success, 1 command failure, 2 usage error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.subcommand is None:
        parser.print_help()
        return 2

    if args.subcommand == "default-config":
        get_console().print(create_default_config(), markup=False, highlight=False)
        return 0

    config = load_config(Path(args.config).expanduser() if args.config else None)
    setup_loguru(
        get_log_file_path(config),
        level=config.logging.level,
        console_output=config.logging.console_output,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
    )

    root_path = args.root or config.library.root_path
    if not root_path:
        log(
            "No library root configured. Pass --root or set [library] root_path in config.toml.",
            level="error",
        )
        return 2
    root = Path(root_path).expanduser()

    if args.subcommand == "scan":
        return run_scan(root, status=args.status, search=args.search)
    elif args.subcommand == "status":
        return run_set_status(root, args.artist, args.title, args.status)
    elif args.subcommand == "add-artist":
        return run_add_artist(root, args.name)
    elif args.subcommand == "add-song":
        return run_add_song(root, args.artist, args.title, args.files)

    parser.print_help()
    return 2


def main() -> None:
    """Main entry point for the tabshelf command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
