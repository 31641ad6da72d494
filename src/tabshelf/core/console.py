"""Centralized Rich Console management.

Provides one shared Rich Console instance for the CLI and the output helpers.
"""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    """Get or create the global Rich Console instance.

    Returns:
        Console: The global Rich Console instance
    """
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console | None) -> None:
    """Replace the global console (None resets to a lazily created default)."""
    global _console
    _console = console
