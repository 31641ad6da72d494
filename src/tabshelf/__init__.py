"""Tabshelf - tab and play-along video library manager."""

__version__ = "0.1.0"
