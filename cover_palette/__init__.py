"""Dominant-colour palette extraction for book cover theming."""

__version__ = "0.1.0"
