"""Async theming services built on the extraction pipeline."""

from .theme import CoverThemeService, ThemeState

__all__ = ["CoverThemeService", "ThemeState"]
