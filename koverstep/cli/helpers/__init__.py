"""CLI helper utilities."""

from .theme import Colors, Icons, TableStyles, ThemedConsole


__all__ = ["Colors", "Icons", "TableStyles", "ThemedConsole"]
