"""Avalon tracker: records finished Avalon games and computes standings."""

__version__ = "0.1.0"
