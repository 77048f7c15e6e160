"""Persistence adapter for recorded games."""

from .manager import DatabaseManager

__all__ = ["DatabaseManager"]
