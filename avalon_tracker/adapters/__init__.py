"""Adapters layer for the Avalon tracker.

This layer contains the adapters that translate between the core domain
and external systems (the database and game sheet documents).
"""
