"""SQLite reference host for sqlbridge."""

from sqlbridge.adapters.sqlite.driver import SqliteHostDatabase

__all__ = ("SqliteHostDatabase",)
