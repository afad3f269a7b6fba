"""Bakery management backend: configuration, SQLite storage and Flask handlers."""

__version__ = "0.1.0"