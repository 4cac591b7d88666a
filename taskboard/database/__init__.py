"""Database module."""
from .engine import get_engine, get_session_factory, get_db, init_db, close_db

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "close_db",
]
