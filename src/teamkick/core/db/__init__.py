"""Database utilities - engine and session."""

from src.teamkick.core.db.engine import dispose_engine, get_engine
from src.teamkick.core.db.session import get_session, make_session_factory

__all__ = [
    "dispose_engine",
    "get_engine",
    "get_session",
    "make_session_factory",
]
