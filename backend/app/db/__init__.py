"""Database connections package."""

from app.db.postgres import async_session, engine, get_session, init_db

__all__ = ["get_session", "init_db", "engine", "async_session"]
