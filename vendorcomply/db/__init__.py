"""Database package — async SQLAlchemy engine, session factory, Base."""
from vendorcomply.db.base import Base, async_session_factory, create_all, engine, get_db

__all__ = ["Base", "async_session_factory", "create_all", "engine", "get_db"]
