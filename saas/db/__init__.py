"""Database helpers (engine/session/schema export)."""

from .session import Base, create_schema, get_engine, get_session, reset_engine

__all__ = ["Base", "create_schema", "get_engine", "get_session", "reset_engine"]
