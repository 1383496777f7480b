"""Per-partition engine configuration."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def create_partition_engine(path: Path, *, echo: bool = False) -> Engine:
    """Return an engine bound to the SQLite file at ``path``.

    Each partition file gets its own engine; connections are not pooled so that
    disposing the engine releases the file.
    """
    return create_engine(f"sqlite:///{path}", echo=echo, poolclass=NullPool)


def create_tables(engine_or_connection) -> None:
    """Create all tables on the given engine or connection."""
    # Ensure model modules are imported so that metadata is populated.
    import sensor_factory.models  # noqa: F401

    Base.metadata.create_all(bind=engine_or_connection)
