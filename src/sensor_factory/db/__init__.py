"""Database configuration and utilities."""

from .session import Base, create_partition_engine

__all__ = ["Base", "create_partition_engine"]
