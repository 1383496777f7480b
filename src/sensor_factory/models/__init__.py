"""SQLAlchemy models for partition files."""

from .measurement import Measurement

__all__ = ["Measurement"]
