"""Measurement rows stored in every partition file."""
from sqlalchemy import REAL, Integer
from sqlalchemy.orm import Mapped, mapped_column

from sensor_factory.db.session import Base


class Measurement(Base):
    """One channel reading at one hourly tick."""

    __tablename__ = "Measurements"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    channel: Mapped[int | None] = mapped_column(Integer)
    measured_value: Mapped[float | None] = mapped_column(REAL)
    recorded_time: Mapped[int | None] = mapped_column(Integer)
