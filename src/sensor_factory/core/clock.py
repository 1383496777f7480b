"""Hourly tick sequence over a calendar range."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo

ONE_HOUR = timedelta(hours=1)

PartitionKey = tuple[int, int]


@dataclass(frozen=True)
class Tick:
    """One hourly instant, carrying its wall-clock fields in the run's zone."""

    instant: datetime

    @property
    def epoch_seconds(self) -> int:
        return int(self.instant.timestamp())

    @property
    def day(self) -> int:
        return self.instant.day

    @property
    def hour(self) -> int:
        return self.instant.hour

    @property
    def partition_key(self) -> PartitionKey:
        return self.instant.year, self.instant.month

    @property
    def label(self) -> str:
        """Return the ``YYYY-MM`` label of the tick's month."""
        return f"{self.instant.year:04d}-{self.instant.month:02d}"

    @property
    def starts_month(self) -> bool:
        """Return True for the first hour of a calendar month.

        A repeated midnight after a DST fall-back (``fold == 1``) is not a new month.
        """
        return self.day == 1 and self.hour == 0 and not self.instant.fold


class HourlyClock:
    """Lazy, restartable sequence of hourly ticks from ``start`` through ``end``.

    Steps are absolute hours, so a DST transition repeats or skips a wall-clock
    hour rather than shifting the sequence. Both bounds are inclusive; a start
    after the end yields nothing.
    """

    def __init__(self, start: datetime, end: datetime) -> None:
        if start.tzinfo is None or end.tzinfo is None:
            raise ValueError("HourlyClock bounds must be timezone-aware")
        self.start = start
        self.end = end

    @classmethod
    def for_years(cls, start_year: int, span_years: int, tz: tzinfo) -> HourlyClock:
        """Build the clock covering ``[start_year-01-01, (start_year+span)-01-01]``."""
        start = datetime(start_year, 1, 1, tzinfo=tz)
        end = datetime(start_year + span_years, 1, 1, tzinfo=tz)
        return cls(start, end)

    def __iter__(self) -> Iterator[Tick]:
        zone = self.start.tzinfo
        current = self.start.astimezone(UTC)
        end = self.end.astimezone(UTC)
        while current <= end:
            yield Tick(current.astimezone(zone))
            current += ONE_HOUR
