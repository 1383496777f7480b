"""Hour-by-hour generation across monthly partitions.

The WriteOrchestrator walks an HourlyClock, rolls over to a new partition at
the first hour of every month and writes one row per channel for each tick.
A failed row is logged and counted but never stops the run; failures to open
or commit a partition propagate to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from sensor_factory.core.clock import PartitionKey, Tick
from sensor_factory.services.partition import (
    InsertError,
    PartitionHandle,
    PartitionManager,
)
from sensor_factory.services.values import ValueGenerator

# Configure logger for this module
logger = logging.getLogger(__name__)

DEFAULT_CHANNELS = 12


@dataclass(frozen=True)
class TickOutcome:
    """Settled result of one tick's per-channel writes."""

    tick: Tick
    written: int
    failed_channels: tuple[int, ...] = ()

    @property
    def failed(self) -> int:
        return len(self.failed_channels)


@dataclass
class PartitionSummary:
    key: PartitionKey
    path: Path
    rows_written: int = 0
    failed_inserts: int = 0


@dataclass
class RunSummary:
    """What a completed run wrote."""

    partitions: list[PartitionSummary] = field(default_factory=list)
    ticks: int = 0

    @property
    def rows_written(self) -> int:
        return sum(p.rows_written for p in self.partitions)

    @property
    def failed_inserts(self) -> int:
        return sum(p.failed_inserts for p in self.partitions)


class WriteOrchestrator:
    """Drives a tick sequence into partition files.

    Exactly one partition is open at any time. The open partition is always
    closed before the next one is opened, and the last one is closed once the
    clock is exhausted.
    """

    def __init__(
        self,
        clock: Iterable[Tick],
        partitions: PartitionManager,
        values: ValueGenerator,
        *,
        channels: int = DEFAULT_CHANNELS,
    ) -> None:
        self.clock = clock
        self.partitions = partitions
        self.values = values
        self.channels = channels

    def run(self) -> RunSummary:
        """Write every tick of the clock and return a summary.

        Per-partition counts are built from each tick's ``TickOutcome``. If the
        run stops on any exception, the open partition is released without
        committing.

        Raises:
            StorageIOError, SchemaError, CommitError: On the first fatal storage
                failure; the remaining ticks are not written.
        """
        summary = RunSummary()
        handle: PartitionHandle | None = None
        current: PartitionSummary | None = None
        baseline = self.values.baseline

        try:
            for tick in self.clock:
                if tick.starts_month:
                    if handle is not None:
                        self._retire(handle, current, summary)
                    handle = self.partitions.open(tick.partition_key)
                    current = PartitionSummary(key=handle.key, path=handle.path)

                if handle is not None:
                    outcome = self.write_tick(handle, tick, baseline)
                    current.rows_written += outcome.written
                    current.failed_inserts += outcome.failed
                baseline = self.values.advance()
                summary.ticks += 1

            if handle is not None:
                self._retire(handle, current, summary)
        finally:
            if handle is not None and not handle.closed:
                self.partitions.release(handle)
        return summary

    def write_tick(self, handle: PartitionHandle, tick: Tick, baseline: float) -> TickOutcome:
        """Write one row per channel for ``tick`` and wait for all of them to settle."""
        timestamp = tick.epoch_seconds
        written = 0
        failed: list[int] = []
        for channel in range(1, self.channels + 1):
            value = self.values.reading(baseline, channel)
            try:
                self.partitions.write_hour(handle, channel, value, timestamp)
            except InsertError as exc:
                logger.warning("Skipping measurement: %s", exc)
                failed.append(channel)
            else:
                written += 1
        return TickOutcome(tick=tick, written=written, failed_channels=tuple(failed))

    def _retire(
        self, handle: PartitionHandle, current: PartitionSummary, summary: RunSummary
    ) -> None:
        self.partitions.close(handle)
        summary.partitions.append(current)
