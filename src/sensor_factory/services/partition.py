"""Lifecycle of monthly partition files.

This module provides the PartitionManager class that owns one SQLite file per
calendar month. Opening a partition recreates its file, creates the
Measurements table and begins a single long-lived transaction; closing it
commits that transaction and releases the file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection, Engine, RootTransaction
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.dml import Insert

from sensor_factory.core.clock import PartitionKey
from sensor_factory.db.session import create_partition_engine, create_tables
from sensor_factory.models import Measurement

# Configure logger for this module
logger = logging.getLogger(__name__)

FILE_SUFFIX = "-monthly.sqlite"


def format_key(key: PartitionKey) -> str:
    year, month = key
    return f"{year:04d}-{month:02d}"


class PartitionError(RuntimeError):
    """Base exception raised for partition storage failures."""

    def __init__(self, key: PartitionKey, message: str) -> None:
        super().__init__(f"{format_key(key)}: {message}")
        self.key = key


class StorageIOError(PartitionError):
    """Raised when a partition file cannot be removed, created or opened."""


class SchemaError(PartitionError):
    """Raised when the Measurements table cannot be created."""


class InsertError(PartitionError):
    """Raised when a single measurement row cannot be inserted.

    The partition's transaction stays open; callers may keep writing.
    """

    def __init__(self, key: PartitionKey, channel: int, timestamp: int, message: str) -> None:
        super().__init__(key, f"insert failed for channel {channel} at {timestamp}: {message}")
        self.channel = channel
        self.timestamp = timestamp


class CommitError(PartitionError):
    """Raised when a partition's transaction cannot be committed."""


@dataclass
class PartitionHandle:
    """An open partition: its file, connection, transaction and insert statement."""

    key: PartitionKey
    path: Path
    engine: Engine
    connection: Connection
    transaction: RootTransaction
    statement: Insert | None
    rows_written: int = 0
    failed_inserts: int = 0
    closed: bool = field(default=False)

    @property
    def label(self) -> str:
        return format_key(self.key)


class PartitionManager:
    """Opens, writes and closes partition files, holding at most one open at a time."""

    def __init__(self, output_dir: Path | str = ".", *, echo: bool = False) -> None:
        self.output_dir = Path(output_dir)
        self.echo = echo
        self._active: PartitionHandle | None = None

    @property
    def active(self) -> PartitionHandle | None:
        """Return the currently open partition, if any."""
        return self._active

    @staticmethod
    def file_name(key: PartitionKey) -> str:
        return format_key(key) + FILE_SUFFIX

    def path_for(self, key: PartitionKey) -> Path:
        return self.output_dir / self.file_name(key)

    def open(self, key: PartitionKey) -> PartitionHandle:
        """Recreate the file for ``key`` and begin its write transaction.

        Raises:
            PartitionError: If another partition is still open.
            StorageIOError: If the file cannot be removed, created or opened.
            SchemaError: If the Measurements table cannot be created.
        """
        if self._active is not None:
            raise PartitionError(
                key, f"partition {self._active.label} is still open"
            )

        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
            engine = create_partition_engine(path, echo=self.echo)
        except OSError as exc:
            raise StorageIOError(key, f"cannot recreate {path}: {exc}") from exc

        try:
            connection = engine.connect()
            transaction = connection.begin()
        except SQLAlchemyError as exc:
            engine.dispose()
            raise StorageIOError(key, f"cannot open {path}: {exc}") from exc

        try:
            create_tables(connection)
        except SQLAlchemyError as exc:
            transaction.rollback()
            connection.close()
            engine.dispose()
            raise SchemaError(key, f"cannot create Measurements table: {exc}") from exc

        handle = PartitionHandle(
            key=key,
            path=path,
            engine=engine,
            connection=connection,
            transaction=transaction,
            statement=insert(Measurement.__table__),
        )
        self._active = handle
        logger.info("DB file '%s' created.", path.name)
        return handle

    def write_hour(
        self, handle: PartitionHandle, channel: int, value: float, timestamp: int
    ) -> None:
        """Insert one measurement row inside the handle's transaction.

        Raises:
            InsertError: If the row cannot be inserted. The transaction is left
                open and later writes proceed normally.
        """
        if handle.closed or handle.statement is None:
            raise InsertError(handle.key, channel, timestamp, "partition is closed")
        try:
            handle.connection.execute(
                handle.statement,
                {"channel": channel, "measured_value": value, "recorded_time": timestamp},
            )
        except SQLAlchemyError as exc:
            handle.failed_inserts += 1
            raise InsertError(handle.key, channel, timestamp, str(exc)) from exc
        handle.rows_written += 1

    def close(self, handle: PartitionHandle) -> None:
        """Release the insert statement and commit the handle's transaction.

        Raises:
            CommitError: If the commit fails. The file is released either way.
        """
        if handle.closed:
            return
        handle.statement = None
        try:
            handle.transaction.commit()
        except SQLAlchemyError as exc:
            raise CommitError(handle.key, f"commit failed: {exc}") from exc
        finally:
            handle.closed = True
            handle.connection.close()
            handle.engine.dispose()
            if self._active is handle:
                self._active = None
        logger.info(
            "DB file '%s' committed: %d rows, %d failed inserts",
            handle.path.name,
            handle.rows_written,
            handle.failed_inserts,
        )

    def release(self, handle: PartitionHandle) -> None:
        """Close the handle's connection without committing its transaction."""
        if handle.closed:
            return
        handle.statement = None
        handle.closed = True
        try:
            handle.connection.close()
        finally:
            handle.engine.dispose()
            if self._active is handle:
                self._active = None
        logger.warning("DB file '%s' released without commit", handle.path.name)


def count_rows(path: Path | str) -> int:
    """Return the number of Measurements rows stored in a partition file."""
    engine = create_partition_engine(Path(path))
    try:
        with engine.connect() as connection:
            return connection.execute(select(func.count()).select_from(Measurement)).scalar_one()
    finally:
        engine.dispose()


def hourly_groups(path: Path | str) -> list[tuple[int, int]]:
    """Return ``(recorded_time, row_count)`` pairs of a partition file in time order."""
    engine = create_partition_engine(Path(path))
    try:
        with engine.connect() as connection:
            rows = connection.execute(
                select(Measurement.recorded_time, func.count())
                .group_by(Measurement.recorded_time)
                .order_by(Measurement.recorded_time)
            ).all()
    finally:
        engine.dispose()
    return [(int(recorded_time), int(count)) for recorded_time, count in rows]
