"""Services driving fixture generation."""

from .orchestrator import RunSummary, TickOutcome, WriteOrchestrator
from .partition import (
    CommitError,
    InsertError,
    PartitionError,
    PartitionHandle,
    PartitionManager,
    SchemaError,
    StorageIOError,
)
from .values import ValueGenerator

__all__ = [
    "CommitError",
    "InsertError",
    "PartitionError",
    "PartitionHandle",
    "PartitionManager",
    "RunSummary",
    "SchemaError",
    "StorageIOError",
    "TickOutcome",
    "ValueGenerator",
    "WriteOrchestrator",
]
