# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from sensor_factory.core.clock import HourlyClock
from sensor_factory.services.partition import PartitionManager
from sensor_factory.services.values import ValueGenerator

UTC_ZONE = ZoneInfo("UTC")


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "partitions"
    path.mkdir()
    return path


@pytest.fixture()
def manager(output_dir: Path) -> Iterator[PartitionManager]:
    manager = PartitionManager(output_dir)
    try:
        yield manager
    finally:
        if manager.active is not None:
            manager.close(manager.active)


@pytest.fixture()
def values() -> ValueGenerator:
    return ValueGenerator(seed=1234)


@pytest.fixture()
def january_clock() -> HourlyClock:
    """All of January 2022 plus the first hour of February, in UTC."""
    return HourlyClock(
        datetime(2022, 1, 1, tzinfo=UTC_ZONE),
        datetime(2022, 2, 1, tzinfo=UTC_ZONE),
    )
