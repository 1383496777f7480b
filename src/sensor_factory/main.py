# src/sensor_factory/main.py
"""Command-line entry point for generating monthly measurement fixtures."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from sensor_factory.core.clock import HourlyClock
from sensor_factory.core.logging_setup import setup_logging
from sensor_factory.core.settings import Settings, settings
from sensor_factory.core.time import resolve_timezone
from sensor_factory.services.orchestrator import RunSummary, WriteOrchestrator
from sensor_factory.services.partition import PartitionError, PartitionManager, count_rows
from sensor_factory.services.values import ValueGenerator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sensor-factory",
        description="Generate hourly sensor measurements into monthly SQLite files",
    )
    parser.add_argument("--start-year", type=int, default=defaults.start_year)
    parser.add_argument(
        "--span-years",
        type=int,
        default=defaults.span_years,
        help="Number of years to generate starting at --start-year",
    )
    parser.add_argument(
        "--timezone",
        default=defaults.timezone,
        help="IANA timezone name (defaults to the host's zone)",
    )
    parser.add_argument("--output-dir", type=Path, default=defaults.output_dir)
    parser.add_argument("--channels", type=int, default=defaults.channels)
    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument("--log-level", default=defaults.log_level)
    parser.add_argument("--sql-debug", action="store_true", default=defaults.sql_debug)
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Log the row count of every partition file after the run",
    )
    return parser


def generate(
    start_year: int,
    span_years: int,
    timezone: str | None,
    *,
    output_dir: Path = Path("."),
    channels: int = 12,
    value_step: float = 100.0,
    seed: int | None = None,
    sql_debug: bool = False,
) -> RunSummary:
    """Generate measurements for ``span_years`` years starting at ``start_year``.

    Raises:
        ValueError: If the timezone is unknown.
        PartitionError: On a fatal storage failure.
    """
    zone = resolve_timezone(timezone)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info(
        "Generating %d year(s) from %d in %s into %s", span_years, start_year, zone.key, output_dir
    )
    orchestrator = WriteOrchestrator(
        HourlyClock.for_years(start_year, span_years, zone),
        PartitionManager(output_dir, echo=sql_debug),
        ValueGenerator(step=value_step, seed=seed),
        channels=channels,
    )
    return orchestrator.run()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser(settings).parse_args(argv)
    setup_logging(args.log_level)

    if args.span_years < 0 or args.channels < 1:
        print("[sensor-factory] ERROR: --span-years must be >= 0 and --channels >= 1", file=sys.stderr)
        return EXIT_USAGE

    try:
        summary = generate(
            args.start_year,
            args.span_years,
            args.timezone,
            output_dir=args.output_dir,
            channels=args.channels,
            value_step=settings.value_step,
            seed=args.seed,
            sql_debug=args.sql_debug,
        )
    except ValueError as exc:
        print(f"[sensor-factory] ERROR: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except (PartitionError, OSError) as exc:
        logger.error("Generation aborted: %s", exc)
        print(f"[sensor-factory] ERROR: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if args.verify:
        for partition in summary.partitions:
            logger.info("%s: %d rows", partition.path.name, count_rows(partition.path))

    logger.info(
        "Wrote %d rows into %d partition(s), %d failed inserts",
        summary.rows_written,
        len(summary.partitions),
        summary.failed_inserts,
    )
    logger.info("Factoring finished.")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
