"""Synthetic hourly sensor fixtures written to monthly SQLite partitions."""

__version__ = "0.1.0"
