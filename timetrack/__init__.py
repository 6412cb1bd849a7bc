"""Billable-hours reporting over an SQLite schema, with JSON-ready responses and CSV export."""

__version__ = "1.0.1"