"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_utc,
    ensure_utc_naive,
    format_iso_instant,
    now_utc,
    parse_iso_instant,
    truncate_to_milliseconds,
)
from .log_setup import configure_logging

__all__ = [
    "configure_logging",
    "ensure_utc",
    "ensure_utc_naive",
    "format_iso_instant",
    "now_utc",
    "parse_iso_instant",
    "truncate_to_milliseconds",
]
