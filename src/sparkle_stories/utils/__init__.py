"""Utility modules shared across the application."""

from .parsers import (
    parse_command,
    parse_track_number,
    parse_percent,
    parse_seconds,
)

__all__ = [
    "parse_command",
    "parse_track_number",
    "parse_percent",
    "parse_seconds",
]
