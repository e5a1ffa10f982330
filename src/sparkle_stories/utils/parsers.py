"""
Command parsing for the interactive player shell.
"""

from typing import List, Optional

# Alternate spellings accepted by the shell
COMMAND_ALIASES = {
    "skip": "next",
    "n": "next",
    "prev": "previous",
    "p": "previous",
    "back": "previous",
    "space": "toggle",
    "volume": "vol",
    "ls": "list",
    "exit": "quit",
    "q": "quit",
}


def parse_command(user_input: str) -> tuple[str, List[str]]:
    """
    Parse user input into command and arguments.

    Args:
        user_input: Raw user input string

    Returns:
        Tuple of (command, args) where command is lowercase with aliases
        resolved and args is a list
    """
    parts = user_input.strip().split()
    if not parts:
        return "", []

    command = parts[0].lower()
    command = COMMAND_ALIASES.get(command, command)
    return command, parts[1:]


def parse_track_number(args: List[str]) -> Optional[int]:
    """Parse a 1-based track number argument into a 0-based index.

    Returns:
        0-based index, or None if the argument is missing or not an integer
    """
    if not args:
        return None
    try:
        return int(args[0]) - 1
    except ValueError:
        return None


def parse_percent(args: List[str]) -> Optional[float]:
    """Parse a 0-100 volume argument into a 0-1 fraction (unclamped)."""
    if not args:
        return None
    try:
        return float(args[0].rstrip("%")) / 100
    except ValueError:
        return None


def parse_seconds(args: List[str]) -> Optional[float]:
    """Parse a seek position given as seconds or M:SS."""
    if not args:
        return None
    raw = args[0]
    try:
        if ":" in raw:
            minutes, seconds = raw.split(":", 1)
            return int(minutes) * 60 + float(seconds)
        return float(raw)
    except ValueError:
        return None


__all__ = [
    "COMMAND_ALIASES",
    "parse_command",
    "parse_track_number",
    "parse_percent",
    "parse_seconds",
]
