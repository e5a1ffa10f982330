"""
JSON data file reading shared by the story catalog and the music library
"""

import json
from pathlib import Path
from typing import Any, Callable, List, TypeVar, Union

from loguru import logger

T = TypeVar("T")


def read_json_array(path: Union[str, Path]) -> List[Any]:
    """Read a JSON file whose root is an array.

    Missing files, unreadable files, invalid JSON and non-array roots are
    all treated as an empty list and logged.
    """
    file_path = Path(path)
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.error(f"Data file not found: {file_path}")
        return []
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read data file {file_path}: {e}")
        return []

    if not isinstance(data, list):
        logger.error(
            f"Data file {file_path} must contain a JSON array, got {type(data).__name__}"
        )
        return []

    return data


def parse_records(
    records: List[Any], parse: Callable[[dict], T], kind: str
) -> List[T]:
    """Parse each record with parse(), skipping malformed ones with a warning."""
    parsed: List[T] = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning(f"Skipping {kind} #{position}: expected object")
            continue
        try:
            parsed.append(parse(record))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed {kind} #{position}: {e}")
    return parsed
