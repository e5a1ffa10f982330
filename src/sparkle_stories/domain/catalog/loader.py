"""
Story catalog loading from the stories JSON file.
"""

from pathlib import Path
from typing import Union

from loguru import logger

from sparkle_stories.core.data import parse_records, read_json_array

from .models import Story
from .queries import Catalog


def load_stories(path: Union[str, Path]) -> list[Story]:
    """Load all stories from a JSON array file.

    A missing or corrupt file yields an empty list; malformed records are
    skipped.
    """
    records = read_json_array(path)
    stories = parse_records(records, Story.from_dict, "story")
    logger.debug(f"Loaded {len(stories)} stories from {path}")
    return stories


def load_catalog(path: Union[str, Path]) -> Catalog:
    """Load the stories file into a Catalog."""
    return Catalog(load_stories(path))
