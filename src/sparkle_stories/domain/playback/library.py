"""
Music library loading from the music JSON file.
"""

from pathlib import Path
from typing import Union

from loguru import logger

from sparkle_stories.core.data import parse_records, read_json_array

from .models import MusicTrack


def load_tracks(path: Union[str, Path]) -> list[MusicTrack]:
    """Load the playlist from a JSON array file.

    A missing or corrupt file yields an empty playlist; malformed tracks are
    skipped.
    """
    records = read_json_array(path)
    tracks = parse_records(records, MusicTrack.from_dict, "track")
    logger.debug(f"Loaded {len(tracks)} tracks from {path}")
    return tracks
