"""
Playback domain models.

Contains music tracks and the events an audio output emits on its channel.
"""

import math
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional


class MusicTrack(NamedTuple):
    """A playable background music track."""

    id: str
    title: str
    artist: str
    audio_ref: str  # Path or URL handed to the audio output
    duration_seconds: float = 0.0
    cover_art_ref: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MusicTrack":
        """Build a track from a music.json record (camelCase keys).

        Raises:
            KeyError: If a required key is missing
            ValueError: If duration is negative or not a number
        """
        duration = float(data.get("duration", 0) or 0)
        if not math.isfinite(duration) or duration < 0:
            raise ValueError(f"duration must be a non-negative number, got {duration}")

        cover_art = data.get("coverArt")
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            artist=str(data.get("artist", "")),
            audio_ref=str(data["filePath"]),
            duration_seconds=duration,
            cover_art_ref=str(cover_art) if cover_art else None,
        )

    @property
    def duration_str(self) -> str:
        """Format duration as M:SS"""
        return format_time(self.duration_seconds)


def format_time(seconds: float) -> str:
    """Format time in seconds to M:SS format."""
    if not math.isfinite(seconds) or seconds < 0:
        return "0:00"

    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


@dataclass(frozen=True)
class TrackEnded:
    """The output reached the end of the track it loaded in `generation`."""

    generation: int


@dataclass(frozen=True)
class PlaybackFailed:
    """The output could not start (or keep) playing the `generation` load."""

    generation: int
    reason: str


OutputEvent = TrackEnded | PlaybackFailed
