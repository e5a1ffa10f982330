"""Playback domain - the background music player.

This domain handles:
- Music tracks and the playlist file
- The playback session state machine (play/pause/next/previous/select)
- Volume clamping, mute and the persisted volume preference
- Audio outputs (mpv over JSON IPC, or silent) and their event channel
"""

from .models import (
    MusicTrack,
    TrackEnded,
    PlaybackFailed,
    OutputEvent,
    format_time,
)

from .state import (
    Empty,
    Loaded,
    TrackSlot,
    SessionState,
)

from .volume import (
    VOLUME_KEY,
    DEFAULT_VOLUME,
    clamp_volume,
    parse_volume,
    load_volume,
    save_volume,
)

from .output import AudioOutput, BaseOutput, SilentOutput, create_output
from .library import load_tracks
from .session import PlaybackSession, SessionSnapshot

__all__ = [
    # Models
    "MusicTrack",
    "TrackEnded",
    "PlaybackFailed",
    "OutputEvent",
    "format_time",
    # State
    "Empty",
    "Loaded",
    "TrackSlot",
    "SessionState",
    # Volume
    "VOLUME_KEY",
    "DEFAULT_VOLUME",
    "clamp_volume",
    "parse_volume",
    "load_volume",
    "save_volume",
    # Output
    "AudioOutput",
    "BaseOutput",
    "SilentOutput",
    "create_output",
    # Session
    "load_tracks",
    "PlaybackSession",
    "SessionSnapshot",
]
