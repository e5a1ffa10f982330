"""
Playback session state and its pure transitions.

State is an immutable SessionState; every transition returns a new one so a
caller never observes a half-applied change. Whether a track is loaded is
carried by an explicit variant (Empty / Loaded) rather than by index == -1.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Union

from .models import MusicTrack
from .volume import DEFAULT_VOLUME, clamp_volume


@dataclass(frozen=True)
class Empty:
    """No playlist loaded; nothing can play."""


@dataclass(frozen=True)
class Loaded:
    """A track from the playlist is current."""

    index: int
    track: MusicTrack


TrackSlot = Union[Empty, Loaded]

EMPTY = Empty()


class SessionState(NamedTuple):
    """Immutable playback session state."""

    playlist: tuple[MusicTrack, ...] = ()
    slot: TrackSlot = EMPTY
    is_playing: bool = False
    volume: float = DEFAULT_VOLUME
    is_muted: bool = False
    volume_before_mute: Optional[float] = None

    @property
    def current_track(self) -> Optional[MusicTrack]:
        return self.slot.track if isinstance(self.slot, Loaded) else None

    @property
    def current_index(self) -> int:
        """Index of the current track, or -1 when no track is loaded."""
        return self.slot.index if isinstance(self.slot, Loaded) else -1


def with_playlist(state: SessionState, tracks: Sequence[MusicTrack]) -> SessionState:
    """Replace the playlist; the first track becomes current but does not play."""
    playlist = tuple(tracks)
    if not playlist:
        return state._replace(playlist=(), slot=EMPTY, is_playing=False)

    return state._replace(
        playlist=playlist, slot=Loaded(0, playlist[0]), is_playing=False
    )


def with_selected(state: SessionState, index: int) -> Optional[SessionState]:
    """Make playlist[index] current and playing.

    Returns:
        New state, or None if index is outside the playlist
    """
    if not 0 <= index < len(state.playlist):
        return None

    return state._replace(
        slot=Loaded(index, state.playlist[index]), is_playing=True
    )


def with_next(state: SessionState) -> Optional[SessionState]:
    """Advance to the next track, wrapping from the last to the first.

    Returns:
        New state, or None if the playlist is empty
    """
    if not state.playlist:
        return None

    return with_selected(state, (state.current_index + 1) % len(state.playlist))


def with_previous(state: SessionState) -> Optional[SessionState]:
    """Step back to the previous track, wrapping from the first to the last.

    Returns:
        New state, or None if the playlist is empty
    """
    if not state.playlist:
        return None

    count = len(state.playlist)
    return with_selected(state, (state.current_index - 1 + count) % count)


def with_playing(state: SessionState, playing: bool) -> SessionState:
    """Set the playing flag; a session without a current track never plays."""
    if state.current_track is None:
        return state._replace(is_playing=False)
    return state._replace(is_playing=playing)


def with_volume(state: SessionState, volume: float) -> SessionState:
    """Set a clamped volume; any audible volume clears the muted flag."""
    clamped = clamp_volume(volume)
    if clamped > 0:
        return state._replace(
            volume=clamped, is_muted=False, volume_before_mute=None
        )
    return state._replace(volume=clamped)


def with_mute_toggled(state: SessionState) -> SessionState:
    """Mute (remembering the volume) or unmute (restoring it)."""
    if state.is_muted:
        restored = state.volume_before_mute or DEFAULT_VOLUME
        return state._replace(
            volume=restored, is_muted=False, volume_before_mute=None
        )

    return state._replace(
        volume=0.0, is_muted=True, volume_before_mute=state.volume
    )
