"""
Playback session: the single-playlist music player state machine.

The session is the only thing that drives its AudioOutput. Transitions are
plain method calls made from one thread; asynchronous outcomes from the output
(track ended, playback failed) arrive as events that the owner feeds back in
through process_events() on that same thread.
"""

import math
import queue
from pathlib import Path
from typing import NamedTuple, Optional, Sequence, Union

from loguru import logger

from .library import load_tracks
from .models import MusicTrack, OutputEvent, PlaybackFailed, TrackEnded
from .output import AudioOutput
from .state import (
    SessionState,
    with_mute_toggled,
    with_next,
    with_playing,
    with_playlist,
    with_previous,
    with_selected,
    with_volume,
)
from .volume import (
    DEFAULT_VOLUME,
    VOLUME_STEP,
    PreferenceBackend,
    load_volume,
    save_volume,
)


class SessionSnapshot(NamedTuple):
    """Read-only view of the session for rendering."""

    playlist: tuple[MusicTrack, ...]
    current_track: Optional[MusicTrack]
    current_index: int
    is_playing: bool
    volume: float
    is_muted: bool
    position: float
    duration: float


class PlaybackSession:
    """Owns the playlist, the current track and the one audio output."""

    def __init__(
        self,
        output: AudioOutput,
        preferences: PreferenceBackend,
        default_volume: float = DEFAULT_VOLUME,
    ):
        self._output = output
        self._preferences = preferences
        volume = load_volume(preferences, default_volume)
        self._state = SessionState(volume=volume)
        self._closed = False
        output.set_volume(volume)

    # -- state accessors ---------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def playlist(self) -> tuple[MusicTrack, ...]:
        return self._state.playlist

    @property
    def current_track(self) -> Optional[MusicTrack]:
        return self._state.current_track

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def volume(self) -> float:
        return self._state.volume

    @property
    def is_muted(self) -> bool:
        return self._state.is_muted

    def snapshot(self) -> SessionSnapshot:
        """Capture the current state plus output position for display."""
        has_track = self._state.current_track is not None
        duration = self._output.duration() if has_track else 0.0
        if has_track and not duration:
            duration = self._state.current_track.duration_seconds
        return SessionSnapshot(
            playlist=self._state.playlist,
            current_track=self._state.current_track,
            current_index=self._state.current_index,
            is_playing=self._state.is_playing,
            volume=self._state.volume,
            is_muted=self._state.is_muted,
            position=self._output.position() if has_track else 0.0,
            duration=duration,
        )

    # -- playlist ----------------------------------------------------------

    def load_playlist(self, tracks: Sequence[MusicTrack]) -> None:
        """Replace the playlist. The first track is cued but not started."""
        new_state = with_playlist(self._state, tracks)

        if new_state.current_track is not None:
            self._output.load(new_state.current_track.audio_ref)
        else:
            self._output.unload()

        self._state = new_state
        logger.info(f"Loaded playlist with {len(new_state.playlist)} tracks")

    def load_playlist_file(self, path: Union[str, Path]) -> int:
        """Load the playlist from a music JSON file.

        An unreadable file leaves the session empty. Returns the track count.
        """
        tracks = load_tracks(path)
        if not tracks:
            logger.warning(f"No playable tracks in {path}; player is empty")
        self.load_playlist(tracks)
        return len(tracks)

    # -- transport ---------------------------------------------------------

    def play(self) -> bool:
        """Start or resume the current track. Returns True if output started."""
        track = self._state.current_track
        if track is None:
            logger.debug("play() ignored: no track loaded")
            return False

        started = self._output.start()
        if not started:
            logger.warning(f"Failed to start playback of {track.title!r}")
        self._state = with_playing(self._state, started)
        return started

    def pause(self) -> None:
        """Pause playback; no-op when already paused."""
        if not self._state.is_playing:
            return
        self._output.pause()
        self._state = with_playing(self._state, False)

    def toggle_play(self) -> None:
        if self._state.is_playing:
            self.pause()
        else:
            self.play()

    def next(self) -> None:
        """Skip forward, wrapping to the first track. Always plays."""
        new_state = with_next(self._state)
        if new_state is None:
            logger.debug("next() ignored: playlist is empty")
            return
        self._switch_to(new_state)

    def previous(self) -> None:
        """Skip back, wrapping to the last track. Always plays."""
        new_state = with_previous(self._state)
        if new_state is None:
            logger.debug("previous() ignored: playlist is empty")
            return
        self._switch_to(new_state)

    def select_track(self, index: int) -> bool:
        """Jump to playlist[index] and play it.

        Returns:
            False (with a warning and no state change) if index is out of range
        """
        new_state = with_selected(self._state, index)
        if new_state is None:
            logger.warning(f"Invalid track index: {index}")
            return False
        self._switch_to(new_state)
        return True

    def activate_track(self, index: int) -> bool:
        """Handle a click on a playlist entry.

        The current track toggles play/pause; any other track is selected.
        """
        if index == self._state.current_index:
            self.toggle_play()
            return True
        return self.select_track(index)

    def seek(self, position: float) -> bool:
        """Move the playback position of the current track (seconds)."""
        if self._state.current_track is None:
            return False
        return self._output.seek(position)

    def _switch_to(self, new_state: SessionState) -> None:
        track = new_state.current_track
        self._output.load(track.audio_ref)
        started = self._output.start()
        if not started:
            logger.warning(f"Failed to start playback of {track.title!r}")
        self._state = with_playing(new_state, started)
        logger.info(
            f"Now playing #{new_state.current_index + 1}: {track.title} - {track.artist}"
        )

    # -- volume ------------------------------------------------------------

    def set_volume(self, volume: float) -> None:
        """Set volume, clamped to [0, 1], and persist it."""
        if math.isnan(volume):
            logger.warning("Ignoring NaN volume")
            return
        self._apply_volume(with_volume(self._state, volume))

    def volume_up(self) -> None:
        self.set_volume(round(self._state.volume + VOLUME_STEP, 2))

    def volume_down(self) -> None:
        self.set_volume(round(self._state.volume - VOLUME_STEP, 2))

    def toggle_mute(self) -> None:
        """Mute remembering the volume, or restore it (default 0.7 if none)."""
        self._apply_volume(with_mute_toggled(self._state))

    def _apply_volume(self, new_state: SessionState) -> None:
        self._output.set_volume(new_state.volume)
        save_volume(self._preferences, new_state.volume)
        self._state = new_state

    # -- output events -----------------------------------------------------

    def handle_event(self, event: OutputEvent) -> None:
        """Apply one event from the output's channel."""
        if event.generation != self._output.generation:
            logger.debug(f"Dropping stale output event: {event}")
            return

        if isinstance(event, TrackEnded):
            if self._state.current_track is not None:
                logger.debug("Track ended; advancing")
                self.next()
        elif isinstance(event, PlaybackFailed):
            logger.warning(f"Playback failed: {event.reason}")
            self._state = with_playing(self._state, False)

    def process_events(self) -> int:
        """Poll the output and apply every queued event, in arrival order.

        Returns:
            Number of events handled
        """
        if self._closed:
            return 0

        self._output.poll()
        handled = 0
        while True:
            try:
                event = self._output.events.get_nowait()
            except queue.Empty:
                break
            self.handle_event(event)
            handled += 1
        return handled

    # -- lifetime ----------------------------------------------------------

    def close(self) -> None:
        """Stop playback and release the output."""
        if self._closed:
            return
        self._closed = True
        self._state = with_playing(self._state, False)
        self._output.close()
        logger.info("Playback session closed")

    def __enter__(self) -> "PlaybackSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
