"""
Audio output abstraction.

An output plays one source at a time and reports asynchronous outcomes
(track finished, playback failed) by putting events on its `events` queue.
It never calls back into the session; the session's owner drains the queue.
"""

import queue
from typing import Optional, Protocol

from loguru import logger

from sparkle_stories.core.config import PlayerConfig

from .models import OutputEvent, PlaybackFailed, TrackEnded


class AudioOutput(Protocol):
    """Commands a PlaybackSession issues to its audio device."""

    events: "queue.Queue[OutputEvent]"

    @property
    def generation(self) -> int: ...

    def load(self, audio_ref: str) -> None: ...

    def unload(self) -> None: ...

    def start(self) -> bool: ...

    def pause(self) -> None: ...

    def set_volume(self, volume: float) -> None: ...

    def seek(self, position: float) -> bool: ...

    def position(self) -> float: ...

    def duration(self) -> float: ...

    def poll(self) -> None: ...

    def close(self) -> None: ...


class BaseOutput:
    """Event channel and load-generation bookkeeping shared by outputs.

    Every load() bumps `generation`; events carry the generation they belong
    to so a stale "ended" from a replaced track can be recognised and dropped.
    """

    def __init__(self) -> None:
        self.events: "queue.Queue[OutputEvent]" = queue.Queue()
        self._generation = 0
        self.source: Optional[str] = None

    @property
    def generation(self) -> int:
        return self._generation

    def _begin_load(self, audio_ref: Optional[str]) -> None:
        self._generation += 1
        self.source = audio_ref

    def emit_track_ended(self) -> None:
        self.events.put(TrackEnded(self._generation))

    def emit_failure(self, reason: str) -> None:
        self.events.put(PlaybackFailed(self._generation, reason))


class SilentOutput(BaseOutput):
    """Output with no audio device.

    Keeps the bookkeeping a real device would (source, paused flag, volume,
    position) so the session behaves identically without sound.
    """

    def __init__(self) -> None:
        super().__init__()
        self.playing = False
        self.volume = 1.0
        self._position = 0.0
        self._duration = 0.0
        self.closed = False

    def load(self, audio_ref: str) -> None:
        self._begin_load(audio_ref)
        self.playing = False
        self._position = 0.0

    def unload(self) -> None:
        self._begin_load(None)
        self.playing = False
        self._position = 0.0

    def start(self) -> bool:
        if self.source is None or self.closed:
            return False
        self.playing = True
        return True

    def pause(self) -> None:
        self.playing = False

    def set_volume(self, volume: float) -> None:
        self.volume = volume

    def seek(self, position: float) -> bool:
        if self.source is None:
            return False
        self._position = max(0.0, position)
        return True

    def position(self) -> float:
        return self._position

    def duration(self) -> float:
        return self._duration

    def poll(self) -> None:
        """Nothing advances on its own without a device."""

    def close(self) -> None:
        self.playing = False
        self.closed = True


def create_output(config: PlayerConfig) -> AudioOutput:
    """Create the configured output, falling back to SilentOutput without mpv."""
    if config.backend == "mpv":
        from .mpv import MpvOutput, check_mpv_available

        if check_mpv_available():
            output = MpvOutput.launch(config.mpv_socket_path)
            if output is not None:
                return output
            logger.warning("mpv failed to start; continuing without audio")
        else:
            logger.warning("mpv not found on PATH; continuing without audio")

    return SilentOutput()
