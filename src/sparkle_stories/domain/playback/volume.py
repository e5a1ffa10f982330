"""
Volume clamping and the persisted volume preference
"""

import math
from typing import Optional, Protocol

from loguru import logger

VOLUME_KEY = "sparkle-player-volume"
DEFAULT_VOLUME = 0.7
VOLUME_STEP = 0.1


class PreferenceBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> bool: ...


def clamp_volume(volume: float) -> float:
    """Clamp volume to [0, 1]. Out-of-range input is never rejected."""
    return max(0.0, min(1.0, float(volume)))


def parse_volume(raw: Optional[str], default: float = DEFAULT_VOLUME) -> float:
    """Parse a stored volume, using default when absent, malformed or out of range."""
    if raw is None:
        return default

    try:
        value = float(raw)
    except ValueError:
        logger.debug(f"Ignoring malformed stored volume: {raw!r}")
        return default

    if not math.isfinite(value) or not 0.0 <= value <= 1.0:
        logger.debug(f"Ignoring out-of-range stored volume: {raw!r}")
        return default

    return value


def load_volume(
    store: PreferenceBackend, default: float = DEFAULT_VOLUME
) -> float:
    """Read the saved volume preference."""
    return parse_volume(store.get(VOLUME_KEY), default)


def save_volume(store: PreferenceBackend, volume: float) -> bool:
    """Persist the volume preference."""
    return store.set(VOLUME_KEY, repr(float(volume)))
