"""Sparkle Stories - children's story catalog with a background music player."""

__version__ = "1.0.0"
