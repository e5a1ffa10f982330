"""Web API for the story catalog and the music player."""

from .app import create_app

__all__ = ["create_app"]
