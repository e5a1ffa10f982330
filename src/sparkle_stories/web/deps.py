from fastapi import Depends, Request

from sparkle_stories.core.config import Config
from sparkle_stories.domain.catalog import Catalog, load_catalog
from sparkle_stories.domain.playback import PlaybackSession


def get_config(request: Request) -> Config:
    """FastAPI dependency for the app's configuration."""
    return request.app.state.config


def get_catalog(config: Config = Depends(get_config)) -> Catalog:
    """FastAPI dependency: the story catalog, read fresh for each request."""
    return load_catalog(config.catalog.stories_path)


def get_session(request: Request) -> PlaybackSession:
    """FastAPI dependency for the application-lifetime playback session."""
    return request.app.state.session
