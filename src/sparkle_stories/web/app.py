import asyncio
from contextlib import asynccontextmanager, suppress
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from sparkle_stories.core.config import Config, load_config
from sparkle_stories.core.preferences import PreferenceStore
from sparkle_stories.domain.playback import (
    AudioOutput,
    PlaybackSession,
    create_output,
)
from sparkle_stories.domain.playback.volume import PreferenceBackend


async def poll_session_events(session: PlaybackSession, interval: float) -> None:
    """Drain output events on the app's event loop, serialized with requests."""
    while True:
        session.process_events()
        await asyncio.sleep(interval)


def create_app(
    config: Optional[Config] = None,
    output_factory: Optional[Callable[[], AudioOutput]] = None,
    preferences: Optional[PreferenceBackend] = None,
) -> FastAPI:
    """Build the web API.

    The playback session is created when the app starts and closed when it
    shuts down; handlers reach it through app.state.
    """
    config = config if config is not None else load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        output = output_factory() if output_factory else create_output(config.player)
        session = PlaybackSession(
            output,
            preferences if preferences is not None else PreferenceStore(),
            default_volume=config.player.default_volume,
        )
        session.load_playlist_file(config.catalog.music_path)
        app.state.session = session

        poller = asyncio.create_task(
            poll_session_events(session, config.player.poll_interval)
        )
        logger.info("Web API started")
        try:
            yield
        finally:
            poller.cancel()
            with suppress(asyncio.CancelledError):
                await poller
            session.close()
            logger.info("Web API stopped")

    app = FastAPI(title="Sparkle Stories API", version="1.0.0", lifespan=lifespan)
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from sparkle_stories.web.routers import player, stories

    app.include_router(stories.router, prefix="/api", tags=["stories"])
    app.include_router(player.router, prefix="/api", tags=["player"])

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
