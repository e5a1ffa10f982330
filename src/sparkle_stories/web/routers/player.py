"""Player router: drives the application's playback session."""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from sparkle_stories.core.config import Config
from sparkle_stories.domain.playback import PlaybackSession

from ..deps import get_config, get_session
from ..schemas import PlayerState, SeekRequest, TrackIndexRequest, VolumeRequest

router = APIRouter(prefix="/player")


def _state(session: PlaybackSession) -> PlayerState:
    return PlayerState.from_snapshot(session.snapshot())


@router.get("", response_model=PlayerState)
async def get_player_state(session: PlaybackSession = Depends(get_session)):
    return _state(session)


@router.post("/play", response_model=PlayerState)
async def play(session: PlaybackSession = Depends(get_session)):
    session.play()
    return _state(session)


@router.post("/pause", response_model=PlayerState)
async def pause(session: PlaybackSession = Depends(get_session)):
    session.pause()
    return _state(session)


@router.post("/toggle", response_model=PlayerState)
async def toggle(session: PlaybackSession = Depends(get_session)):
    session.toggle_play()
    return _state(session)


@router.post("/next", response_model=PlayerState)
async def next_track(session: PlaybackSession = Depends(get_session)):
    session.next()
    return _state(session)


@router.post("/previous", response_model=PlayerState)
async def previous_track(session: PlaybackSession = Depends(get_session)):
    session.previous()
    return _state(session)


@router.post("/select", response_model=PlayerState)
async def select_track(
    request: TrackIndexRequest, session: PlaybackSession = Depends(get_session)
):
    if not session.select_track(request.index):
        raise HTTPException(422, f"Invalid track index: {request.index}")
    return _state(session)


@router.post("/activate", response_model=PlayerState)
async def activate_track(
    request: TrackIndexRequest, session: PlaybackSession = Depends(get_session)
):
    """Track card click: toggle the current track or switch to another."""
    if not session.activate_track(request.index):
        raise HTTPException(422, f"Invalid track index: {request.index}")
    return _state(session)


@router.post("/volume", response_model=PlayerState)
async def set_volume(
    request: VolumeRequest, session: PlaybackSession = Depends(get_session)
):
    session.set_volume(request.volume)
    return _state(session)


@router.post("/volume/up", response_model=PlayerState)
async def volume_up(session: PlaybackSession = Depends(get_session)):
    session.volume_up()
    return _state(session)


@router.post("/volume/down", response_model=PlayerState)
async def volume_down(session: PlaybackSession = Depends(get_session)):
    session.volume_down()
    return _state(session)


@router.post("/mute", response_model=PlayerState)
async def toggle_mute(session: PlaybackSession = Depends(get_session)):
    session.toggle_mute()
    return _state(session)


@router.post("/seek", response_model=PlayerState)
async def seek(request: SeekRequest, session: PlaybackSession = Depends(get_session)):
    if not session.seek(request.position_seconds):
        raise HTTPException(409, "Nothing to seek: no track loaded")
    return _state(session)


@router.post("/reload", response_model=PlayerState)
async def reload_playlist(
    session: PlaybackSession = Depends(get_session),
    config: Config = Depends(get_config),
):
    """Re-read the music file and replace the playlist."""
    count = session.load_playlist_file(config.catalog.music_path)
    logger.info(f"Playlist reloaded via API: {count} tracks")
    return _state(session)
