"""Pydantic response and request models for the web API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sparkle_stories.domain.catalog import Story
from sparkle_stories.domain.playback import MusicTrack, SessionSnapshot


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoryPreview(CamelModel):
    """Story card data (no full text)."""

    id: str
    title: str
    description: str
    author: str
    cover_image: str
    labels: list[str]
    created_at: datetime
    featured: bool

    @classmethod
    def from_story(cls, story: Story) -> "StoryPreview":
        return cls(
            id=story.id,
            title=story.title,
            description=story.description,
            author=story.author,
            cover_image=story.cover_image_ref,
            labels=list(story.labels),
            created_at=story.created_at,
            featured=story.featured,
        )


class StoryDetail(StoryPreview):
    """Full story for the reader page, with neighbour ids for navigation."""

    character_photo: str
    story: str
    paragraphs: list[str]
    previous_id: Optional[str] = None
    next_id: Optional[str] = None

    @classmethod
    def from_story_with_neighbors(
        cls, story: Story, previous: Optional[Story], following: Optional[Story]
    ) -> "StoryDetail":
        preview = StoryPreview.from_story(story)
        return cls(
            **preview.model_dump(),
            character_photo=story.character_image_ref,
            story=story.full_text,
            paragraphs=story.paragraphs,
            previous_id=previous.id if previous else None,
            next_id=following.id if following else None,
        )


class TrackOut(CamelModel):
    id: str
    title: str
    artist: str
    file_path: str
    duration: float
    duration_label: str
    cover_art: Optional[str] = None

    @classmethod
    def from_track(cls, track: MusicTrack) -> "TrackOut":
        return cls(
            id=track.id,
            title=track.title,
            artist=track.artist,
            file_path=track.audio_ref,
            duration=track.duration_seconds,
            duration_label=track.duration_str,
            cover_art=track.cover_art_ref,
        )


class PlayerState(CamelModel):
    """Current playback session snapshot."""

    playlist: list[TrackOut]
    current_track: Optional[TrackOut] = None
    current_index: int
    is_playing: bool
    volume: float
    is_muted: bool
    position: float
    duration: float

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "PlayerState":
        return cls(
            playlist=[TrackOut.from_track(t) for t in snapshot.playlist],
            current_track=(
                TrackOut.from_track(snapshot.current_track)
                if snapshot.current_track
                else None
            ),
            current_index=snapshot.current_index,
            is_playing=snapshot.is_playing,
            volume=snapshot.volume,
            is_muted=snapshot.is_muted,
            position=snapshot.position,
            duration=snapshot.duration,
        )


class TrackIndexRequest(CamelModel):
    index: int


class VolumeRequest(CamelModel):
    # Any finite number is accepted; the session clamps it to [0, 1]
    volume: float = Field(allow_inf_nan=False)


class SeekRequest(CamelModel):
    position_seconds: float = Field(ge=0, allow_inf_nan=False)
