"""Shared fixtures for web API tests."""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from sparkle_stories.core.config import CatalogConfig, Config, PlayerConfig
from sparkle_stories.core.preferences import MemoryPreferenceStore
from sparkle_stories.domain.playback import SilentOutput
from sparkle_stories.web import create_app

STORIES = [
    {
        "id": "1",
        "title": "The Dragon Who Loved Tea",
        "labels": ["Adventure", "Fantasy"],
        "characterPhoto": "/images/ember.png",
        "coverImage": "/images/dragon.png",
        "description": "A gentle dragon opens a tea shop.",
        "story": "Ember was small.\n\nShe loved tea.",
        "author": "Mina Park",
        "createdAt": "2024-03-01T10:00:00Z",
        "featured": True,
    },
    {
        "id": "2",
        "title": "Moonlight Lullaby",
        "labels": ["Bedtime"],
        "characterPhoto": "/images/luna.png",
        "coverImage": "/images/moon.png",
        "description": "An owl sings the forest to sleep.",
        "story": "Luna hummed.",
        "author": "Theo Grant",
        "createdAt": "2024-03-08T19:30:00Z",
    },
    {
        "id": "3",
        "title": "Pip and the Paper Boat",
        "labels": ["adventure"],
        "characterPhoto": "/images/pip.png",
        "coverImage": "/images/boat.png",
        "description": "A mouse befriends a dragonfly.",
        "story": "Rain fell.",
        "author": "Mina Park",
        "createdAt": "2024-04-02T08:15:00Z",
    },
]

MUSIC = [
    {"id": "1", "title": "Blossom Waltz", "artist": "Ensemble", "filePath": "/m/1.mp3", "duration": 184},
    {"id": "2", "title": "Starlit Pond", "artist": "Ensemble", "filePath": "/m/2.mp3", "duration": 212},
    {"id": "3", "title": "Tea Time Tune", "artist": "Ember", "filePath": "/m/3.mp3", "duration": 96},
]


@pytest.fixture
def config(tmp_path: Path) -> Config:
    stories_path = tmp_path / "stories.json"
    music_path = tmp_path / "music.json"
    stories_path.write_text(json.dumps(STORIES), encoding="utf-8")
    music_path.write_text(json.dumps(MUSIC), encoding="utf-8")

    config = Config()
    config.catalog = CatalogConfig(
        stories_path=str(stories_path), music_path=str(music_path)
    )
    config.player = PlayerConfig(backend="silent", poll_interval=0.05)
    return config


@pytest.fixture
def preferences() -> MemoryPreferenceStore:
    return MemoryPreferenceStore()


@pytest.fixture
def client(config: Config, preferences: MemoryPreferenceStore):
    app = create_app(config, output_factory=SilentOutput, preferences=preferences)
    with TestClient(app) as test_client:
        yield test_client
