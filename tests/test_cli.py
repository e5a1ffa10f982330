"""Tests for the sparkle-stories command line."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from sparkle_stories.cli import main
from sparkle_stories.core.config import CatalogConfig, Config


@pytest.fixture
def config(tmp_path: Path) -> Config:
    stories = [
        {
            "id": str(i),
            "title": title,
            "labels": labels,
            "description": "",
            "story": f"{title} text.",
            "author": "Author",
            "createdAt": "2024-01-01T00:00:00Z",
            "featured": i == 1,
        }
        for i, (title, labels) in enumerate(
            [("Dragon Tea", ["Adventure"]), ("Moon Song", ["Bedtime"])], start=1
        )
    ]
    path = tmp_path / "stories.json"
    path.write_text(json.dumps(stories), encoding="utf-8")

    config = Config()
    config.catalog = CatalogConfig(stories_path=str(path), music_path="")
    return config


def run_cli(config: Config, *argv: str) -> int:
    with patch("sparkle_stories.cli.load_config", return_value=config), patch(
        "sparkle_stories.cli.setup_from_config"
    ), patch("sparkle_stories.cli.ensure_directories"):
        with pytest.raises(SystemExit) as exc_info:
            main(list(argv))
    return exc_info.value.code


class TestCatalogCommands:
    def test_stories_filtered(self, config, capsys) -> None:
        assert run_cli(config, "stories", "--query", "dragon") == 0
        out = capsys.readouterr().out
        assert "Dragon Tea" in out
        assert "Moon Song" not in out

    def test_story_detail(self, config, capsys) -> None:
        assert run_cli(config, "story", "2") == 0
        out = capsys.readouterr().out
        assert "Moon Song text." in out
        assert "Dragon Tea" in out  # neighbour navigation

    def test_story_not_found(self, config) -> None:
        assert run_cli(config, "story", "42") == 1

    def test_categories(self, config, capsys) -> None:
        assert run_cli(config, "categories") == 0
        out = capsys.readouterr().out
        assert out.index("Adventure") < out.index("Bedtime")

    def test_featured(self, config, capsys) -> None:
        assert run_cli(config, "featured") == 0
        assert "Dragon Tea" in capsys.readouterr().out

    def test_serve_passes_app_to_uvicorn(self, config) -> None:
        with patch("uvicorn.run") as mock_run:
            assert run_cli(config, "serve", "--port", "9001") == 0
        _, kwargs = mock_run.call_args
        assert kwargs == {"host": "127.0.0.1", "port": 9001}
