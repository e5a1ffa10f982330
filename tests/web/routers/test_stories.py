"""Tests for the stories router."""

import json


class TestListStories:
    def test_all_in_file_order(self, client) -> None:
        response = client.get("/api/stories")
        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == ["1", "2", "3"]

    def test_preview_uses_camel_case_and_omits_text(self, client) -> None:
        story = client.get("/api/stories").json()[0]
        assert story["coverImage"] == "/images/dragon.png"
        assert story["createdAt"].startswith("2024-03-01T10:00:00")
        assert story["featured"] is True
        assert "story" not in story

    def test_query_filter(self, client) -> None:
        response = client.get("/api/stories", params={"query": " DRAGON "})
        assert [s["id"] for s in response.json()] == ["1", "3"]

    def test_category_filter(self, client) -> None:
        response = client.get("/api/stories", params={"category": "Adventure"})
        assert [s["id"] for s in response.json()] == ["1", "3"]

    def test_no_match(self, client) -> None:
        response = client.get("/api/stories", params={"query": "spaceship"})
        assert response.json() == []

    def test_reads_file_per_request(self, client, config) -> None:
        with open(config.catalog.stories_path, encoding="utf-8") as f:
            records = json.load(f)
        with open(config.catalog.stories_path, "w", encoding="utf-8") as f:
            json.dump(records[:1], f)

        assert len(client.get("/api/stories").json()) == 1

    def test_missing_file_is_empty_list(self, client, config, tmp_path) -> None:
        config.catalog.stories_path = str(tmp_path / "gone.json")
        response = client.get("/api/stories")
        assert response.status_code == 200
        assert response.json() == []


class TestStoryDetail:
    def test_detail_with_neighbours(self, client) -> None:
        response = client.get("/api/stories/1")
        assert response.status_code == 200

        story = response.json()
        assert story["title"] == "The Dragon Who Loved Tea"
        assert story["characterPhoto"] == "/images/ember.png"
        assert story["paragraphs"] == ["Ember was small.", "She loved tea."]
        assert story["previousId"] == "3"
        assert story["nextId"] == "2"

    def test_not_found(self, client) -> None:
        response = client.get("/api/stories/999")
        assert response.status_code == 404


class TestFeaturedAndCategories:
    def test_featured(self, client) -> None:
        response = client.get("/api/stories/featured")
        assert [s["id"] for s in response.json()] == ["1"]

    def test_categories_sorted(self, client) -> None:
        response = client.get("/api/categories")
        assert response.json() == ["Adventure", "Bedtime", "Fantasy", "adventure"]
