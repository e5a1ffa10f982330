"""Tests for story catalog queries."""

from datetime import datetime, timezone

import pytest

from sparkle_stories.domain.catalog import (
    Catalog,
    Story,
    filter_stories,
    find_story_index,
    get_categories,
    get_featured_stories,
    get_next_story,
    get_previous_story,
    get_story_by_id,
)


def make_story(
    story_id: str,
    title: str = "Untitled",
    description: str = "",
    labels: tuple[str, ...] = (),
    featured: bool = False,
) -> Story:
    return Story(
        id=story_id,
        title=title,
        description=description,
        full_text="Once upon a time.",
        author="Test Author",
        cover_image_ref=f"/covers/{story_id}.png",
        character_image_ref=f"/characters/{story_id}.png",
        labels=labels,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        featured=featured,
    )


@pytest.fixture
def abc() -> list[Story]:
    """Three stories with ids a, b, c."""
    return [make_story("a"), make_story("b"), make_story("c")]


@pytest.fixture
def library() -> list[Story]:
    return [
        make_story(
            "1",
            title="The Dragon Who Loved Tea",
            description="A gentle dragon opens a tea shop.",
            labels=("Adventure", "Fantasy"),
            featured=True,
        ),
        make_story(
            "2",
            title="Moonlight Lullaby",
            description="An owl sings the forest to sleep.",
            labels=("Bedtime",),
        ),
        make_story(
            "3",
            title="Pip and the Paper Boat",
            description="A mouse befriends a dragonfly.",
            labels=("adventure", "Friendship"),
        ),
    ]


class TestLookup:
    """Tests for id lookups."""

    def test_find_story_index(self, abc: list[Story]) -> None:
        assert find_story_index(abc, "b") == 1
        assert find_story_index(abc, "zzz") is None

    def test_get_story_by_id_found(self, abc: list[Story]) -> None:
        assert get_story_by_id(abc, "c") is abc[2]

    def test_get_story_by_id_missing(self, abc: list[Story]) -> None:
        assert get_story_by_id(abc, "missing") is None
        assert get_story_by_id([], "a") is None

    def test_duplicate_ids_return_first(self) -> None:
        """The first story with a duplicated id wins."""
        first = make_story("x", title="First")
        second = make_story("x", title="Second")
        assert get_story_by_id([first, second], "x") is first


class TestNavigation:
    """Tests for circular next/previous navigation."""

    def test_next_wraps_to_first(self, abc: list[Story]) -> None:
        assert get_next_story(abc, "a").id == "b"
        assert get_next_story(abc, "c").id == "a"

    def test_previous_wraps_to_last(self, abc: list[Story]) -> None:
        assert get_previous_story(abc, "b").id == "a"
        assert get_previous_story(abc, "a").id == "c"

    def test_next_and_previous_are_inverse(self, abc: list[Story]) -> None:
        for story in abc:
            following = get_next_story(abc, story.id)
            assert get_previous_story(abc, following.id) is story
            preceding = get_previous_story(abc, story.id)
            assert get_next_story(abc, preceding.id) is story

    def test_full_cycle_returns_to_start(self, abc: list[Story]) -> None:
        current = abc[0]
        for _ in range(len(abc)):
            current = get_next_story(abc, current.id)
        assert current is abc[0]

    def test_single_story_is_its_own_neighbour(self) -> None:
        only = [make_story("solo")]
        assert get_next_story(only, "solo") is only[0]
        assert get_previous_story(only, "solo") is only[0]

    def test_unknown_or_empty_returns_none(self, abc: list[Story]) -> None:
        assert get_next_story(abc, "nope") is None
        assert get_previous_story(abc, "nope") is None
        assert get_next_story([], "a") is None
        assert get_previous_story([], "a") is None


class TestCategories:
    """Tests for category extraction."""

    def test_distinct_and_sorted(self, library: list[Story]) -> None:
        """Labels are de-duplicated exactly and sorted case-sensitively."""
        assert get_categories(library) == [
            "Adventure",
            "Bedtime",
            "Fantasy",
            "Friendship",
            "adventure",
        ]

    def test_empty(self) -> None:
        assert get_categories([]) == []

    def test_featured(self, library: list[Story]) -> None:
        assert [s.id for s in get_featured_stories(library)] == ["1"]


class TestFilterStories:
    """Tests for search and category filtering."""

    def test_no_filters_returns_everything_in_order(
        self, library: list[Story]
    ) -> None:
        assert filter_stories(library, "", None) == library
        assert filter_stories(library, "   ", "") == library

    def test_query_is_trimmed_and_case_insensitive(
        self, library: list[Story]
    ) -> None:
        result = filter_stories(library, "  DRAGON ", None)
        # Matches title of 1 and description of 3
        assert [s.id for s in result] == ["1", "3"]

    def test_category_is_case_insensitive(self, library: list[Story]) -> None:
        result = filter_stories(library, "", "ADVENTURE")
        assert [s.id for s in result] == ["1", "3"]

    def test_query_and_category_combined(self, library: list[Story]) -> None:
        result = filter_stories(library, "dragon", "Fantasy")
        assert [s.id for s in result] == ["1"]

    def test_filters_commute(self, library: list[Story]) -> None:
        by_category_then_query = filter_stories(
            filter_stories(library, "", "adventure"), "mouse", None
        )
        by_query_then_category = filter_stories(
            filter_stories(library, "mouse", None), "", "adventure"
        )
        assert by_category_then_query == by_query_then_category
        assert [s.id for s in by_category_then_query] == ["3"]

    def test_no_match(self, library: list[Story]) -> None:
        assert filter_stories(library, "spaceship", None) == []
        assert filter_stories(library, "", "Horror") == []

    def test_query_does_not_search_full_text(self, library: list[Story]) -> None:
        assert filter_stories(library, "once upon", None) == []


class TestCatalog:
    """Tests for the Catalog wrapper."""

    def test_delegates_to_queries(self, library: list[Story]) -> None:
        catalog = Catalog(library)

        assert len(catalog) == 3
        assert catalog.get_all() == library
        assert catalog.get_by_id("2").title == "Moonlight Lullaby"
        assert catalog.get_next("3").id == "1"
        assert catalog.get_previous("1").id == "3"
        assert catalog.get_featured()[0].id == "1"
        assert "Bedtime" in catalog.get_categories()

    def test_neighbors(self, library: list[Story]) -> None:
        previous, following = Catalog(library).neighbors("1")
        assert previous.id == "3"
        assert following.id == "2"

    def test_neighbors_of_unknown_story(self, library: list[Story]) -> None:
        assert Catalog(library).neighbors("404") == (None, None)

    def test_get_all_returns_copy(self, library: list[Story]) -> None:
        catalog = Catalog(library)
        catalog.get_all().clear()
        assert len(catalog) == 3
