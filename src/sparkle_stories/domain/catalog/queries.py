"""
Story catalog queries.

Pure, synchronous lookups over an already-loaded list of stories. Nothing here
raises for "not found": lookups return None and filters may return [].
"""

from typing import Optional, Sequence

from .models import Story


def find_story_index(stories: Sequence[Story], story_id: str) -> Optional[int]:
    """Get the position (0-based index) of the first story with story_id.

    Returns:
        0-based position of the story, or None if not found
    """
    for i, story in enumerate(stories):
        if story.id == story_id:
            return i
    return None


def get_story_by_id(stories: Sequence[Story], story_id: str) -> Optional[Story]:
    """Get the first story with story_id, or None."""
    index = find_story_index(stories, story_id)
    return stories[index] if index is not None else None


def get_categories(stories: Sequence[Story]) -> list[str]:
    """Get every distinct label across all stories, sorted case-sensitively."""
    categories: set[str] = set()
    for story in stories:
        categories.update(story.labels)
    return sorted(categories)


def get_featured_stories(stories: Sequence[Story]) -> list[Story]:
    """Get stories flagged as featured, in catalog order."""
    return [story for story in stories if story.featured]


def get_next_story(stories: Sequence[Story], story_id: str) -> Optional[Story]:
    """Get the story after story_id, wrapping from the last to the first.

    Returns:
        Next story, or None if the list is empty or story_id is not found
    """
    if not stories:
        return None

    index = find_story_index(stories, story_id)
    if index is None:
        return None

    return stories[(index + 1) % len(stories)]


def get_previous_story(stories: Sequence[Story], story_id: str) -> Optional[Story]:
    """Get the story before story_id, wrapping from the first to the last.

    Returns:
        Previous story, or None if the list is empty or story_id is not found
    """
    if not stories:
        return None

    index = find_story_index(stories, story_id)
    if index is None:
        return None

    return stories[(index - 1 + len(stories)) % len(stories)]


def filter_stories(
    stories: Sequence[Story], query: Optional[str], category: Optional[str]
) -> list[Story]:
    """Filter stories by search text and/or category.

    Args:
        stories: Stories to filter
        query: Text matched case-insensitively against title and description
            after trimming; blank means no text filter
        category: Label matched case-insensitively; None or "" means all

    Returns:
        Stories passing both filters, in their original order
    """
    filtered = list(stories)

    if category:
        wanted = category.lower()
        filtered = [
            story
            for story in filtered
            if any(label.lower() == wanted for label in story.labels)
        ]

    search_term = (query or "").strip().lower()
    if search_term:
        filtered = [
            story
            for story in filtered
            if search_term in story.title.lower()
            or search_term in story.description.lower()
        ]

    return filtered


class Catalog:
    """A loaded story catalog with the lookups the story pages need."""

    def __init__(self, stories: Sequence[Story]):
        self._stories = list(stories)

    def __len__(self) -> int:
        return len(self._stories)

    def get_all(self) -> list[Story]:
        return list(self._stories)

    def get_by_id(self, story_id: str) -> Optional[Story]:
        return get_story_by_id(self._stories, story_id)

    def get_categories(self) -> list[str]:
        return get_categories(self._stories)

    def get_featured(self) -> list[Story]:
        return get_featured_stories(self._stories)

    def get_next(self, story_id: str) -> Optional[Story]:
        return get_next_story(self._stories, story_id)

    def get_previous(self, story_id: str) -> Optional[Story]:
        return get_previous_story(self._stories, story_id)

    def neighbors(self, story_id: str) -> tuple[Optional[Story], Optional[Story]]:
        """Return (previous, next) for the story page navigation."""
        return self.get_previous(story_id), self.get_next(story_id)

    def filter(self, query: Optional[str], category: Optional[str]) -> list[Story]:
        return filter_stories(self._stories, query, category)
