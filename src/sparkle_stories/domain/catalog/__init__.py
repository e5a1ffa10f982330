"""Catalog domain - story records, loading and queries.

This domain handles:
- Story records parsed from the stories JSON file
- Lookup by id and circular next/previous navigation
- Category extraction and text/category filtering
"""

from .models import Story, parse_timestamp

from .queries import (
    Catalog,
    find_story_index,
    get_story_by_id,
    get_categories,
    get_featured_stories,
    get_next_story,
    get_previous_story,
    filter_stories,
)

from .loader import load_stories, load_catalog

__all__ = [
    "Story",
    "parse_timestamp",
    "Catalog",
    "find_story_index",
    "get_story_by_id",
    "get_categories",
    "get_featured_stories",
    "get_next_story",
    "get_previous_story",
    "filter_stories",
    "load_stories",
    "load_catalog",
]
