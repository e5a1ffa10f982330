"""Stories router: catalog browsing, filtering and the reader page."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from sparkle_stories.domain.catalog import Catalog

from ..deps import get_catalog
from ..schemas import StoryDetail, StoryPreview

router = APIRouter()


@router.get("/stories", response_model=list[StoryPreview])
async def list_stories(
    query: str = "",
    category: Optional[str] = None,
    catalog: Catalog = Depends(get_catalog),
):
    """List stories, optionally filtered by search text and category."""
    stories = catalog.filter(query, category)
    return [StoryPreview.from_story(story) for story in stories]


@router.get("/stories/featured", response_model=list[StoryPreview])
async def list_featured(catalog: Catalog = Depends(get_catalog)):
    return [StoryPreview.from_story(story) for story in catalog.get_featured()]


@router.get("/stories/{story_id}", response_model=StoryDetail)
async def get_story(story_id: str, catalog: Catalog = Depends(get_catalog)):
    """Full story plus the ids of its circular previous/next neighbours."""
    story = catalog.get_by_id(story_id)
    if story is None:
        logger.debug(f"Story not found: {story_id}")
        raise HTTPException(404, f"Story {story_id} not found")

    previous, following = catalog.neighbors(story_id)
    return StoryDetail.from_story_with_neighbors(story, previous, following)


@router.get("/categories", response_model=list[str])
async def list_categories(catalog: Catalog = Depends(get_catalog)):
    return catalog.get_categories()
