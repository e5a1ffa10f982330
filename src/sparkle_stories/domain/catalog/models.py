"""
Story catalog domain models.

Contains the immutable Story record and its JSON mapping.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Story:
    """A story available for browsing and reading.

    Labels keep their file order and may repeat; category extraction treats
    them as a set.
    """

    id: str
    title: str
    description: str
    full_text: str
    author: str
    cover_image_ref: str
    character_image_ref: str
    labels: tuple[str, ...]
    created_at: datetime
    featured: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Story":
        """Build a Story from a stories.json record (camelCase keys).

        Raises:
            KeyError: If a required key is missing
            ValueError: If a field has the wrong type or createdAt is not ISO 8601
        """
        labels = data.get("labels", [])
        if not isinstance(labels, list) or not all(
            isinstance(label, str) for label in labels
        ):
            raise ValueError("labels must be a list of strings")

        story_id = data["id"]
        if not isinstance(story_id, str) or not story_id:
            raise ValueError("id must be a non-empty string")

        return cls(
            id=story_id,
            title=str(data["title"]),
            description=str(data.get("description", "")),
            full_text=str(data.get("story", "")),
            author=str(data.get("author", "")),
            cover_image_ref=str(data.get("coverImage", "")),
            character_image_ref=str(data.get("characterPhoto", "")),
            labels=tuple(labels),
            created_at=parse_timestamp(data["createdAt"]),
            featured=data.get("featured") is True,
        )

    @property
    def paragraphs(self) -> list[str]:
        """Full text split on line breaks, blank lines dropped."""
        return [line for line in self.full_text.splitlines() if line.strip()]


def parse_timestamp(value: Optional[str]) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing 'Z' for UTC."""
    if not isinstance(value, str):
        raise ValueError(f"createdAt must be an ISO 8601 string, got {value!r}")
    return datetime.fromisoformat(value)
