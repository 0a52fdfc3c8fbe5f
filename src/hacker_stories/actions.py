from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from .datamodels import Story


class DuplicateStoryError(ValueError):
    """Raised when a story collection repeats an objectID."""


@dataclass(frozen=True)
class SetStories:
    """Replace the whole story list (initial load or reset)."""

    payload: Tuple[Story, ...]

    def __init__(self, payload: Iterable[Story]):
        stories = tuple(payload)
        seen = set()
        for story in stories:
            if story.objectID in seen:
                raise DuplicateStoryError(f"Duplicate objectID: {story.objectID}")
            seen.add(story.objectID)
        object.__setattr__(self, "payload", stories)


@dataclass(frozen=True)
class RemoveStory:
    """Drop the story sharing payload's objectID."""

    payload: Story


StoriesAction = Union[SetStories, RemoveStory]
