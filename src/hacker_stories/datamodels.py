from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

# --- Data models ---
@dataclass(frozen=True)
class Story:
    objectID: int
    url: str
    title: str
    author: str
    num_comments: int = 0
    points: int = 0

    def __post_init__(self) -> None:
        if self.num_comments < 0 or self.points < 0:
            raise ValueError(
                f"Story {self.objectID}: num_comments and points must be non-negative"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Story:
        return cls(
            objectID=int(data["objectID"]),
            url=data.get("url") or "",
            title=data.get("title") or "",
            author=data.get("author") or "",
            num_comments=int(data.get("num_comments") or 0),
            points=int(data.get("points") or 0),
        )


StoriesState = Tuple[Story, ...]


class LoadStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"

    @property
    def is_loading(self) -> bool:
        return self is LoadStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self is LoadStatus.FAILED


@dataclass(frozen=True)
class StoriesView:
    """Read-only snapshot handed to the UI on every render."""

    stories: Tuple[Story, ...]
    is_loading: bool
    is_error: bool
    search_term: str
    error: Optional[str] = None
