from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

from ..datamodels import Story


class RepositoryError(Exception):
    """A source could not produce its story collection."""


class BaseSource(ABC):
    """Abstract base class for a story source."""

    name = "base"

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    @abstractmethod
    def fetch_stories(self) -> List[Story]:
        """Return the full story collection or raise RepositoryError.

        Blocking; callers run it off the event loop. Never retries.
        """
        pass


def unique_stories(items: Iterable[Story]) -> List[Story]:
    seen = set()
    out: List[Story] = []
    for s in items:
        if s.objectID not in seen:
            seen.add(s.objectID)
            out.append(s)
    return out
