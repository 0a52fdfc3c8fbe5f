from __future__ import annotations

from typing import Iterable, List

from .datamodels import Story


def filter_stories(stories: Iterable[Story], term: str) -> List[Story]:
    """Return the stories whose title contains ``term``, ignoring case."""
    query = term.lower()
    return [s for s in stories if query in s.title.lower()]
