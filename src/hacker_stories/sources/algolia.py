from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List

import requests

from ..config import (
    ALGOLIA_SEARCH_URL,
    DEFAULT_SEARCH_TERM,
    HN_ITEM_URL,
    HTTP_TIMEOUT,
    REQUEST_HEADERS,
)
from ..datamodels import Story
from .base import BaseSource, RepositoryError, unique_stories

logger = logging.getLogger("hacker_stories")


class AlgoliaSource(BaseSource):
    """Stories from the Hacker News Algolia search API."""

    name = "algolia"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.query = self.config.get("query", DEFAULT_SEARCH_TERM)
        self.hits_per_page = int(self.config.get("hits_per_page", 20))
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        return s

    def fetch_stories(self) -> List[Story]:
        params = {"query": self.query, "tags": "story", "hitsPerPage": self.hits_per_page}
        try:
            logger.debug("Fetching %s with %s", ALGOLIA_SEARCH_URL, params)
            resp = self.session.get(ALGOLIA_SEARCH_URL, params=params, timeout=HTTP_TIMEOUT)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise RepositoryError(f"Request to {ALGOLIA_SEARCH_URL} failed: {e}") from e
        except ValueError as e:
            raise RepositoryError(f"Malformed response from {ALGOLIA_SEARCH_URL}: {e}") from e

        hits = data.get("hits") if isinstance(data, dict) else None
        if not isinstance(hits, list):
            raise RepositoryError("Response has no 'hits' list")

        stories = []
        for hit in hits:
            if not hit.get("title"):
                continue
            try:
                story = Story.from_dict(hit)
            except (KeyError, TypeError, ValueError) as e:
                logger.debug("Skipping malformed hit %s: %s", hit.get("objectID"), e)
                continue
            if not story.url:
                story = replace(story, url=HN_ITEM_URL.format(id=story.objectID))
            stories.append(story)
        logger.debug("Fetched %d stories for query %r", len(stories), self.query)
        return unique_stories(stories)
