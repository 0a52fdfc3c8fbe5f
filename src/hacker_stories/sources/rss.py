from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

import feedparser
from bs4 import BeautifulSoup

from ..config import REQUEST_HEADERS, RSS_FEED_URL
from ..datamodels import Story
from .base import BaseSource, RepositoryError, unique_stories

logger = logging.getLogger("hacker_stories")

ITEM_ID_PATTERN = re.compile(r"[?&]id=(\d+)")
POINTS_PATTERN = re.compile(r"Points:\s*(\d+)", re.I)
COMMENTS_PATTERN = re.compile(r"#\s*Comments:\s*(\d+)", re.I)


class RSSSource(BaseSource):
    """Stories from an hnrss.org style feed."""

    name = "rss"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.url = self.config.get("url", RSS_FEED_URL)

    def fetch_stories(self) -> List[Story]:
        logger.debug("Fetching feed %s", self.url)
        feed = feedparser.parse(self.url, request_headers=REQUEST_HEADERS)
        entries = feed.get("entries", [])
        status = feed.get("status")
        if status is not None and status >= 400:
            raise RepositoryError(f"Feed {self.url} returned HTTP {status}")
        if feed.get("bozo") and not entries:
            raise RepositoryError(
                f"Failed to parse feed {self.url}: {feed.get('bozo_exception')}"
            )

        stories = []
        for entry in entries:
            story = _entry_to_story(entry)
            if story is None:
                logger.debug("Skipping feed entry without an item id: %s", entry.get("link"))
                continue
            stories.append(story)
        logger.debug("Parsed %d stories from %s", len(stories), self.url)
        return unique_stories(stories)


def _entry_to_story(entry: Dict[str, Any]) -> Optional[Story]:
    object_id = _item_id(entry.get("comments")) or _item_id(entry.get("id"))
    if object_id is None:
        return None
    summary_html = entry.get("summary", "")
    summary_text = BeautifulSoup(summary_html, "lxml").get_text(" ") if summary_html else ""
    return Story(
        objectID=object_id,
        url=entry.get("link", ""),
        title=entry.get("title", ""),
        author=entry.get("author", ""),
        num_comments=_first_int(COMMENTS_PATTERN, summary_text),
        points=_first_int(POINTS_PATTERN, summary_text),
    )


def _item_id(link: Optional[str]) -> Optional[int]:
    if not link:
        return None
    if m := ITEM_ID_PATTERN.search(link):
        return int(m.group(1))
    return None


def _first_int(pattern: re.Pattern, text: str) -> int:
    if m := pattern.search(text):
        return int(m.group(1))
    return 0
