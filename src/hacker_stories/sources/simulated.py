from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Tuple

from ..config import SIMULATED_DELAY
from ..datamodels import Story
from .base import BaseSource, RepositoryError

logger = logging.getLogger("hacker_stories")

INITIAL_STORIES: Tuple[Story, ...] = (
    Story(
        objectID=0,
        url="https://reactjs.org/",
        title="React",
        author="Jordan Walke",
        num_comments=3,
        points=4,
    ),
    Story(
        objectID=1,
        url="https://redux.js.org/",
        title="Redux",
        author="Dan Abramov, Andrew Clark",
        num_comments=2,
        points=5,
    ),
)


class SimulatedSource(BaseSource):
    """Serves a fixed collection after an artificial network delay."""

    name = "simulated"

    def __init__(self, config: Dict[str, Any], stories: Tuple[Story, ...] = INITIAL_STORIES):
        super().__init__(config)
        self.stories = stories
        self.delay = float(self.config.get("delay", SIMULATED_DELAY))
        self.fail = bool(self.config.get("fail", False))

    def fetch_stories(self) -> List[Story]:
        logger.debug("Simulated fetch started (delay=%.2fs, fail=%s)", self.delay, self.fail)
        if self.delay > 0:
            time.sleep(self.delay)
        if self.fail:
            logger.debug("Simulated fetch failing on request")
            raise RepositoryError("Simulated fetch failure")
        logger.debug("Simulated fetch returning %d stories", len(self.stories))
        return list(self.stories)
