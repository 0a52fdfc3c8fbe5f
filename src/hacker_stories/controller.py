"""
Load sequencing and user-event wiring for the stories list.

IDLE --load()--> LOADING --ok--> LOADED
                 LOADING --err--> FAILED

LOADED and FAILED are terminal until ``reload()`` re-enters IDLE. Remove,
reset and search edits never wait on a pending fetch.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, List, Optional

from .actions import RemoveStory, SetStories
from .datamodels import LoadStatus, Story, StoriesView
from .filtering import filter_stories
from .reducer import StoriesStore
from .sources.base import BaseSource
from .sources.simulated import INITIAL_STORIES
from .storage import PersistedCell

logger = logging.getLogger("hacker_stories")

Listener = Callable[[], None]


class StoriesController:
    def __init__(
        self,
        source: BaseSource,
        search: PersistedCell,
        initial_stories: Iterable[Story] = INITIAL_STORIES,
        store: Optional[StoriesStore] = None,
    ):
        self.source = source
        self.search = search
        self.initial_stories = tuple(initial_stories)
        self.store = store or StoriesStore()
        self.status = LoadStatus.IDLE
        self.error: Optional[str] = None
        self._closed = False
        self._listeners: List[Listener] = []
        self._unsubscribe = [
            self.store.subscribe(self._notify),
            self.search.subscribe(lambda _value: self._notify()),
        ]

    # --- Load sequence ---
    async def load(self) -> None:
        if self.status is not LoadStatus.IDLE:
            logger.debug("Load ignored in state %s", self.status.name)
            return

        self._set_status(LoadStatus.LOADING)
        self.error = None
        logger.info("Loading stories from %s source", self.source.name)
        try:
            stories = await asyncio.to_thread(self.source.fetch_stories)
            action = SetStories(stories)
        except Exception as e:
            if self._closed:
                logger.debug("Discarding failed load after close: %s", e)
                return
            logger.error("Failed to load stories: %s", e)
            self.error = str(e) or type(e).__name__
            self._set_status(LoadStatus.FAILED)
            return

        if self._closed:
            logger.debug("Discarding %d stories loaded after close", len(action.payload))
            return
        self.store.dispatch(action)
        self._set_status(LoadStatus.LOADED)
        logger.info("Loaded %d stories", len(self.store.state))

    async def reload(self) -> None:
        """Explicit restart: re-enter IDLE and load again."""
        if self.status is LoadStatus.LOADING:
            logger.debug("Reload ignored while a load is in flight")
            return
        self.status = LoadStatus.IDLE
        await self.load()

    # --- User events ---
    def on_search_change(self, term: str) -> None:
        self.search.set(term)

    def on_remove(self, story: Story) -> None:
        self.store.dispatch(RemoveStory(story))

    def on_reset(self) -> None:
        self.store.dispatch(SetStories(self.initial_stories))

    # --- Reading ---
    @property
    def search_term(self) -> str:
        return self.search.value

    def view(self) -> StoriesView:
        return StoriesView(
            stories=tuple(filter_stories(self.store.state, self.search.value)),
            is_loading=self.status.is_loading,
            is_error=self.status.is_error,
            search_term=self.search.value,
            error=self.error,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Tear down; a fetch still in flight completes as a no-op."""
        self._closed = True
        self._listeners.clear()
        for unsubscribe in self._unsubscribe:
            unsubscribe()

    def _set_status(self, status: LoadStatus) -> None:
        self.status = status
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
