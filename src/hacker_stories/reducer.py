"""
Stories reducer.

``stories_reducer`` is a pure function of (state, action): no IO, no logging,
no mutation of its inputs. ``StoriesStore`` is the only place the current
state lives; everything else reads ``store.state`` or dispatches.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List

from .actions import RemoveStory, SetStories, StoriesAction
from .datamodels import StoriesState

logger = logging.getLogger("hacker_stories")

Listener = Callable[[], None]


class UnknownActionError(TypeError):
    """An object outside the closed action set reached the reducer."""


def stories_reducer(state: StoriesState, action: StoriesAction) -> StoriesState:
    if isinstance(action, SetStories):
        return action.payload
    if isinstance(action, RemoveStory):
        target = action.payload.objectID
        if not any(story.objectID == target for story in state):
            return state
        return tuple(story for story in state if story.objectID != target)
    raise UnknownActionError(f"Unknown action: {action!r}")


def replay(actions: Iterable[StoriesAction], initial: StoriesState = ()) -> StoriesState:
    """Rebuild state by folding the reducer over ``actions``."""
    state = initial
    for action in actions:
        state = stories_reducer(state, action)
    return state


class StoriesStore:
    def __init__(self, initial: StoriesState = ()):
        self._state: StoriesState = tuple(initial)
        self.history: List[StoriesAction] = []
        self._listeners: List[Listener] = []

    @property
    def state(self) -> StoriesState:
        return self._state

    def dispatch(self, action: StoriesAction) -> StoriesState:
        new_state = stories_reducer(self._state, action)
        self.history.append(action)
        logger.debug(
            "Dispatched %s: %d -> %d stories",
            type(action).__name__,
            len(self._state),
            len(new_state),
        )
        changed = new_state is not self._state
        self._state = new_state
        if changed:
            for listener in list(self._listeners):
                listener()
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
