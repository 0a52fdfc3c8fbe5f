from __future__ import annotations

import asyncio
import threading
from typing import List

import pytest

from hacker_stories.controller import StoriesController
from hacker_stories.datamodels import LoadStatus, Story
from hacker_stories.sources.base import BaseSource, RepositoryError
from hacker_stories.sources.simulated import INITIAL_STORIES, SimulatedSource
from hacker_stories.storage import MemoryStore, PersistedCell

STORY_A = Story(objectID=10, url="https://a.example", title="Alpha React", author="a")
STORY_B = Story(objectID=11, url="https://b.example", title="Beta", author="b")


class GatedSource(BaseSource):
    """Blocks inside fetch_stories until the test opens the gate."""

    name = "gated"

    def __init__(self, stories: List[Story], fail: bool = False):
        super().__init__({})
        self.stories = stories
        self.fail = fail
        self.gate = threading.Event()
        self.calls = 0

    def fetch_stories(self) -> List[Story]:
        self.calls += 1
        self.gate.wait(timeout=5)
        if self.fail:
            raise RepositoryError("network down")
        return list(self.stories)


def make_controller(source: BaseSource, term: str = "") -> StoriesController:
    cell = PersistedCell(MemoryStore(), "search", fallback=term)
    return StoriesController(source=source, search=cell)


async def wait_for_status(controller: StoriesController, status: LoadStatus) -> None:
    for _ in range(200):
        if controller.status is status:
            return
        await asyncio.sleep(0.01)
    raise AssertionError(f"controller never reached {status}")


def test_initial_view_is_idle_and_empty():
    controller = make_controller(SimulatedSource({"delay": 0}))
    view = controller.view()
    assert controller.status is LoadStatus.IDLE
    assert view.stories == ()
    assert view.is_loading is False
    assert view.is_error is False


@pytest.mark.asyncio
async def test_successful_load_populates_state():
    source = SimulatedSource({"delay": 0}, stories=(STORY_A, STORY_B))
    controller = make_controller(source)

    await controller.load()

    view = controller.view()
    assert controller.status is LoadStatus.LOADED
    assert view.is_loading is False
    assert view.is_error is False
    assert view.stories == (STORY_A, STORY_B)


@pytest.mark.asyncio
async def test_failed_load_sets_error_and_keeps_state():
    controller = make_controller(SimulatedSource({"delay": 0, "fail": True}))

    await controller.load()

    view = controller.view()
    assert controller.status is LoadStatus.FAILED
    assert view.is_loading is False
    assert view.is_error is True
    assert view.stories == ()
    assert "Simulated fetch failure" in view.error


@pytest.mark.asyncio
async def test_failed_reload_keeps_last_good_state():
    source = SimulatedSource({"delay": 0}, stories=(STORY_A,))
    controller = make_controller(source)
    await controller.load()

    source.fail = True
    await controller.reload()

    assert controller.view().is_error is True
    assert controller.store.state == (STORY_A,)


@pytest.mark.asyncio
async def test_is_loading_while_fetch_is_pending():
    source = GatedSource([STORY_A])
    controller = make_controller(source)

    task = asyncio.create_task(controller.load())
    await wait_for_status(controller, LoadStatus.LOADING)
    assert controller.view().is_loading is True

    source.gate.set()
    await task
    assert controller.view().is_loading is False


@pytest.mark.asyncio
async def test_load_runs_once_per_session():
    source = GatedSource([STORY_A])
    controller = make_controller(source)

    task = asyncio.create_task(controller.load())
    await wait_for_status(controller, LoadStatus.LOADING)
    await controller.load()
    source.gate.set()
    await task
    await controller.load()

    assert source.calls == 1
    assert controller.status is LoadStatus.LOADED


@pytest.mark.asyncio
async def test_reload_after_failure_clears_error():
    source = SimulatedSource({"delay": 0, "fail": True}, stories=(STORY_A,))
    controller = make_controller(source)
    await controller.load()
    assert controller.view().is_error is True

    source.fail = False
    await controller.reload()

    view = controller.view()
    assert view.is_error is False
    assert view.error is None
    assert view.stories == (STORY_A,)


@pytest.mark.asyncio
async def test_user_events_apply_during_pending_fetch():
    source = GatedSource([STORY_A, STORY_B])
    controller = make_controller(source)

    task = asyncio.create_task(controller.load())
    await wait_for_status(controller, LoadStatus.LOADING)

    controller.on_reset()
    assert controller.store.state == INITIAL_STORIES
    controller.on_remove(INITIAL_STORIES[0])
    assert controller.store.state == (INITIAL_STORIES[1],)
    controller.on_search_change("beta")
    assert controller.search_term == "beta"

    source.gate.set()
    await task
    assert controller.view().stories == (STORY_B,)


@pytest.mark.asyncio
async def test_completion_after_close_is_discarded():
    source = GatedSource([STORY_A])
    controller = make_controller(source)
    notified = []
    controller.subscribe(lambda: notified.append(controller.status))

    task = asyncio.create_task(controller.load())
    await wait_for_status(controller, LoadStatus.LOADING)
    controller.close()
    source.gate.set()
    await task

    assert controller.store.state == ()
    assert controller.status is LoadStatus.LOADING
    assert notified == [LoadStatus.LOADING]


@pytest.mark.asyncio
async def test_failure_after_close_is_discarded():
    source = GatedSource([], fail=True)
    controller = make_controller(source)

    task = asyncio.create_task(controller.load())
    await wait_for_status(controller, LoadStatus.LOADING)
    controller.close()
    source.gate.set()
    await task

    assert controller.view().is_error is False


def test_remove_and_reset_from_seed():
    controller = make_controller(SimulatedSource({"delay": 0}))
    controller.on_reset()
    controller.on_remove(INITIAL_STORIES[0])
    assert controller.store.state == (INITIAL_STORIES[1],)
    controller.on_remove(INITIAL_STORIES[0])
    assert controller.store.state == (INITIAL_STORIES[1],)
    controller.on_reset()
    assert controller.store.state == INITIAL_STORIES


def test_view_applies_persisted_search_term():
    store = MemoryStore({"search": "redux"})
    controller = StoriesController(
        source=SimulatedSource({"delay": 0}),
        search=PersistedCell(store, "search", fallback="React"),
    )
    controller.on_reset()
    assert [s.title for s in controller.view().stories] == ["Redux"]

    controller.on_search_change("")
    assert controller.view().stories == INITIAL_STORIES
    assert store.get("search") == ""


def test_subscribers_hear_every_change():
    controller = make_controller(SimulatedSource({"delay": 0}))
    calls = []
    controller.subscribe(lambda: calls.append(1))
    controller.on_reset()
    controller.on_search_change("x")
    controller.on_remove(INITIAL_STORIES[0])
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_duplicate_ids_from_source_fail_the_load():
    clash = Story(objectID=STORY_A.objectID, url="https://c.example", title="Clash", author="c")
    source = SimulatedSource({"delay": 0}, stories=(STORY_A, clash))
    controller = make_controller(source)
    controller.on_reset()

    await controller.load()

    view = controller.view()
    assert controller.status is LoadStatus.FAILED
    assert view.is_loading is False
    assert view.is_error is True
    assert "Duplicate objectID" in view.error
    assert controller.store.state == INITIAL_STORIES


@pytest.mark.asyncio
async def test_reload_recovers_after_duplicate_ids():
    clash = Story(objectID=STORY_A.objectID, url="https://c.example", title="Clash", author="c")
    source = SimulatedSource({"delay": 0}, stories=(STORY_A, clash))
    controller = make_controller(source)
    await controller.load()

    source.stories = (STORY_A, STORY_B)
    await controller.reload()

    assert controller.status is LoadStatus.LOADED
    assert controller.view().stories == (STORY_A, STORY_B)
