from __future__ import annotations

import logging
import webbrowser
from typing import Any, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.worker import Worker, WorkerState
from textual.widgets import (
    Header,
    Input,
    ListView,
    LoadingIndicator,
    Static,
)

from .config import UI_DEFAULTS
from .controller import StoriesController
from .messages import StoriesChanged
from .screens import ErrorScreen
from .widgets import ErrorMessage, StatusBar, StoryItem

logger = logging.getLogger("hacker_stories")


class StoriesApp(App):
    TITLE = "My Hacker Stories"

    CSS_PATH = "app.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Reload"),
        Binding("d", "remove_story", "Remove"),
        Binding("R", "reset", "Reset"),
        Binding("o", "open_in_browser", "Open in browser"),
        Binding("/", "focus_search", "Search"),
        Binding("escape", "focus_list", "Back to list", show=False),
    ]

    def __init__(
        self,
        controller: Optional[StoriesController] = None,
        config: Optional[dict[str, Any]] = None,
        startup_error: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.controller = controller
        self.config = config or {}
        self.startup_error = startup_error

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            yield Static("Search", classes="pane-title")
            yield Input(
                value=self.controller.search_term if self.controller else "",
                placeholder="Filter stories by title...",
                id="search",
            )
            yield LoadingIndicator(id="stories-loading")
            yield ErrorMessage(id="stories-error")
            yield ListView(id="stories-list")
        yield StatusBar()

    def on_mount(self) -> None:
        if self.controller is None:
            self.push_screen(
                ErrorScreen(
                    "No story source available",
                    self.startup_error
                    or "Please configure a source in `~/.config/hacker_stories/config.json`.",
                )
            )
            return

        self.controller.subscribe(
            lambda: self.post_message(StoriesChanged())
        )
        keybindings_text = self.config.get("ui", {}).get(
            "statusbar_keybindings", UI_DEFAULTS["statusbar_keybindings"]
        )
        self.query_one(StatusBar).set_keybindings(keybindings_text.format(color="cyan"))
        self._render_stories()

        self.run_worker(self.controller.load(), name="stories_loader")
        self.query_one("#stories-list", ListView).focus()

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if getattr(event.worker, "name", None) != "stories_loader":
            return
        if event.state is WorkerState.ERROR:
            logger.error("Stories loader worker failed: %s", event.worker.error)
        if event.state not in (WorkerState.PENDING, WorkerState.RUNNING):
            self._render_stories()

    def on_stories_changed(self, message: StoriesChanged) -> None:
        self._render_stories()

    def _render_stories(self) -> None:
        view = self.controller.view()

        self.query_one("#stories-loading", LoadingIndicator).display = view.is_loading
        error_message = self.query_one("#stories-error", ErrorMessage)
        if view.is_error:
            error_message.show(f"Something went wrong: {view.error}")
        else:
            error_message.display = False

        status_bar = self.query_one(StatusBar)
        if view.is_loading:
            status_bar.loading_status = "Loading..."
        elif view.is_error:
            status_bar.loading_status = "Error loading stories."
        else:
            status_bar.loading_status = f"{len(view.stories)} stories"

        stories_list = self.query_one("#stories-list", ListView)
        stories_list.clear()
        for story in view.stories:
            stories_list.append(StoryItem(story))

    def _highlighted_item(self) -> Optional[StoryItem]:
        item = self.query_one("#stories-list", ListView).highlighted_child
        return item if isinstance(item, StoryItem) else None

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search" and self.controller is not None:
            self.controller.on_search_change(event.value)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, StoryItem):
            webbrowser.open(event.item.story.url)

    def action_remove_story(self) -> None:
        if self.controller is None:
            return
        item = self._highlighted_item()
        if item is not None:
            self.controller.on_remove(item.story)

    def action_reset(self) -> None:
        if self.controller is not None:
            self.controller.on_reset()

    def action_refresh(self) -> None:
        if self.controller is not None:
            self.run_worker(self.controller.reload(), name="stories_loader")

    def action_open_in_browser(self) -> None:
        if self.controller is None:
            return
        item = self._highlighted_item()
        if item is not None:
            webbrowser.open(item.story.url)

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    def action_focus_list(self) -> None:
        self.query_one("#stories-list", ListView).focus()
