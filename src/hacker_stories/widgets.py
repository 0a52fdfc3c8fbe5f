from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import ListItem, Static
from textual.reactive import reactive
from rich.text import Text

from .datamodels import Story


# --- UI Widgets ---
class StoryItem(ListItem):
    def __init__(self, story: Story):
        super().__init__()
        self.story = story

    def compose(self) -> ComposeResult:
        with Horizontal(classes="story-container"):
            yield Static(self.story.title, classes="story-title")
            yield Static(self.story.author, classes="story-author")
            yield Static(f"{self.story.num_comments} comments", classes="story-comments")
            yield Static(f"{self.story.points} points", classes="story-points")


class StatusBar(Static):
    loading_status = reactive("")
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.update_display()

    def set_keybindings(self, hint: str) -> None:
        """Set the keybinding hint text."""
        self.keybinding_hint = hint

    def update_display(self) -> None:
        """Update the status bar display."""
        status_items = []
        if self.loading_status:
            status_items.append(self.loading_status)

        if self.keybinding_hint:
            status_items.append(self.keybinding_hint)

        self.update(" | ".join(status_items))

    def watch_loading_status(self, loading_status: str) -> None:
        self.update_display()

    def watch_keybinding_hint(self, keybinding_hint: str) -> None:
        self.update_display()


class ErrorMessage(Static):
    def __init__(self, message: str = "", **kwargs):
        super().__init__(Text(message, style="bold red"), **kwargs)

    def show(self, message: str) -> None:
        self.update(Text(message, style="bold red"))
        self.display = True
