from textual.message import Message

class StoriesChanged(Message):
    """Posted when the controller's state, search term or load status changes."""
