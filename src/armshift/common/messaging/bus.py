from typing import Any, Optional

from .protocols import Renderer
from .store import MessageStore

LEVELS = {
    "debug": 10,
    "info": 20,
    "success": 25,
    "warning": 30,
    "error": 40,
}


class MessageBus:
    """
    Routes user-facing feedback to a renderer.

    Callers address messages by ID; the bus resolves the text through its
    store, filters by level and hands the result to the renderer. Without a
    renderer every message is dropped.
    """

    def __init__(self, store: Optional[MessageStore] = None, level: str = "info"):
        self._store = store or MessageStore()
        self._renderer: Optional[Renderer] = None
        self._threshold = LEVELS[level]

    def set_renderer(self, renderer: Optional[Renderer]) -> None:
        self._renderer = renderer

    def set_level(self, level: str) -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown message level: {level}")
        self._threshold = LEVELS[level]

    def render_to_string(self, msg_id: str, **kwargs: Any) -> str:
        return self._store.get(msg_id, **kwargs)

    def _render(self, level: str, msg_id: str, **kwargs: Any) -> None:
        if self._renderer is None or LEVELS[level] < self._threshold:
            return
        self._renderer.render(self.render_to_string(msg_id, **kwargs), level)

    def debug(self, msg_id: str, **kwargs: Any) -> None:
        self._render("debug", msg_id, **kwargs)

    def info(self, msg_id: str, **kwargs: Any) -> None:
        self._render("info", msg_id, **kwargs)

    def success(self, msg_id: str, **kwargs: Any) -> None:
        self._render("success", msg_id, **kwargs)

    def warning(self, msg_id: str, **kwargs: Any) -> None:
        self._render("warning", msg_id, **kwargs)

    def error(self, msg_id: str, **kwargs: Any) -> None:
        self._render("error", msg_id, **kwargs)
