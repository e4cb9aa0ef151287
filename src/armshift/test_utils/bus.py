from contextlib import contextmanager
from typing import Any, Dict, List, Optional


class SpyRenderer:
    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    def render(self, message: str, level: str) -> None:
        # The spy logic acts on record(), but satisfies the interface
        pass

    def record(self, level: str, msg_id: str, params: Dict[str, Any]):
        self.messages.append({"level": level, "id": str(msg_id), "params": params})


class SpyBus:
    def __init__(self):
        self._spy_renderer = SpyRenderer()

    @contextmanager
    def patch(self, monkeypatch: Any):
        # Lazy import so collection does not load armshift early
        import armshift.common

        real_bus = armshift.common.bus

        def intercept_render(level: str, msg_id: str, **kwargs: Any) -> None:
            self._spy_renderer.record(level, msg_id, kwargs)

        # Apply In-Place Patches
        monkeypatch.setattr(real_bus, "_render", intercept_render)
        monkeypatch.setattr(real_bus, "_renderer", self._spy_renderer)

        yield self

    def get_messages(self) -> List[Dict[str, Any]]:
        return self._spy_renderer.messages

    def assert_id_called(self, msg_id: str, level: Optional[str] = None):
        found = any(
            msg["id"] == msg_id and (level is None or msg["level"] == level)
            for msg in self.get_messages()
        )
        if not found:
            ids_seen = [m["id"] for m in self.get_messages()]
            raise AssertionError(
                f"Message with ID '{msg_id}' was not sent.\nCaptured IDs: {ids_seen}"
            )

    def assert_id_not_called(self, msg_id: str):
        ids_seen = [m["id"] for m in self.get_messages()]
        if msg_id in ids_seen:
            raise AssertionError(f"Message with ID '{msg_id}' was sent unexpectedly.")
