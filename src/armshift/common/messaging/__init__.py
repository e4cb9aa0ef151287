from .bus import LEVELS, MessageBus
from .protocols import Renderer
from .store import MessageStore, detect_lang

__all__ = ["LEVELS", "MessageBus", "Renderer", "MessageStore", "detect_lang"]
