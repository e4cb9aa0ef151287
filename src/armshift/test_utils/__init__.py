from .workspace import WorkspaceFactory
from .bus import SpyBus, SpyRenderer

__all__ = ["WorkspaceFactory", "SpyBus", "SpyRenderer"]
