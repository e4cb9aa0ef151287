from pathlib import Path

from .messaging import MessageBus, MessageStore

# --- Composition Root for armshift's feedback bus ---
# The bundled catalogues are loaded once; the CLI attaches a renderer.
_assets_root = Path(__file__).parent / "assets"

bus = MessageBus(store=MessageStore(assets_root=_assets_root))

__all__ = ["bus"]
