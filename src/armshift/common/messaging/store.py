import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)


def detect_lang() -> str:
    # 1. Explicit override
    armshift_lang = os.getenv("ARMSHIFT_LANG")
    if armshift_lang:
        return armshift_lang

    # 2. System LANG (e.g. "en_US.UTF-8" -> "en")
    sys_lang = os.getenv("LANG")
    if sys_lang:
        base_lang = sys_lang.split(".")[0].split("_")[0]
        if base_lang:
            return base_lang

    return "en"


class MessageStore:
    """
    Resolves dotted message IDs to templates.

    Catalogues live in `<assets_root>/<lang>/<namespace>.json`; the file
    stem is the first segment of every ID it defines, so `migrate.json`
    holding {"run": {"planning": "..."}} answers `migrate.run.planning`.
    Unknown IDs resolve to themselves.
    """

    def __init__(
        self,
        assets_root: Optional[Path] = None,
        lang: Optional[str] = None,
        default_lang: str = "en",
        messages: Optional[Dict[str, str]] = None,
    ):
        self.assets_root = assets_root
        self.lang = lang or detect_lang()
        self.default_lang = default_lang
        self._messages: Dict[str, str] = {}
        if assets_root is not None:
            self._messages.update(self._load(self.default_lang))
            if self.lang != self.default_lang:
                self._messages.update(self._load(self.lang))
        if messages:
            self._messages.update(messages)

    def _load(self, lang: str) -> Dict[str, str]:
        lang_dir = self.assets_root / lang
        if not lang_dir.is_dir():
            return {}
        flat: Dict[str, str] = {}
        for path in sorted(lang_dir.glob("*.json")):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                log.warning(f"Could not load message catalogue {path}: {e}")
                continue
            _flatten(data, path.stem, flat)
        return flat

    def template(self, msg_id: str) -> str:
        return self._messages.get(str(msg_id), str(msg_id))

    def get(self, msg_id: str, **kwargs: Any) -> str:
        template = self.template(msg_id)
        if not kwargs:
            return template
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return template


def _flatten(data: Any, prefix: str, out: Dict[str, str]) -> None:
    if isinstance(data, dict):
        for key, value in data.items():
            _flatten(value, f"{prefix}.{key}", out)
    else:
        out[prefix] = str(data)
