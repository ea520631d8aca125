"""Operator session state.

The only value the generator persists outside the bundle tree is the path of
the last archive it produced, so a later request can offer it for download.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from bundle_creator.utils import load_json, save_json

LAST_ARCHIVE_KEY = "CONTAO-BUNDLE-CREATOR-LAST-ZIP"


class SessionStore:
    """Small JSON-backed key/value store.

    Every ``set`` writes the whole file, so separate instances pointing at
    the same path see each other's values.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            return load_json(self.path)
        except json.JSONDecodeError:
            # Corrupted session file -- start fresh.
            return {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        save_json(data, self.path)

    def clear(self, key: str | None = None) -> None:
        """Remove *key*, or every key when *key* is ``None``."""
        if key is None:
            save_json({}, self.path)
            return
        data = self._read()
        if key in data:
            del data[key]
            save_json(data, self.path)
