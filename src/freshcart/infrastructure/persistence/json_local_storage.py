"""JSON-file-backed implementation of KeyValueStorage.

One file holds every key, like a browser origin's local storage. A
write that fails (full disk, read-only profile) is logged and dropped:
the cart is a convenience, not a ledger.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from freshcart.domain.repository.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class JsonLocalStorage(KeyValueStorage):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- KeyValueStorage interface --------------------------------------------

    def get_item(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._persist(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._persist(items)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, str]:
        if not self._file_path.exists():
            return {}
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning(f"Unreadable local storage {self._file_path}: {exc}")
            return {}
        return raw if isinstance(raw, dict) else {}

    def _persist(self, items: dict[str, str]) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps(items, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            logger.warning(f"Local storage write failed, change not saved: {exc}")
