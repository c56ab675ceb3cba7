"""Durable client record adapters.

InMemoryDurableStore backs a single process (and tests).
JsonFileDurableStore keeps the record in a JSON file so it survives
restarts, the way browser local storage survives page reloads.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from navigation.infrastructure.observability import (
    DefaultDurableStoreProbe,
    DurableStoreProbe,
)
from navigation.ports.exceptions import DurableStoreError


class InMemoryDurableStore:
    """Durable record held in a dictionary."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._items)


class JsonFileDurableStore:
    """Durable record persisted as one JSON object of string values.

    Writes go to a temporary file that replaces the target, so a crash never
    leaves a half-written record. An unreadable or malformed file reads as
    an empty record.
    """

    def __init__(self, path: str | Path, probe: DurableStoreProbe | None = None) -> None:
        """Initialize the store.

        Args:
            path: Location of the backing JSON file (created on first write)
            probe: Optional domain probe for observability
        """
        self._path = Path(path)
        self._probe = probe or DefaultDurableStoreProbe()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            self._probe.durable_record_unreadable(str(self._path), e)
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            self._probe.durable_record_unreadable(str(self._path), e)
            return {}

        if not isinstance(data, dict):
            self._probe.durable_record_unreadable(
                str(self._path), ValueError("record is not a JSON object")
            )
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _save(self, items: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError as e:
            raise DurableStoreError(f"Cannot write durable record {self._path}") from e

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._save(items)
