from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError

from .json_store import atomic_write_json, read_json
from .memory_store import MemoryFlatStore, StoredEntry

logger = logging.getLogger(__name__)


class StoreDocument(BaseModel):
    """
    Mirrors the on-disk store schema:
      { "entries": { "<name>": { "kind": "int32", "value": 3 } } }
    """

    entries: dict[str, StoredEntry] = Field(default_factory=dict)

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any]) -> "StoreDocument":
        raw = doc.get("entries")
        if not isinstance(raw, dict):
            return cls()
        entries: dict[str, StoredEntry] = {}
        for name, rec in raw.items():
            try:
                entries[str(name)] = StoredEntry.model_validate(rec)
            except ValidationError as e:
                logger.warning("Dropping unreadable entry %r: %s", name, e.errors()[0]["msg"])
        return cls(entries=entries)

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class DiskFlatStore(MemoryFlatStore):
    """
    Flat store persisted as a single JSON document at a fixed path.

    - Loads the document once; reads are served from memory.
    - Every apply() rewrites the whole document atomically before the new
      entries become visible, so a failed write publishes nothing.
    """

    def __init__(self, path: Path):
        self._path = path
        raw = read_json(path)
        doc = StoreDocument.from_disk_doc(raw) if isinstance(raw, dict) else StoreDocument()
        super().__init__(doc.entries)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def binding_key(self) -> tuple[str, str]:
        # two stores on one file would overwrite each other's entries
        return ("disk", str(self._path.resolve()))

    def _publish(self, entries: dict[str, StoredEntry]) -> None:
        doc = StoreDocument(entries=entries).to_disk_doc()
        atomic_write_json(self._path, doc)
