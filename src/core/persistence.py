from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol, Sequence

from core.quests import CorruptSnapshot, QuestTrackerError

logger = logging.getLogger(__name__)

Snapshot = dict[str, Any]


class PersistenceError(QuestTrackerError):
    """Raised when quest data cannot be read from or written to storage."""


class PersistenceAdapter(Protocol):
    def load(self) -> list[Snapshot] | None:
        """Return the stored records, or None when nothing has been saved yet."""
        ...

    def save(self, snapshots: Sequence[Snapshot]) -> None:
        """Persist the records, raising PersistenceError on failure."""
        ...


class JsonQuestFile:
    """Stores quest snapshots as a pretty-printed JSON array."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> list[Snapshot] | None:
        if not self.path.exists():
            logger.info("No save file at %s; starting fresh", self.path)
            return None

        try:
            raw = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptSnapshot(f"{self.path} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise PersistenceError(f"Could not read {self.path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise CorruptSnapshot(f"{self.path} is not valid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise CorruptSnapshot(f"{self.path} must contain a list of quests.")

        logger.info("Loaded %d quest records from %s", len(data), self.path)
        return data

    def save(self, snapshots: Sequence[Snapshot]) -> None:
        payload = json.dumps(list(snapshots), indent=2, ensure_ascii=False)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload + "\n", encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path.exists():
                tmp_path.unlink()
            raise PersistenceError(f"Could not write {self.path}: {exc}") from exc
        logger.info("Saved %d quests to %s", len(snapshots), self.path)
