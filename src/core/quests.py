from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from core.settings import MAX_DIFFICULTY, MIN_DIFFICULTY

logger = logging.getLogger(__name__)

SNAPSHOT_KEYS = frozenset({"name", "description", "difficulty", "reward", "status"})


class QuestTrackerError(Exception):
    """Base class for recoverable quest tracker failures."""


class ValidationError(QuestTrackerError):
    """Raised when quest fields fail validation. ``field`` names the culprit."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class IllegalTransition(QuestTrackerError):
    """Raised when a status change is not the single legal next step."""


class CorruptSnapshot(QuestTrackerError):
    """Raised when persisted quest data is malformed."""


class QuestStatus(str, Enum):
    NOT_STARTED = "NotStarted"
    ACTIVE = "Active"
    COMPLETED = "Completed"

    @property
    def next_status(self) -> QuestStatus | None:
        if self is QuestStatus.NOT_STARTED:
            return QuestStatus.ACTIVE
        if self is QuestStatus.ACTIVE:
            return QuestStatus.COMPLETED
        return None


@dataclass(slots=True)
class Quest:
    name: str
    description: str
    difficulty: int
    reward: str
    status: QuestStatus = QuestStatus.NOT_STARTED

    def to_snapshot(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "difficulty": self.difficulty,
            "reward": self.reward,
            "status": self.status.value,
        }

    @classmethod
    def from_snapshot(cls, record: Mapping[str, Any]) -> Quest:
        """Build a quest from a persisted record, rejecting anything malformed."""
        if not isinstance(record, Mapping):
            raise CorruptSnapshot(f"Quest record must be an object, got {type(record).__name__}.")

        keys = set(record)
        missing = SNAPSHOT_KEYS - keys
        unknown = keys - SNAPSHOT_KEYS
        if missing:
            raise CorruptSnapshot(f"Quest record is missing {', '.join(sorted(missing))}.")
        if unknown:
            raise CorruptSnapshot(f"Quest record has unknown keys {', '.join(sorted(map(str, unknown)))}.")

        for key in ("name", "description", "reward", "status"):
            if not isinstance(record[key], str):
                raise CorruptSnapshot(f"Quest field '{key}' must be text.")

        try:
            status = QuestStatus(record["status"])
        except ValueError:
            raise CorruptSnapshot(f"Unknown quest status '{record['status']}'.") from None

        try:
            validate_fields(record["name"], record["description"], record["difficulty"], record["reward"])
        except ValidationError as exc:
            raise CorruptSnapshot(exc.message) from exc

        return cls(record["name"], record["description"], record["difficulty"], record["reward"], status)


def validate_fields(name: str, description: str, difficulty: int, reward: str) -> None:
    """Raise ValidationError for the first bad field. Values are checked as given, never altered."""
    if not name or not name.strip():
        raise ValidationError("name", "Quest name cannot be empty.")
    if (
        isinstance(difficulty, bool)
        or not isinstance(difficulty, int)
        or not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY
    ):
        raise ValidationError(
            "difficulty", f"Difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}."
        )
    if not reward or not reward.strip():
        raise ValidationError("reward", "Reward cannot be empty.")


def parse_difficulty(text: str) -> int:
    try:
        value = int(text.strip())
    except (AttributeError, ValueError):
        raise ValidationError(
            "difficulty", f"Difficulty must be a number between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}."
        ) from None
    if not MIN_DIFFICULTY <= value <= MAX_DIFFICULTY:
        raise ValidationError(
            "difficulty", f"Difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}."
        )
    return value


class QuestStore:
    """Ordered collection of every quest the user has authored."""

    def __init__(self, quests: Iterable[Quest] | None = None) -> None:
        self._quests: list[Quest] = list(quests or [])

    def __len__(self) -> int:
        return len(self._quests)

    def create(self, name: str, description: str, difficulty: int, reward: str) -> Quest:
        name = (name or "").strip()
        description = (description or "").strip()
        reward = (reward or "").strip()
        validate_fields(name, description, difficulty, reward)
        quest = Quest(name, description, difficulty, reward)
        self._quests.append(quest)
        logger.info("Created quest '%s' (difficulty %d)", quest.name, quest.difficulty)
        return quest

    def advance(self, quest: Quest, target: QuestStatus) -> Quest:
        if self.index_of(quest) is None:
            raise IllegalTransition(f"Quest '{quest.name}' is not tracked by this store.")
        if quest.status.next_status is not target:
            raise IllegalTransition(
                f"Quest '{quest.name}' cannot move from {quest.status.value} to {target.value}."
            )
        quest.status = target
        logger.info("Quest '%s' is now %s", quest.name, target.value)
        return quest

    def all(self) -> Sequence[Quest]:
        return tuple(self._quests)

    def get(self, index: int | None) -> Quest | None:
        if index is None or not 0 <= index < len(self._quests):
            return None
        return self._quests[index]

    def index_of(self, quest: Quest) -> int | None:
        for idx, candidate in enumerate(self._quests):
            if candidate is quest:
                return idx
        return None

    def to_snapshots(self) -> list[dict[str, Any]]:
        return [quest.to_snapshot() for quest in self._quests]

    @classmethod
    def from_snapshots(cls, records: Iterable[Mapping[str, Any]]) -> QuestStore:
        return cls(Quest.from_snapshot(record) for record in records)
