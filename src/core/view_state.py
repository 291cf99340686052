from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class View(str, Enum):
    MAIN_MENU = "main_menu"
    ACTIVE_QUESTS = "active_quests"
    COMPLETED_QUESTS = "completed_quests"
    ACCEPT_QUEST = "accept_quest"
    COMPLETE_QUEST = "complete_quest"
    CREATE_QUEST = "create_quest"


LIST_VIEWS = frozenset(
    {View.ACTIVE_QUESTS, View.COMPLETED_QUESTS, View.ACCEPT_QUEST, View.COMPLETE_QUEST}
)


class SortKey(str, Enum):
    NAME = "name"
    DIFFICULTY = "difficulty"
    REWARD = "reward"


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def flipped(self) -> SortDirection:
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


class FormField(str, Enum):
    NAME = "name"
    DESCRIPTION = "description"
    DIFFICULTY = "difficulty"
    REWARD = "reward"


FORM_FIELD_ORDER = (FormField.NAME, FormField.DESCRIPTION, FormField.DIFFICULTY, FormField.REWARD)


@dataclass(frozen=True, slots=True)
class QuestForm:
    """Text currently typed into the create-quest form."""

    name: str = ""
    description: str = ""
    difficulty: str = ""
    reward: str = ""
    active_field: FormField = FormField.NAME

    def value(self, form_field: FormField) -> str:
        return getattr(self, form_field.value)

    def with_value(self, form_field: FormField, text: str) -> QuestForm:
        return replace(self, **{form_field.value: text})

    def next_field(self) -> FormField:
        idx = FORM_FIELD_ORDER.index(self.active_field)
        return FORM_FIELD_ORDER[(idx + 1) % len(FORM_FIELD_ORDER)]


@dataclass(frozen=True, slots=True)
class TransientMessage:
    text: str
    expires_at: float
    is_error: bool = False

    def is_visible(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True, slots=True)
class ViewState:
    """Everything the screens need besides the quests themselves.

    ``selected_quest`` is the store position of the selected quest, not a copy of it.
    """

    current_view: View = View.MAIN_MENU
    selected_quest: int | None = None
    difficulty_filter: int | None = None
    search_text: str = ""
    sort_key: SortKey = SortKey.NAME
    sort_direction: SortDirection = SortDirection.ASCENDING
    current_page: int = 0
    message: TransientMessage | None = None
    form: QuestForm = field(default_factory=QuestForm)
