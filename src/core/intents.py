from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from core.view_state import FormField, SortKey, View


@dataclass(frozen=True, slots=True)
class SelectView:
    view: View


@dataclass(frozen=True, slots=True)
class SaveProgress:
    pass


@dataclass(frozen=True, slots=True)
class ExitApp:
    pass


@dataclass(frozen=True, slots=True)
class Back:
    pass


@dataclass(frozen=True, slots=True)
class SelectQuest:
    """Pick the quest at ``row`` on the page currently shown."""

    row: int


@dataclass(frozen=True, slots=True)
class ChangeSort:
    key: SortKey


@dataclass(frozen=True, slots=True)
class SetDifficultyFilter:
    difficulty: int | None


@dataclass(frozen=True, slots=True)
class CycleDifficultyFilter:
    pass


@dataclass(frozen=True, slots=True)
class SetSearchText:
    text: str


@dataclass(frozen=True, slots=True)
class NextPage:
    pass


@dataclass(frozen=True, slots=True)
class PreviousPage:
    pass


@dataclass(frozen=True, slots=True)
class FocusField:
    field: FormField


@dataclass(frozen=True, slots=True)
class FocusNextField:
    pass


@dataclass(frozen=True, slots=True)
class EditField:
    field: FormField
    text: str


@dataclass(frozen=True, slots=True)
class SubmitQuest:
    pass


@dataclass(frozen=True, slots=True)
class CancelCreate:
    pass


Intent = Union[
    SelectView,
    SaveProgress,
    ExitApp,
    Back,
    SelectQuest,
    ChangeSort,
    SetDifficultyFilter,
    CycleDifficultyFilter,
    SetSearchText,
    NextPage,
    PreviousPage,
    FocusField,
    FocusNextField,
    EditField,
    SubmitQuest,
    CancelCreate,
]
