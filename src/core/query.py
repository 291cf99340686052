"""Derives the visible, sorted and paginated quest list from the store and view state.

Everything here is pure: the store and the view state are only read, and the
result is rebuilt from scratch on every call.
"""
from __future__ import annotations

from dataclasses import dataclass
from math import ceil
from typing import Callable, Iterable, Sequence

from core.quests import Quest, QuestStatus, QuestStore, QuestTrackerError
from core.settings import MAX_DIFFICULTY, MIN_DIFFICULTY, PAGE_SIZE
from core.view_state import SortDirection, SortKey, View, ViewState

QuestPredicate = Callable[[Quest], bool]

VIEW_STATUS: dict[View, QuestStatus] = {
    View.ACTIVE_QUESTS: QuestStatus.ACTIVE,
    View.COMPLETED_QUESTS: QuestStatus.COMPLETED,
    View.ACCEPT_QUEST: QuestStatus.NOT_STARTED,
    View.COMPLETE_QUEST: QuestStatus.ACTIVE,
}

SORT_KEYS: dict[SortKey, Callable[[Quest], object]] = {
    SortKey.NAME: lambda quest: quest.name.casefold(),
    SortKey.DIFFICULTY: lambda quest: quest.difficulty,
    SortKey.REWARD: lambda quest: quest.reward.casefold(),
}


class InvalidQuery(QuestTrackerError):
    """Raised for malformed filter, sort or paging parameters."""


@dataclass(frozen=True, slots=True)
class QuestPage:
    items: tuple[Quest, ...]
    page: int
    total_pages: int
    total: int
    page_size: int

    @property
    def first_number(self) -> int:
        """Display number of the first item, counted across the whole visible list."""
        return self.page * self.page_size + 1


def status_for_view(view: View) -> QuestStatus | None:
    if not isinstance(view, View):
        raise InvalidQuery(f"Unknown view {view!r}.")
    return VIEW_STATUS.get(view)


def build_predicates(
    view: View, difficulty: int | None, search_text: str
) -> list[QuestPredicate]:
    predicates: list[QuestPredicate] = []

    status = status_for_view(view)
    if status is not None:
        predicates.append(lambda quest: quest.status is status)

    if difficulty is not None:
        if (
            isinstance(difficulty, bool)
            or not isinstance(difficulty, int)
            or not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY
        ):
            raise InvalidQuery(f"Difficulty filter {difficulty!r} is out of range.")
        predicates.append(lambda quest: quest.difficulty == difficulty)

    if not isinstance(search_text, str):
        raise InvalidQuery(f"Search text must be a string, got {type(search_text).__name__}.")
    needle = search_text.casefold()
    if needle:
        predicates.append(lambda quest: _matches_search(quest, needle))

    return predicates


def _matches_search(quest: Quest, needle: str) -> bool:
    haystacks = (quest.name, quest.description, quest.reward, str(quest.difficulty))
    return any(needle in text.casefold() for text in haystacks)


def filter_quests(quests: Iterable[Quest], predicates: Sequence[QuestPredicate]) -> list[Quest]:
    return [quest for quest in quests if all(check(quest) for check in predicates)]


def sort_quests(quests: Iterable[Quest], key: SortKey, direction: SortDirection) -> list[Quest]:
    if not isinstance(key, SortKey):
        raise InvalidQuery(f"Unknown sort key {key!r}.")
    if not isinstance(direction, SortDirection):
        raise InvalidQuery(f"Unknown sort direction {direction!r}.")
    # sorted() stays stable with reverse=True, so ties keep their filtered order.
    return sorted(
        quests,
        key=SORT_KEYS[key],
        reverse=direction is SortDirection.DESCENDING,
    )


def visible_quests(store: QuestStore, view_state: ViewState) -> list[Quest]:
    predicates = build_predicates(
        view_state.current_view, view_state.difficulty_filter, view_state.search_text
    )
    matched = filter_quests(store.all(), predicates)
    return sort_quests(matched, view_state.sort_key, view_state.sort_direction)


def total_pages(total: int, page_size: int) -> int:
    if page_size < 1:
        raise InvalidQuery(f"Page size must be positive, got {page_size}.")
    return ceil(total / page_size)


def paginate(quests: Sequence[Quest], page: int, page_size: int = PAGE_SIZE) -> QuestPage:
    if page < 0:
        raise InvalidQuery(f"Page index must not be negative, got {page}.")
    pages = total_pages(len(quests), page_size)
    start = page * page_size
    end = min(start + page_size, len(quests))
    items = tuple(quests[start:end]) if start < end else ()
    return QuestPage(items=items, page=page, total_pages=pages, total=len(quests), page_size=page_size)


def page_for(store: QuestStore, view_state: ViewState, page_size: int = PAGE_SIZE) -> QuestPage:
    return paginate(visible_quests(store, view_state), view_state.current_page, page_size)
