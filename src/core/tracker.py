from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable

from core.intents import (
    Back,
    CancelCreate,
    ChangeSort,
    CycleDifficultyFilter,
    EditField,
    ExitApp,
    FocusField,
    FocusNextField,
    Intent,
    NextPage,
    PreviousPage,
    SaveProgress,
    SelectQuest,
    SelectView,
    SetDifficultyFilter,
    SetSearchText,
    SubmitQuest,
)
from core.persistence import PersistenceAdapter, PersistenceError
from core.query import InvalidQuery, QuestPage, page_for
from core.quests import (
    CorruptSnapshot,
    IllegalTransition,
    Quest,
    QuestStatus,
    QuestStore,
    ValidationError,
    parse_difficulty,
)
from core.settings import MAX_DIFFICULTY, MESSAGE_DURATION, MIN_DIFFICULTY, PAGE_SIZE
from core.view_state import (
    LIST_VIEWS,
    FormField,
    QuestForm,
    SortDirection,
    SortKey,
    TransientMessage,
    View,
    ViewState,
)

logger = logging.getLogger(__name__)

# Views whose selection moves the chosen quest one step along its lifecycle.
ADVANCING_VIEWS: dict[View, tuple[QuestStatus, str]] = {
    View.ACCEPT_QUEST: (QuestStatus.ACTIVE, "accepted"),
    View.COMPLETE_QUEST: (QuestStatus.COMPLETED, "completed"),
}

MENU_TARGETS = LIST_VIEWS | {View.CREATE_QUEST}


class ViewStateMachine:
    """Owns the view state and applies user intents to it and to the quest store."""

    def __init__(
        self,
        store: QuestStore,
        persistence: PersistenceAdapter,
        *,
        page_size: int = PAGE_SIZE,
        message_duration: float = MESSAGE_DURATION,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if page_size < 1:
            raise InvalidQuery(f"Page size must be positive, got {page_size}.")
        self.store = store
        self.persistence = persistence
        self.page_size = page_size
        self.message_duration = message_duration
        self.clock = clock
        self.state = ViewState()
        self.exit_requested = False

        self._handlers: dict[type, Callable] = {
            SelectView: self._select_view,
            SaveProgress: self._save,
            ExitApp: self._exit,
            Back: self._back,
            SelectQuest: self._select_quest,
            ChangeSort: self._change_sort,
            SetDifficultyFilter: self._set_difficulty_filter,
            CycleDifficultyFilter: self._cycle_difficulty_filter,
            SetSearchText: self._set_search_text,
            NextPage: self._next_page,
            PreviousPage: self._previous_page,
            FocusField: self._focus_field,
            FocusNextField: self._focus_next_field,
            EditField: self._edit_field,
            SubmitQuest: self._submit_quest,
            CancelCreate: self._cancel_create,
        }

    def hydrate(self) -> None:
        """Replace the store contents with whatever the persistence adapter holds."""
        try:
            snapshots = self.persistence.load()
            store = QuestStore.from_snapshots(snapshots or [])
        except CorruptSnapshot as exc:
            logger.warning("Discarding corrupt save data: %s", exc)
            self.store = QuestStore()
            self._show_message("Save file is corrupt; starting with no quests.", is_error=True)
            return
        except PersistenceError as exc:
            logger.warning("Could not load quests: %s", exc)
            self.store = QuestStore()
            self._show_message("Could not load saved quests.", is_error=True)
            return
        self.store = store

    def get_view_state(self) -> ViewState:
        return self.state

    def get_visible_page(self) -> QuestPage:
        page = page_for(self.store, self.state, self.page_size)
        if page.page and page.page >= page.total_pages:
            self.state = replace(self.state, current_page=0)
            page = page_for(self.store, self.state, self.page_size)
        return page

    def selected_quest_handle(self) -> Quest | None:
        return self.store.get(self.state.selected_quest)

    def dispatch(self, intent: Intent) -> None:
        handler = self._handlers.get(type(intent))
        if handler is None:
            raise TypeError(f"Unsupported intent {intent!r}")
        handler(intent)

    def _select_view(self, intent: SelectView) -> None:
        if self.state.current_view is not View.MAIN_MENU or intent.view not in MENU_TARGETS:
            self._ignore(intent)
            return
        self.state = replace(
            self.state,
            current_view=intent.view,
            current_page=0,
            difficulty_filter=None,
        )

    def _save(self, intent: SaveProgress) -> None:
        if self.state.current_view is not View.MAIN_MENU:
            self._ignore(intent)
            return
        try:
            self.persistence.save(self.store.to_snapshots())
        except PersistenceError as exc:
            logger.warning("Save failed: %s", exc)
            self._show_message("Could not save progress. Try again.", is_error=True)
            return
        self._show_message("Progress saved!")

    def _exit(self, intent: ExitApp) -> None:
        if self.state.current_view is not View.MAIN_MENU:
            self._ignore(intent)
            return
        self.exit_requested = True

    def _back(self, intent: Back) -> None:
        if self.state.current_view is View.MAIN_MENU:
            self._ignore(intent)
            return
        self.state = replace(
            self.state,
            current_view=View.MAIN_MENU,
            selected_quest=None,
            difficulty_filter=None,
            search_text="",
            form=QuestForm(),
        )

    def _select_quest(self, intent: SelectQuest) -> None:
        view = self.state.current_view
        if view not in LIST_VIEWS:
            self._ignore(intent)
            return

        page = self.get_visible_page()
        if not 0 <= intent.row < len(page.items):
            self._ignore(intent)
            return

        quest = page.items[intent.row]
        self.state = replace(self.state, selected_quest=self.store.index_of(quest))

        if view not in ADVANCING_VIEWS:
            return

        target, verb = ADVANCING_VIEWS[view]
        try:
            self.store.advance(quest, target)
        except IllegalTransition as exc:
            logger.warning("Ignoring illegal transition: %s", exc)
            return
        self._show_message(f"{quest.name} {verb}!")
        self.state = replace(self.state, current_view=View.MAIN_MENU)

    def _change_sort(self, intent: ChangeSort) -> None:
        if not isinstance(intent.key, SortKey):
            raise InvalidQuery(f"Unknown sort key {intent.key!r}.")
        if intent.key is self.state.sort_key:
            direction = self.state.sort_direction.flipped()
        else:
            direction = SortDirection.ASCENDING
        self.state = replace(
            self.state, sort_key=intent.key, sort_direction=direction, current_page=0
        )

    def _set_difficulty_filter(self, intent: SetDifficultyFilter) -> None:
        difficulty = intent.difficulty
        if difficulty is not None and (
            isinstance(difficulty, bool)
            or not isinstance(difficulty, int)
            or not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY
        ):
            raise InvalidQuery(f"Difficulty filter {difficulty!r} is out of range.")
        self.state = replace(self.state, difficulty_filter=difficulty, current_page=0)

    def _cycle_difficulty_filter(self, intent: CycleDifficultyFilter) -> None:
        current = self.state.difficulty_filter
        if current is None:
            difficulty = MIN_DIFFICULTY
        elif current >= MAX_DIFFICULTY:
            difficulty = None
        else:
            difficulty = current + 1
        self._set_difficulty_filter(SetDifficultyFilter(difficulty))

    def _set_search_text(self, intent: SetSearchText) -> None:
        self.state = replace(self.state, search_text=intent.text, current_page=0)

    def _next_page(self, intent: NextPage) -> None:
        page = self.get_visible_page()
        if page.page + 1 >= page.total_pages:
            return
        self.state = replace(self.state, current_page=page.page + 1)

    def _previous_page(self, intent: PreviousPage) -> None:
        if self.state.current_page <= 0:
            return
        self.state = replace(self.state, current_page=self.state.current_page - 1)

    def _focus_field(self, intent: FocusField) -> None:
        if self.state.current_view is not View.CREATE_QUEST:
            self._ignore(intent)
            return
        self.state = replace(self.state, form=replace(self.state.form, active_field=intent.field))

    def _focus_next_field(self, intent: FocusNextField) -> None:
        self._focus_field(FocusField(self.state.form.next_field()))

    def _edit_field(self, intent: EditField) -> None:
        if self.state.current_view is not View.CREATE_QUEST:
            self._ignore(intent)
            return
        self.state = replace(self.state, form=self.state.form.with_value(intent.field, intent.text))

    def _submit_quest(self, intent: SubmitQuest) -> None:
        if self.state.current_view is not View.CREATE_QUEST:
            self._ignore(intent)
            return
        form = self.state.form
        try:
            quest = self.store.create(
                form.name, form.description, parse_difficulty(form.difficulty), form.reward
            )
        except ValidationError as exc:
            logger.info("Rejected new quest: %s", exc.message)
            self.state = replace(self.state, form=replace(form, active_field=FormField(exc.field)))
            self._show_message(exc.message, is_error=True)
            return
        self.state = replace(self.state, current_view=View.MAIN_MENU, form=QuestForm())
        self._show_message(f"Quest '{quest.name}' created!")

    def _cancel_create(self, intent: CancelCreate) -> None:
        if self.state.current_view is not View.CREATE_QUEST:
            self._ignore(intent)
            return
        self.state = replace(self.state, current_view=View.MAIN_MENU, form=QuestForm())

    def _show_message(self, text: str, *, is_error: bool = False) -> None:
        expires_at = self.clock() + self.message_duration
        self.state = replace(self.state, message=TransientMessage(text, expires_at, is_error))

    def _ignore(self, intent: Intent) -> None:
        logger.debug("Ignoring %s in view %s", intent, self.state.current_view.value)

