from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from core.intents import (
    Back,
    ChangeSort,
    CycleDifficultyFilter,
    NextPage,
    PreviousPage,
    SelectQuest,
    SetSearchText,
)
from core.query import QuestPage
from core.settings import (
    BUTTON_HEIGHT,
    BUTTON_WIDTH,
    DETAIL_COLOR,
    HIGHLIGHT_COLOR,
    LEFT_MARGIN,
    ROW_HEIGHT,
    TEXT_COLOR,
    TOP_MARGIN,
)
from core.state import GameState
from core.view_state import SortDirection, SortKey, View
from ui.widgets import Fonts, draw_button, draw_wrapped

if TYPE_CHECKING:
    from game.game import Game

VIEW_TITLES = {
    View.ACTIVE_QUESTS: "Active Quests",
    View.COMPLETED_QUESTS: "Completed Quests",
    View.ACCEPT_QUEST: "Available Quests",
    View.COMPLETE_QUEST: "Quests to Complete",
}

SORT_KEYS_BY_KEY = {
    pygame.K_F1: SortKey.NAME,
    pygame.K_F2: SortKey.DIFFICULTY,
    pygame.K_F3: SortKey.REWARD,
}

LIST_TOP = TOP_MARGIN + 110


class QuestListState(GameState):
    """Shared screen for the four quest list views."""

    def __init__(self, game: "Game"):
        super().__init__(game)
        self.cursor = 0
        self.row_rects: list[pygame.Rect] = []
        self.back_rect: pygame.Rect | None = None

    def enter(self) -> None:
        self.cursor = 0
        pygame.key.start_text_input()

    def exit(self) -> None:
        pygame.key.stop_text_input()

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.TEXTINPUT:
            self.dispatch(SetSearchText(self.view_state.search_text + event.text))
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.back_rect and self.back_rect.collidepoint(event.pos):
                self.dispatch(Back())
                return
            for row, rect in enumerate(self.row_rects):
                if rect.collidepoint(event.pos):
                    self.cursor = row
                    self.dispatch(SelectQuest(row))
                    break
        elif event.type == pygame.MOUSEWHEEL:
            self.dispatch(PreviousPage() if event.y > 0 else NextPage())

    def _handle_key(self, event: pygame.event.Event) -> None:
        if event.key == pygame.K_ESCAPE:
            self.dispatch(Back())
        elif event.key == pygame.K_BACKSPACE:
            search = self.view_state.search_text
            if search:
                self.dispatch(SetSearchText(search[:-1]))
        elif event.key in SORT_KEYS_BY_KEY:
            self.dispatch(ChangeSort(SORT_KEYS_BY_KEY[event.key]))
        elif event.key == pygame.K_F4:
            self.dispatch(CycleDifficultyFilter())
        elif event.key in (pygame.K_RIGHT, pygame.K_PAGEDOWN):
            self.dispatch(NextPage())
            self.cursor = 0
        elif event.key in (pygame.K_LEFT, pygame.K_PAGEUP):
            self.dispatch(PreviousPage())
            self.cursor = 0
        elif event.key == pygame.K_DOWN:
            self.cursor += 1
        elif event.key == pygame.K_UP:
            self.cursor = max(0, self.cursor - 1)
        elif event.key == pygame.K_RETURN:
            self.dispatch(SelectQuest(self.cursor))

    def draw(self, surface: pygame.Surface) -> None:
        state = self.view_state
        page = self.tracker.get_visible_page()
        width, height = surface.get_size()
        font = Fonts.body()

        if page.items:
            self.cursor = min(self.cursor, len(page.items) - 1)

        title = Fonts.title().render(VIEW_TITLES.get(state.current_view, ""), True, TEXT_COLOR)
        surface.blit(title, (LEFT_MARGIN, TOP_MARGIN))

        arrow = "^" if state.sort_direction is SortDirection.ASCENDING else "v"
        difficulty = state.difficulty_filter if state.difficulty_filter is not None else "any"
        summary = (
            f"Search: {state.search_text or '-'}   Sort: {state.sort_key.value} {arrow}   "
            f"Difficulty: {difficulty}"
        )
        surface.blit(font.render(summary, True, DETAIL_COLOR), (LEFT_MARGIN, TOP_MARGIN + 50))
        hint = "F1 name  F2 difficulty  F3 reward  F4 filter  Left/Right page  Esc back"
        surface.blit(font.render(hint, True, DETAIL_COLOR), (LEFT_MARGIN, TOP_MARGIN + 75))

        self._draw_rows(surface, page, width)

        if page.total_pages:
            counter = font.render(f"Page {page.page + 1} / {page.total_pages}", True, DETAIL_COLOR)
            surface.blit(counter, (LEFT_MARGIN, height - BUTTON_HEIGHT - 20))

        self.back_rect = draw_button(
            surface,
            "Back",
            (width - BUTTON_WIDTH - LEFT_MARGIN, height - BUTTON_HEIGHT - 20),
            BUTTON_WIDTH,
        )

    def _draw_rows(self, surface: pygame.Surface, page: QuestPage, width: int) -> None:
        font = Fonts.body()
        self.row_rects = []

        if not page.items:
            surface.blit(font.render("No quests available", True, DETAIL_COLOR), (LEFT_MARGIN, LIST_TOP))
            return

        selected = self.tracker.selected_quest_handle()
        row_width = width - 2 * LEFT_MARGIN
        y = LIST_TOP
        for row, quest in enumerate(page.items):
            rect = pygame.Rect(LEFT_MARGIN, y - 5, row_width, ROW_HEIGHT - 10)
            if quest is selected:
                pygame.draw.rect(surface, HIGHLIGHT_COLOR, rect, border_radius=4)
            if row == self.cursor:
                pygame.draw.rect(surface, TEXT_COLOR, rect, width=1, border_radius=4)
            self.row_rects.append(rect)

            number = page.first_number + row
            surface.blit(font.render(f"{number}. {quest.name}", True, TEXT_COLOR), (LEFT_MARGIN + 8, y))
            details = f"Difficulty: {quest.difficulty} - Reward: {quest.reward}"
            if quest.description:
                details = f"{details} - {quest.description}"
            draw_wrapped(surface, details, (LEFT_MARGIN + 8, y + 24), row_width - 16, DETAIL_COLOR, max_lines=2)
            y += ROW_HEIGHT
