from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from core.intents import CancelCreate, EditField, FocusField, FocusNextField, SubmitQuest
from core.settings import (
    BUTTON_HEIGHT,
    BUTTON_MARGIN,
    BUTTON_WIDTH,
    CARET_BLINK_SECONDS,
    DETAIL_COLOR,
    FIELD_ACTIVE_COLOR,
    FIELD_COLOR,
    FIELD_HEIGHT,
    LEFT_MARGIN,
    TEXT_COLOR,
    TOP_MARGIN,
)
from core.state import GameState
from core.view_state import FORM_FIELD_ORDER, FormField
from ui.widgets import Fonts, draw_button

if TYPE_CHECKING:
    from game.game import Game

FIELD_LABELS = {
    FormField.NAME: "Name:",
    FormField.DESCRIPTION: "Description:",
    FormField.DIFFICULTY: "Difficulty (1-5):",
    FormField.REWARD: "Reward:",
}

LABEL_WIDTH = 200
FIELD_SPACING = 50


class CreateQuestState(GameState):
    def __init__(self, game: "Game"):
        super().__init__(game)
        self.caret_timer = 0.0
        self.caret_visible = True
        self.field_rects: dict[FormField, pygame.Rect] = {}
        self.create_rect: pygame.Rect | None = None
        self.cancel_rect: pygame.Rect | None = None

    def enter(self) -> None:
        pygame.key.start_text_input()

    def exit(self) -> None:
        pygame.key.stop_text_input()

    def handle_event(self, event: pygame.event.Event) -> None:
        form = self.view_state.form
        if event.type == pygame.TEXTINPUT:
            field = form.active_field
            self.dispatch(EditField(field, form.value(field) + event.text))
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_TAB:
                self.dispatch(FocusNextField())
            elif event.key == pygame.K_BACKSPACE:
                field = form.active_field
                self.dispatch(EditField(field, form.value(field)[:-1]))
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.dispatch(SubmitQuest())
            elif event.key == pygame.K_ESCAPE:
                self.dispatch(CancelCreate())
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_click(event.pos)

    def _handle_click(self, pos: tuple[int, int]) -> None:
        if self.create_rect and self.create_rect.collidepoint(pos):
            self.dispatch(SubmitQuest())
            return
        if self.cancel_rect and self.cancel_rect.collidepoint(pos):
            self.dispatch(CancelCreate())
            return
        for field, rect in self.field_rects.items():
            if rect.collidepoint(pos):
                self.dispatch(FocusField(field))
                return

    def update(self, dt: float) -> None:
        self.caret_timer += dt
        if self.caret_timer >= CARET_BLINK_SECONDS:
            self.caret_timer = 0.0
            self.caret_visible = not self.caret_visible

    def draw(self, surface: pygame.Surface) -> None:
        form = self.view_state.form
        font = Fonts.body()
        width, _ = surface.get_size()

        title = Fonts.title().render("Create New Quest", True, TEXT_COLOR)
        surface.blit(title, (LEFT_MARGIN, TOP_MARGIN))

        field_x = LEFT_MARGIN + LABEL_WIDTH
        field_width = width - field_x - LEFT_MARGIN
        y = TOP_MARGIN + 70
        self.field_rects = {}
        for field in FORM_FIELD_ORDER:
            surface.blit(font.render(FIELD_LABELS[field], True, DETAIL_COLOR), (LEFT_MARGIN, y + 6))
            rect = pygame.Rect(field_x, y, field_width, FIELD_HEIGHT)
            active = field is form.active_field
            pygame.draw.rect(surface, FIELD_ACTIVE_COLOR if active else FIELD_COLOR, rect, border_radius=4)
            self.field_rects[field] = rect

            text_surface = font.render(form.value(field), True, DETAIL_COLOR)
            text_pos = (rect.x + 8, rect.y + (FIELD_HEIGHT - text_surface.get_height()) // 2)
            surface.blit(text_surface, text_pos, area=pygame.Rect(0, 0, rect.width - 16, FIELD_HEIGHT))
            if active and self.caret_visible:
                caret_x = min(text_pos[0] + text_surface.get_width() + 1, rect.right - 8)
                pygame.draw.line(surface, DETAIL_COLOR, (caret_x, rect.y + 6), (caret_x, rect.bottom - 6), 2)
            y += FIELD_SPACING

        buttons_y = y + 20
        self.create_rect = draw_button(surface, "Create", (LEFT_MARGIN, buttons_y), BUTTON_WIDTH)
        self.cancel_rect = draw_button(
            surface, "Cancel", (LEFT_MARGIN + BUTTON_WIDTH + BUTTON_MARGIN, buttons_y), BUTTON_WIDTH
        )
        hint = font.render("Tab next field  Enter create  Esc cancel", True, DETAIL_COLOR)
        surface.blit(hint, (LEFT_MARGIN, buttons_y + BUTTON_HEIGHT + 20))
