from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from core.intents import ExitApp, Intent, SaveProgress, SelectView
from core.settings import BUTTON_HEIGHT, BUTTON_MARGIN, BUTTON_WIDTH, TEXT_COLOR, TOP_MARGIN, WINDOW_TITLE
from core.state import GameState
from core.view_state import View
from ui.widgets import Fonts, draw_button

if TYPE_CHECKING:
    from game.game import Game

MENU_OPTIONS: list[tuple[str, Intent]] = [
    ("View Active Quests", SelectView(View.ACTIVE_QUESTS)),
    ("View Completed Quests", SelectView(View.COMPLETED_QUESTS)),
    ("Accept a New Quest", SelectView(View.ACCEPT_QUEST)),
    ("Complete a Quest", SelectView(View.COMPLETE_QUEST)),
    ("Create a New Quest", SelectView(View.CREATE_QUEST)),
    ("Save Progress", SaveProgress()),
    ("Exit", ExitApp()),
]


class MainMenuState(GameState):
    def __init__(self, game: "Game"):
        super().__init__(game)
        self.selected_index = 0
        self.option_rects: list[pygame.Rect] = []

    def enter(self) -> None:
        self.selected_index = 0

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_DOWN, pygame.K_s):
                self.selected_index = (self.selected_index + 1) % len(MENU_OPTIONS)
            elif event.key in (pygame.K_UP, pygame.K_w):
                self.selected_index = (self.selected_index - 1) % len(MENU_OPTIONS)
            elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self._activate(self.selected_index)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for idx, rect in enumerate(self.option_rects):
                if rect.collidepoint(event.pos):
                    self.selected_index = idx
                    self._activate(idx)
                    break

    def _activate(self, index: int) -> None:
        _, intent = MENU_OPTIONS[index]
        self.dispatch(intent)

    def draw(self, surface: pygame.Surface) -> None:
        width, _ = surface.get_size()
        title_surface = Fonts.title().render(WINDOW_TITLE, True, TEXT_COLOR)
        surface.blit(title_surface, title_surface.get_rect(midtop=(width // 2, TOP_MARGIN)))

        x = (width - BUTTON_WIDTH) // 2
        y = TOP_MARGIN + 80
        self.option_rects = []
        for idx, (label, _) in enumerate(MENU_OPTIONS):
            rect = draw_button(surface, label, (x, y), BUTTON_WIDTH, selected=idx == self.selected_index)
            self.option_rects.append(rect)
            y += BUTTON_HEIGHT + BUTTON_MARGIN
