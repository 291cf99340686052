from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pygame

from core.intents import Intent
from core.persistence import JsonQuestFile
from core.quests import QuestStore
from core.settings import FPS, SAVE_FILE, SCREEN_HEIGHT, SCREEN_WIDTH, WINDOW_TITLE
from core.tracker import ViewStateMachine
from core.view_state import View
from states.create_quest import CreateQuestState
from states.main_menu import MainMenuState
from states.quest_list import QuestListState
from ui.widgets import draw_background, draw_message

if TYPE_CHECKING:
    from core.state import GameState

logger = logging.getLogger(__name__)


class Game:
    """Root object: owns the window, the quest tracker and the active screen."""

    def __init__(self, save_file: Path = SAVE_FILE) -> None:
        pygame.init()
        pygame.display.set_caption(WINDOW_TITLE)

        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        self.clock = pygame.time.Clock()

        self.tracker = ViewStateMachine(QuestStore(), JsonQuestFile(save_file))
        self.tracker.hydrate()

        self.states: dict[View, type["GameState"]] = {}
        self.active_state: "GameState | None" = None
        self.active_view: View | None = None

        self.running = True

        self._register_default_states()
        self._sync_state()

    def _register_default_states(self) -> None:
        self.register_state(View.MAIN_MENU, MainMenuState)
        for view in (View.ACTIVE_QUESTS, View.COMPLETED_QUESTS, View.ACCEPT_QUEST, View.COMPLETE_QUEST):
            self.register_state(view, QuestListState)
        self.register_state(View.CREATE_QUEST, CreateQuestState)

    def register_state(self, view: View, state_cls: type["GameState"]) -> None:
        self.states[view] = state_cls

    def dispatch(self, intent: Intent) -> None:
        self.tracker.dispatch(intent)
        if self.tracker.exit_requested:
            self.running = False
            return
        self._sync_state()

    def _sync_state(self) -> None:
        view = self.tracker.get_view_state().current_view
        if view is self.active_view:
            return

        if self.active_state is not None:
            self.active_state.exit()

        logger.debug("Switching screen to %s", view.value)
        self.active_state = self.states[view](self)
        self.active_view = view
        self.active_state.enter()

    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(FPS) / 1000.0
            self._handle_events()
            self._update(dt)
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return

            if self.active_state:
                self.active_state.handle_event(event)
            if not self.running:
                return

    def _update(self, dt: float) -> None:
        if self.active_state:
            self.active_state.update(dt)

    def _draw(self) -> None:
        draw_background(self.screen)
        if self.active_state:
            self.active_state.draw(self.screen)
        state = self.tracker.get_view_state()
        draw_message(self.screen, state.message, self.tracker.clock())
        pygame.display.flip()
