from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.intents import Intent
    from core.tracker import ViewStateMachine
    from core.view_state import ViewState
    from game.game import Game


class GameState:
    """Base class for a screen. Screens turn pygame input into intents and draw the view state."""

    def __init__(self, game: "Game"):
        self.game = game

    @property
    def tracker(self) -> "ViewStateMachine":
        return self.game.tracker

    @property
    def view_state(self) -> "ViewState":
        return self.game.tracker.get_view_state()

    def dispatch(self, intent: "Intent") -> None:
        self.game.dispatch(intent)

    def enter(self) -> None:
        """Called when the screen becomes active."""

    def exit(self) -> None:
        """Called when the screen is replaced."""

    def handle_event(self, event: "pygame.event.Event") -> None:
        """Process a pygame event."""

    def update(self, dt: float) -> None:
        """Update screen-local animation."""

    def draw(self, surface: "pygame.Surface") -> None:
        """Render screen contents."""
