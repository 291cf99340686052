from __future__ import annotations

import pygame

from core.settings import (
    BOTTOM_COLOR,
    BUTTON_COLOR,
    BUTTON_HEIGHT,
    ERROR_COLOR,
    FONT_NAME,
    FONT_SIZE,
    MESSAGE_COLOR,
    TEXT_COLOR,
    TITLE_FONT_SIZE,
    TOP_COLOR,
)
from core.view_state import TransientMessage


class Fonts:
    """Lazily created fonts shared by every screen."""

    _body: pygame.font.Font | None = None
    _title: pygame.font.Font | None = None

    @classmethod
    def body(cls) -> pygame.font.Font:
        if cls._body is None:
            cls._body = pygame.font.Font(FONT_NAME, FONT_SIZE)
        return cls._body

    @classmethod
    def title(cls) -> pygame.font.Font:
        if cls._title is None:
            cls._title = pygame.font.Font(FONT_NAME, TITLE_FONT_SIZE)
        return cls._title


def draw_background(surface: pygame.Surface) -> None:
    width, height = surface.get_size()
    for y in range(height):
        t = y / max(1, height - 1)
        color = tuple(int(top + (bottom - top) * t) for top, bottom in zip(TOP_COLOR, BOTTOM_COLOR))
        pygame.draw.line(surface, color, (0, y), (width, y))


def draw_button(
    surface: pygame.Surface,
    text: str,
    pos: tuple[int, int],
    width: int | None = None,
    *,
    selected: bool = False,
) -> pygame.Rect:
    """Draw a labelled button and return its rect for hit testing."""
    font = Fonts.body()
    text_width, text_height = font.size(text)
    rect = pygame.Rect(pos[0], pos[1], width or text_width + 40, BUTTON_HEIGHT)

    pygame.draw.rect(surface, BUTTON_COLOR, rect, border_radius=6)
    if selected:
        pygame.draw.rect(surface, TEXT_COLOR, rect, width=2, border_radius=6)

    rendered = font.render(text, True, TEXT_COLOR)
    surface.blit(rendered, rendered.get_rect(center=rect.center))
    return rect


def wrap_text(font: pygame.font.Font, text: str, max_width: int) -> list[str]:
    words = text.split(" ")
    lines: list[str] = []
    current_line = ""

    for word in words:
        test_line = f"{current_line} {word}".strip()
        if font.size(test_line)[0] <= max_width:
            current_line = test_line
        else:
            if current_line:
                lines.append(current_line)
            current_line = word
    if current_line:
        lines.append(current_line)
    return lines


def draw_wrapped(
    surface: pygame.Surface,
    text: str,
    pos: tuple[int, int],
    max_width: int,
    color: tuple[int, int, int],
    max_lines: int | None = None,
) -> int:
    """Draw wrapped text and return the y coordinate below the last line."""
    font = Fonts.body()
    x, y = pos
    lines = wrap_text(font, text, max_width)
    for line in lines[:max_lines]:
        rendered = font.render(line, True, color)
        surface.blit(rendered, (x, y))
        y += rendered.get_height() + 2
    return y


def draw_message(surface: pygame.Surface, message: TransientMessage | None, now: float) -> None:
    if message is None or not message.is_visible(now):
        return
    color = ERROR_COLOR if message.is_error else MESSAGE_COLOR
    rendered = Fonts.body().render(message.text, True, color)
    width, height = surface.get_size()
    surface.blit(rendered, rendered.get_rect(center=(width // 2, height - 80)))
