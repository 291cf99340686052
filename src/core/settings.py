from __future__ import annotations

from pathlib import Path

# Display
SCREEN_WIDTH = 1024
SCREEN_HEIGHT = 768
FPS = 60
WINDOW_TITLE = "Quest Tracking System"

# Layout
LEFT_MARGIN = 50
TOP_MARGIN = 50
BUTTON_WIDTH = 260
BUTTON_HEIGHT = 40
BUTTON_MARGIN = 16
ROW_HEIGHT = 80
FIELD_HEIGHT = 32

# Colors
TOP_COLOR = (26, 26, 46)
BOTTOM_COLOR = (22, 33, 62)
BUTTON_COLOR = (15, 52, 96)
TEXT_COLOR = (233, 69, 96)
DETAIL_COLOR = (220, 220, 220)
HIGHLIGHT_COLOR = (83, 52, 131)
FIELD_COLOR = (15, 52, 96)
FIELD_ACTIVE_COLOR = (40, 90, 150)
MESSAGE_COLOR = (255, 255, 0)
ERROR_COLOR = (255, 110, 110)

# Fonts
FONT_NAME = None
FONT_SIZE = 22
TITLE_FONT_SIZE = 40
CARET_BLINK_SECONDS = 0.5

# Quest rules
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
PAGE_SIZE = 5
MESSAGE_DURATION = 3.0

# Persistence
SAVE_FILE = Path("quests.json")
