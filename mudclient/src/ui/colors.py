"""
Colors for the window front end.

Dark stone theme, one text color per display tag.
"""

from .display import NOTICE, OUTPUT, USER_INPUT


class Colors:
    """Window palette."""
    # Backgrounds
    STONE_DARK = (59, 50, 41)
    PANEL_BG = (49, 42, 35)
    PANEL_BORDER = (29, 25, 21)
    SLOT_BG = (39, 33, 27)

    # Text colors
    TEXT_WHITE = (255, 255, 255)
    TEXT_YELLOW = (255, 255, 0)
    TEXT_CYAN = (0, 255, 255)
    TEXT_ORANGE = (255, 152, 31)
    TEXT_RED = (255, 0, 0)
    TEXT_GRAY = (128, 128, 128)

    # Notification banners by tag
    BANNER_INFO = (39, 60, 79)
    BANNER_WARNING = (99, 74, 29)
    BANNER_ERROR = (110, 30, 30)


TAG_COLORS = {
    OUTPUT: Colors.TEXT_WHITE,
    USER_INPUT: Colors.TEXT_CYAN,
    NOTICE: Colors.TEXT_YELLOW,
}

BANNER_COLORS = {
    "info": Colors.BANNER_INFO,
    "warning": Colors.BANNER_WARNING,
    "error": Colors.BANNER_ERROR,
}
