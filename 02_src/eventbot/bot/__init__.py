"""Festival guide dialogs."""

from .dialogs import (
    AREA_PROMPT,
    AREA_QUESTION,
    BAND_NOT_FOUND,
    BAND_QUESTION,
    BAND_SEARCH,
    FAQ,
    FAQ_FALLBACK,
    FAQ_QUESTION,
    MAIN_MENU,
    MENU_CHOICES,
    MENU_PROMPT,
    NAVIGATE,
    NOT_UNDERSTOOD,
    QUESTION_PROMPT,
    FestivalDialogs,
    build_registry,
)
from .lineup import DIRECTIONS, LINEUP, Performance, find_performances

__all__ = [
    "FestivalDialogs",
    "build_registry",
    # Dialog ids
    "MAIN_MENU",
    "FAQ",
    "BAND_SEARCH",
    "NAVIGATE",
    "QUESTION_PROMPT",
    "AREA_PROMPT",
    # Messages
    "MENU_PROMPT",
    "MENU_CHOICES",
    "NOT_UNDERSTOOD",
    "BAND_QUESTION",
    "BAND_NOT_FOUND",
    "FAQ_QUESTION",
    "FAQ_FALLBACK",
    "AREA_QUESTION",
    # Lineup
    "DIRECTIONS",
    "LINEUP",
    "Performance",
    "find_performances",
]
