"""Turn router module."""

from .router import (
    DEFAULT_CANCEL_MESSAGE,
    DEFAULT_WELCOME_MESSAGE,
    WELCOMED_USER,
    ITurnRouter,
    TurnRouter,
)

__all__ = [
    "ITurnRouter",
    "TurnRouter",
    "WELCOMED_USER",
    "DEFAULT_WELCOME_MESSAGE",
    "DEFAULT_CANCEL_MESSAGE",
]
