"""Adapter module."""

from .adapter import BotAdapter, IBotAdapter, TurnHandler
from .context import TurnContext

__all__ = ["BotAdapter", "IBotAdapter", "TurnContext", "TurnHandler"]
