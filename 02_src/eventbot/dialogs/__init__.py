"""Dialogs module."""

from .engine import DialogEngine, DialogTurnResult, DialogTurnStatus
from .prompts import ChoicePrompt, Prompt, TextPrompt
from .registry import DialogDefinition, DialogRegistry
from .steps import (
    BeginChild,
    End,
    Replace,
    Retry,
    StepContext,
    StepResult,
    Wait,
    WaterfallStep,
)
from .waterfall import WaterfallDialog

__all__ = [
    # Engine
    "DialogEngine",
    "DialogTurnResult",
    "DialogTurnStatus",
    # Definitions
    "DialogDefinition",
    "DialogRegistry",
    "WaterfallDialog",
    "Prompt",
    "TextPrompt",
    "ChoicePrompt",
    # Steps
    "StepContext",
    "StepResult",
    "WaterfallStep",
    "BeginChild",
    "End",
    "Replace",
    "Wait",
    "Retry",
]
