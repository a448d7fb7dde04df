"""Festival guide bot built on a small dialog orchestration engine."""

from .adapter import BotAdapter, TurnContext
from .app import Application, IApplication
from .config import BotSettings, QnASettings
from .dialogs import (
    ChoicePrompt,
    DialogEngine,
    DialogRegistry,
    TextPrompt,
    WaterfallDialog,
)
from .errors import (
    DialogError,
    DuplicateIdError,
    EmptyStackError,
    EventBotError,
    KnowledgeLookupError,
    PersistenceError,
    StackDepthError,
    UnknownDialogError,
    ValidationError,
)
from .models import (
    Activity,
    ActivityType,
    ChannelAccount,
    ConversationState,
    DialogInstance,
    DialogStack,
    OutboundMessage,
    TraceEvent,
)
from .router import TurnRouter
from .storage import IStorage, MemoryStorage, SqliteStorage
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    "BotSettings",
    "QnASettings",
    # Models
    "Activity",
    "ActivityType",
    "ChannelAccount",
    "OutboundMessage",
    "ConversationState",
    "DialogInstance",
    "DialogStack",
    "TraceEvent",
    # Engine
    "DialogEngine",
    "DialogRegistry",
    "WaterfallDialog",
    "TextPrompt",
    "ChoicePrompt",
    "TurnRouter",
    "BotAdapter",
    "TurnContext",
    # Components
    "IStorage",
    "MemoryStorage",
    "SqliteStorage",
    "ITracker",
    "Tracker",
    # Errors
    "EventBotError",
    "DialogError",
    "DuplicateIdError",
    "UnknownDialogError",
    "EmptyStackError",
    "StackDepthError",
    "ValidationError",
    "PersistenceError",
    "KnowledgeLookupError",
]
