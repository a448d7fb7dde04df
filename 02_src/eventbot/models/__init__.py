"""Core data models for the event bot."""

from .activity import (
    Activity,
    ActivityType,
    ChannelAccount,
    OutboundMessage,
    suggested_actions,
)
from .conversation import ConversationState, DialogInstance, DialogStack
from .tracing import TraceEvent

__all__ = [
    # Activities
    "Activity",
    "ActivityType",
    "ChannelAccount",
    "OutboundMessage",
    "suggested_actions",
    # Conversation
    "ConversationState",
    "DialogInstance",
    "DialogStack",
    # Tracing
    "TraceEvent",
]
