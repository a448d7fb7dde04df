"""Inbound activity and outbound message models."""

from dataclasses import dataclass, field
from enum import Enum


class ActivityType(str, Enum):
    """Activity types the bot distinguishes."""

    MESSAGE = "message"
    CONVERSATION_UPDATE = "conversationUpdate"


@dataclass
class ChannelAccount:
    """A participant in a conversation (user or bot)."""

    id: str
    name: str | None = None


@dataclass
class Activity:
    """A single inbound activity delivered by the transport."""

    type: str
    conversation_id: str
    from_account: ChannelAccount
    recipient: ChannelAccount
    text: str | None = None
    members_added: list[ChannelAccount] = field(default_factory=list)
    channel_id: str | None = None
    id: str | None = None

    @property
    def is_message(self) -> bool:
        return self.type == ActivityType.MESSAGE.value

    @property
    def is_conversation_update(self) -> bool:
        return self.type == ActivityType.CONVERSATION_UPDATE.value


@dataclass
class OutboundMessage:
    """A reply sent to the user, optionally with suggested choices."""

    text: str
    suggested_actions: list[str] = field(default_factory=list)

    def to_activity(self) -> dict:
        """Serialize as a message activity with imBack suggested actions."""
        activity: dict = {"type": ActivityType.MESSAGE.value, "text": self.text}
        if self.suggested_actions:
            activity["suggestedActions"] = {
                "actions": [
                    {"type": "imBack", "title": label, "value": label}
                    for label in self.suggested_actions
                ]
            }
        return activity


def suggested_actions(actions: list[str], text: str) -> OutboundMessage:
    """Build a message offering a fixed set of choices."""
    return OutboundMessage(text=text, suggested_actions=list(actions))
