"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event recorded during a turn."""

    id: str
    event_type: str  # e.g. "message_received", "dialog_started"
    actor: str  # component that recorded it
    data: dict  # self-contained payload for display
    timestamp: datetime
