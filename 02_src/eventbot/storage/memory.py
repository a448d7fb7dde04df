"""In-memory storage for local runs and tests.

Snapshots are kept as JSON text so that every load returns a fresh copy,
the same way the SQLite backend behaves. Nothing survives a restart.
"""

import json
import uuid
from datetime import datetime, timezone

from ..models import ConversationState, TraceEvent


class MemoryStorage:
    """Process-local implementation of IStorage."""

    def __init__(self):
        self._states: dict[str, str] = {}
        self._trace_events: list[TraceEvent] = []

    async def init(self) -> None:
        return

    async def close(self) -> None:
        return

    async def load_state(self, conversation_id: str) -> ConversationState | None:
        raw = self._states.get(conversation_id)
        if raw is None:
            return None
        return ConversationState.from_snapshot(conversation_id, json.loads(raw))

    async def save_state(self, state: ConversationState) -> None:
        self._states[state.conversation_id] = json.dumps(state.to_snapshot())

    async def save_trace_event(self, event: TraceEvent) -> None:
        if not event.id:
            event.id = str(uuid.uuid4())
        self._trace_events.append(event)

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        if after and after.tzinfo is None:
            after = after.replace(tzinfo=timezone.utc)

        events = [
            event
            for event in reversed(self._trace_events)
            if (not after or event.timestamp > after)
            and (not event_types or event.event_type in event_types)
            and (not actor or event.actor == actor)
        ]
        return events[:limit]

    async def clear(self) -> None:
        self._states.clear()
        self._trace_events.clear()
