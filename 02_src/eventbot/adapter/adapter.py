"""BotAdapter: runs turn logic for inbound activities."""

import asyncio
from typing import Awaitable, Callable, Protocol

from ..logging_config import get_logger
from ..models import Activity, OutboundMessage
from ..tracker import ITracker
from .context import TurnContext

logger = get_logger(__name__)


TurnHandler = Callable[[TurnContext], Awaitable[None]]

DEFAULT_FAILURE_MESSAGE = "Oops. Something went wrong!"


class IBotAdapter(Protocol):
    """Turn lifecycle between the transport and the bot logic."""

    async def process_activity(
        self, activity: Activity, logic: TurnHandler
    ) -> list[OutboundMessage]:
        """Run one turn and return the replies it produced."""
        ...


class BotAdapter:
    """Serializes turns per conversation and handles turn errors."""

    def __init__(
        self,
        tracker: ITracker | None = None,
        failure_message: str = DEFAULT_FAILURE_MESSAGE,
    ):
        self._tracker = tracker
        self._failure_message = failure_message
        # conversation id -> (lock, turns holding or waiting for it)
        self._locks: dict[str, tuple[asyncio.Lock, int]] = {}

    def _acquire_slot(self, conversation_id: str) -> asyncio.Lock:
        lock, users = self._locks.get(conversation_id, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[conversation_id] = (lock, users + 1)
        return lock

    def _release_slot(self, conversation_id: str) -> None:
        lock, users = self._locks[conversation_id]
        if users <= 1:
            del self._locks[conversation_id]
        else:
            self._locks[conversation_id] = (lock, users - 1)

    async def process_activity(
        self, activity: Activity, logic: TurnHandler
    ) -> list[OutboundMessage]:
        """Run one turn; turns of the same conversation never overlap."""
        conversation_id = activity.conversation_id
        lock = self._acquire_slot(conversation_id)
        try:
            async with lock:
                turn = TurnContext(activity)
                try:
                    await logic(turn)
                except Exception as e:
                    await self.on_turn_error(turn, e)
                return turn.responses
        finally:
            self._release_slot(conversation_id)

    async def on_turn_error(self, turn: TurnContext, error: Exception) -> None:
        """Replace whatever the failed turn queued with a generic apology."""
        activity = turn.activity
        logger.error(
            "Turn failed in conversation %s: %s",
            activity.conversation_id,
            error,
            exc_info=error,
            extra={"context": {"conversation_id": activity.conversation_id}},
        )

        turn.discard_responses()
        await turn.send_activity(self._failure_message)

        if self._tracker:
            await self._tracker.track(
                event_type="turn_failed",
                actor="adapter",
                data={
                    "conversation_id": activity.conversation_id,
                    "activity_type": activity.type,
                    "error": f"{type(error).__name__}: {error}",
                },
            )
