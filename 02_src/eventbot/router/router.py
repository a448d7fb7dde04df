"""TurnRouter: decides what the dialog engine does with each turn."""

import re
from typing import Iterable, Protocol

from ..adapter import TurnContext
from ..dialogs import DialogEngine
from ..errors import EmptyStackError, PersistenceError
from ..logging_config import get_logger
from ..models import ConversationState
from ..storage import IStorage
from ..tracker import ITracker

logger = get_logger(__name__)

WELCOMED_USER = "welcomed_user"

DEFAULT_WELCOME_MESSAGE = (
    "Welcome to the festival guide! I can answer questions, find bands in "
    "the lineup and help you get around the grounds. Type 'cancel' at any "
    "time to start over."
)
DEFAULT_CANCEL_MESSAGE = "Okay, let's start over."


class ITurnRouter(Protocol):
    """Per-turn entry point of the bot."""

    async def on_turn(self, turn: TurnContext) -> None:
        """Load state, route the activity, save state."""
        ...


class TurnRouter:
    """Routes inbound activities to cancellation, continuation or a fresh start."""

    def __init__(
        self,
        engine: DialogEngine,
        storage: IStorage,
        root_dialog_id: str,
        tracker: ITracker | None = None,
        cancel_patterns: Iterable[str] = (),
        welcome_message: str = DEFAULT_WELCOME_MESSAGE,
        cancel_message: str = DEFAULT_CANCEL_MESSAGE,
        start_on_join: bool = False,
    ):
        # Fail at startup rather than on the first turn.
        engine.registry.lookup(root_dialog_id)

        self._engine = engine
        self._storage = storage
        self._root_dialog_id = root_dialog_id
        self._tracker = tracker
        self._cancel_patterns = [
            re.compile(pattern, re.IGNORECASE) for pattern in cancel_patterns
        ]
        self._welcome_message = welcome_message
        self._cancel_message = cancel_message
        self._start_on_join = start_on_join

    async def on_turn(self, turn: TurnContext) -> None:
        """Handle one turn. State is loaded once and saved once."""
        activity = turn.activity
        state = await self._load(activity.conversation_id)

        if activity.is_message:
            await self._on_message(turn, state)
        elif activity.is_conversation_update:
            await self._on_members_added(turn, state)
        else:
            logger.debug("Ignoring activity of type %s", activity.type)

        await self._save(state)

        if self._tracker:
            await self._tracker.track(
                event_type="turn_completed",
                actor="turn_router",
                data={
                    "conversation_id": activity.conversation_id,
                    "activity_type": activity.type,
                    "stack": state.dialog_stack.ids(),
                    "reply_count": len(turn.responses),
                },
            )

    def is_cancellation(self, text: str | None) -> bool:
        """True when the whole input matches a cancellation pattern."""
        if not text:
            return False
        value = text.strip()
        return any(pattern.fullmatch(value) for pattern in self._cancel_patterns)

    async def _on_message(self, turn: TurnContext, state: ConversationState) -> None:
        text = turn.activity.text
        stack = state.dialog_stack

        if self._tracker:
            await self._tracker.track(
                event_type="message_received",
                actor="turn_router",
                data={
                    "conversation_id": state.conversation_id,
                    "user_id": turn.activity.from_account.id,
                    "text": text,
                    "depth": stack.depth,
                },
            )

        if not state.properties.get(WELCOMED_USER):
            await turn.send_activity(self._welcome_message)
            state.properties[WELCOMED_USER] = True

        if self.is_cancellation(text):
            await self._engine.cancel_all_dialogs(stack, turn)
            await turn.send_activity(self._cancel_message)
            await self._engine.begin_dialog(turn, stack, self._root_dialog_id)
            return

        if not stack.is_empty and stack.top.dialog_id not in self._engine.registry:
            logger.warning(
                "Active dialog %s in conversation %s is not registered, restarting %s",
                stack.top.dialog_id,
                state.conversation_id,
                self._root_dialog_id,
            )
            await self._engine.cancel_all_dialogs(stack, turn)

        if not stack.is_empty:
            try:
                await self._engine.continue_dialog(turn, stack)
                return
            except EmptyStackError:
                logger.debug("Nothing to continue, starting %s", self._root_dialog_id)

        await self._engine.begin_dialog(turn, stack, self._root_dialog_id)

    async def _on_members_added(
        self, turn: TurnContext, state: ConversationState
    ) -> None:
        activity = turn.activity
        newcomers = [
            member
            for member in activity.members_added
            if member.id != activity.recipient.id
        ]
        if not newcomers:
            return

        for member in newcomers:
            logger.info(
                "Member %s joined conversation %s", member.id, state.conversation_id
            )
            await turn.send_activity(self._welcome_message)
        state.properties[WELCOMED_USER] = True

        if self._start_on_join and state.dialog_stack.is_empty:
            await self._engine.begin_dialog(
                turn, state.dialog_stack, self._root_dialog_id
            )

    async def _load(self, conversation_id: str) -> ConversationState:
        try:
            state = await self._storage.load_state(conversation_id)
        except Exception as e:
            raise PersistenceError(
                f"Failed to load state for conversation {conversation_id}"
            ) from e
        return state or ConversationState(conversation_id=conversation_id)

    async def _save(self, state: ConversationState) -> None:
        try:
            await self._storage.save_state(state)
        except Exception as e:
            raise PersistenceError(
                f"Failed to save state for conversation {state.conversation_id}"
            ) from e
