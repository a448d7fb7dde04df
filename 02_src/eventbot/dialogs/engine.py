"""DialogEngine: runs dialogs on a per-conversation dialog stack."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..adapter import TurnContext
from ..errors import DialogError, EmptyStackError, StackDepthError, ValidationError
from ..logging_config import get_logger
from ..models import DialogInstance, DialogStack
from ..tracker import ITracker
from .prompts import Prompt
from .registry import DialogRegistry
from .steps import BeginChild, End, Replace, Retry, StepContext, StepResult, Wait
from .waterfall import WaterfallDialog

logger = get_logger(__name__)

_STEP_RESULTS = (BeginChild, End, Replace, Wait, Retry)


class DialogTurnStatus(str, Enum):
    """Where the stack stands once the engine hands control back."""

    WAITING = "waiting"  # a dialog is active and waits for user input
    COMPLETE = "complete"  # the last dialog ended, stack is empty


@dataclass
class DialogTurnResult:
    status: DialogTurnStatus
    result: Any = None


class DialogEngine:
    """Step executor for waterfall and prompt dialogs.

    The engine holds no conversation state of its own; every operation takes
    the DialogStack to work on. The stack is mutated in place.
    """

    def __init__(
        self,
        registry: DialogRegistry,
        tracker: ITracker | None = None,
        max_prompt_retries: int | None = 3,
        max_stack_depth: int | None = 10,
    ):
        self._registry = registry
        self._tracker = tracker
        self._max_prompt_retries = max_prompt_retries
        self._max_stack_depth = max_stack_depth

    @property
    def registry(self) -> DialogRegistry:
        return self._registry

    async def begin_dialog(
        self,
        turn: TurnContext,
        stack: DialogStack,
        dialog_id: str,
        options: dict | None = None,
    ) -> DialogTurnResult:
        """Push a new instance of dialog_id and run its first step."""
        outcome = await self._start(turn, stack, dialog_id, options)
        return await self._settle(turn, stack, outcome)

    async def continue_dialog(
        self, turn: TurnContext, stack: DialogStack
    ) -> DialogTurnResult:
        """Feed the turn's text to the active dialog at its saved cursor."""
        instance = stack.top
        if instance is None:
            raise EmptyStackError("No active dialog to continue")

        definition = self._registry.lookup(instance.dialog_id)
        if isinstance(definition, Prompt):
            outcome = await self._continue_prompt(turn, instance, definition)
        else:
            outcome = await self._run_step(
                turn, instance, definition, turn.activity.text
            )
        return await self._settle(turn, stack, outcome)

    async def replace_dialog(
        self,
        turn: TurnContext,
        stack: DialogStack,
        dialog_id: str,
        options: dict | None = None,
    ) -> DialogTurnResult:
        """Pop the active dialog and begin dialog_id in its place."""
        if stack.is_empty:
            raise EmptyStackError("No active dialog to replace")

        await self._pop(turn, stack, reason="replaced")
        outcome = await self._start(turn, stack, dialog_id, options)
        return await self._settle(turn, stack, outcome)

    async def cancel_all_dialogs(
        self, stack: DialogStack, turn: TurnContext | None = None
    ) -> int:
        """Discard every active dialog. Returns how many were cancelled."""
        cancelled = stack.clear()
        for instance in cancelled:
            await self._track(
                turn,
                "dialog_ended",
                {"dialog_id": instance.dialog_id, "reason": "cancelled"},
            )
        if cancelled:
            logger.info("Cancelled %s dialogs", len(cancelled))
        return len(cancelled)

    # Step execution

    async def _start(
        self,
        turn: TurnContext,
        stack: DialogStack,
        dialog_id: str,
        options: dict | None,
    ) -> StepResult:
        definition = self._registry.lookup(dialog_id)
        if self._max_stack_depth is not None and stack.depth >= self._max_stack_depth:
            raise StackDepthError(dialog_id, self._max_stack_depth)

        instance = DialogInstance(dialog_id=dialog_id, options=dict(options or {}))
        stack.push(instance)
        logger.debug("Dialog %s started at depth %s", dialog_id, stack.depth)
        await self._track(
            turn, "dialog_started", {"dialog_id": dialog_id, "depth": stack.depth}
        )

        if isinstance(definition, Prompt):
            await definition.send_prompt(turn, instance.options)
            return Wait()
        return await self._run_step(turn, instance, definition, None)

    async def _run_step(
        self,
        turn: TurnContext,
        instance: DialogInstance,
        definition: WaterfallDialog,
        result: Any,
    ) -> StepResult:
        # Running past the last step ends the waterfall with the last result.
        if instance.cursor >= len(definition):
            return End(result)

        step = definition.steps[instance.cursor]
        context = StepContext(
            turn=turn,
            dialog_id=instance.dialog_id,
            index=instance.cursor,
            result=result,
            options=instance.options,
            state=instance.state,
        )
        outcome = await step(context)
        if not isinstance(outcome, _STEP_RESULTS):
            raise DialogError(
                f"Step {instance.cursor} of '{instance.dialog_id}' "
                f"returned {outcome!r} instead of a step result"
            )
        return outcome

    async def _continue_prompt(
        self, turn: TurnContext, instance: DialogInstance, prompt: Prompt
    ) -> StepResult:
        try:
            value = prompt.validate(turn.activity.text, instance.options)
        except ValidationError as e:
            attempts = instance.state.get("attempts", 0) + 1
            instance.state["attempts"] = attempts
            logger.debug("Prompt %s rejected input (%s): %s", prompt.id, attempts, e)

            if self._max_prompt_retries is not None and attempts > self._max_prompt_retries:
                await turn.send_activity(prompt.give_up_message)
                await self._track(
                    turn,
                    "prompt_abandoned",
                    {"dialog_id": prompt.id, "attempts": attempts},
                )
                return End(None)

            await prompt.send_retry(turn, instance.options)
            return Retry()

        return End(value)

    async def _resume(
        self, turn: TurnContext, instance: DialogInstance, result: Any
    ) -> StepResult:
        definition = self._registry.lookup(instance.dialog_id)
        if isinstance(definition, Prompt):
            return End(result)
        return await self._run_step(turn, instance, definition, result)

    async def _settle(
        self, turn: TurnContext, stack: DialogStack, outcome: StepResult
    ) -> DialogTurnResult:
        """Apply step results until a dialog waits or the stack empties.

        The outcome being applied always belongs to the instance on top of
        the stack.
        """
        while True:
            instance = stack.top

            if isinstance(outcome, Retry):
                return DialogTurnResult(DialogTurnStatus.WAITING)

            if isinstance(outcome, Wait):
                if self._is_waterfall(instance):
                    instance.cursor += 1
                return DialogTurnResult(DialogTurnStatus.WAITING)

            if isinstance(outcome, BeginChild):
                if self._is_waterfall(instance):
                    instance.cursor += 1
                outcome = await self._start(
                    turn, stack, outcome.dialog_id, outcome.options
                )
                continue

            if isinstance(outcome, Replace):
                await self._pop(turn, stack, reason="replaced")
                outcome = await self._start(
                    turn, stack, outcome.dialog_id, outcome.options
                )
                continue

            await self._pop(turn, stack, reason="completed")
            if stack.is_empty:
                return DialogTurnResult(DialogTurnStatus.COMPLETE, outcome.result)
            outcome = await self._resume(turn, stack.top, outcome.result)

    async def _pop(self, turn: TurnContext, stack: DialogStack, reason: str) -> None:
        instance = stack.pop()
        logger.debug("Dialog %s %s", instance.dialog_id, reason)
        await self._track(
            turn, "dialog_ended", {"dialog_id": instance.dialog_id, "reason": reason}
        )

    def _is_waterfall(self, instance: DialogInstance) -> bool:
        return isinstance(self._registry.lookup(instance.dialog_id), WaterfallDialog)

    async def _track(self, turn: TurnContext | None, event_type: str, data: dict) -> None:
        if not self._tracker:
            return
        conversation_id = turn.activity.conversation_id if turn else None
        await self._tracker.track(
            event_type=event_type,
            actor="dialog_engine",
            data={"conversation_id": conversation_id, **data},
        )
