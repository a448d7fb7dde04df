"""Step results and the context handed to waterfall steps.

A step never touches the dialog stack. It returns one of the result
variants below and the engine applies it:

- ``BeginChild``: advance the cursor, push and start a child dialog.
- ``End``: pop this dialog and resume the parent with ``result``.
- ``Replace``: pop this dialog and begin another in its place.
- ``Wait``: advance the cursor and wait for the next user turn.
- ``Retry``: keep the cursor and run the same step on the next turn.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Union

from ..adapter import TurnContext


@dataclass(frozen=True)
class BeginChild:
    dialog_id: str
    options: dict = field(default_factory=dict)


@dataclass(frozen=True)
class End:
    result: Any = None


@dataclass(frozen=True)
class Replace:
    dialog_id: str
    options: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Wait:
    pass


@dataclass(frozen=True)
class Retry:
    pass


StepResult = Union[BeginChild, End, Replace, Wait, Retry]


@dataclass
class StepContext:
    """Arguments of a single waterfall step invocation."""

    turn: TurnContext
    dialog_id: str
    index: int
    result: Any
    options: dict
    state: dict  # owned by the dialog instance, persisted between turns

    async def send(self, message) -> None:
        await self.turn.send_activity(message)

    def begin_dialog(self, dialog_id: str, options: dict | None = None) -> BeginChild:
        return BeginChild(dialog_id, options or {})

    def end_dialog(self, result: Any = None) -> End:
        return End(result)

    def replace_dialog(self, dialog_id: str, options: dict | None = None) -> Replace:
        return Replace(dialog_id, options or {})

    def wait(self) -> Wait:
        return Wait()

    def retry(self) -> Retry:
        return Retry()


WaterfallStep = Callable[[StepContext], Awaitable[StepResult]]
