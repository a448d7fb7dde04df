"""Prompt dialogs: ask once, validate the reply, re-ask on bad input."""

from typing import Any, Sequence

from ..adapter import TurnContext
from ..errors import ValidationError
from ..models import suggested_actions

DEFAULT_GIVE_UP_MESSAGE = "Let's try something else."


class Prompt:
    """Base class for prompt dialogs.

    ``options`` passed when the prompt is begun may override ``prompt`` and
    ``retry_prompt`` for that invocation.
    """

    def __init__(
        self,
        dialog_id: str,
        prompt: str,
        retry_prompt: str | None = None,
        give_up_message: str = DEFAULT_GIVE_UP_MESSAGE,
    ):
        self._id = dialog_id
        self._prompt = prompt
        self._retry_prompt = retry_prompt or prompt
        self._give_up_message = give_up_message

    @property
    def id(self) -> str:
        return self._id

    @property
    def give_up_message(self) -> str:
        return self._give_up_message

    async def send_prompt(self, turn: TurnContext, options: dict) -> None:
        await self._send(turn, options.get("prompt") or self._prompt)

    async def send_retry(self, turn: TurnContext, options: dict) -> None:
        await self._send(turn, options.get("retry_prompt") or self._retry_prompt)

    async def _send(self, turn: TurnContext, text: str) -> None:
        await turn.send_activity(text)

    def validate(self, text: str | None, options: dict) -> Any:
        """Return the recognized value or raise ValidationError."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"


class TextPrompt(Prompt):
    """Accepts any non-blank text."""

    def __init__(self, dialog_id: str, prompt: str, max_length: int | None = None, **kwargs):
        super().__init__(dialog_id, prompt, **kwargs)
        self._max_length = max_length

    def validate(self, text: str | None, options: dict) -> str:
        value = (text or "").strip()
        if not value:
            raise ValidationError("Empty reply")
        if self._max_length is not None and len(value) > self._max_length:
            raise ValidationError(f"Reply longer than {self._max_length} characters")
        return value


class ChoicePrompt(Prompt):
    """Offers a fixed set of choices and accepts only an exact match."""

    def __init__(self, dialog_id: str, prompt: str, choices: Sequence[str], **kwargs):
        if not choices:
            raise ValueError(f"ChoicePrompt '{dialog_id}' needs at least one choice")
        super().__init__(dialog_id, prompt, **kwargs)
        self._choices = tuple(choices)

    @property
    def choices(self) -> tuple[str, ...]:
        return self._choices

    async def _send(self, turn: TurnContext, text: str) -> None:
        await turn.send_activity(suggested_actions(list(self._choices), text))

    def validate(self, text: str | None, options: dict) -> str:
        value = (text or "").strip()
        if value not in self._choices:
            raise ValidationError(f"'{value}' is not one of {list(self._choices)}")
        return value
