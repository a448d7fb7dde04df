"""Dialog stack and per-conversation state models."""

from dataclasses import dataclass, field
from typing import Any

from ..errors import EmptyStackError


@dataclass
class DialogInstance:
    """An active invocation of a registered dialog."""

    dialog_id: str
    cursor: int = 0  # next waterfall step to run
    options: dict = field(default_factory=dict)
    state: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "dialog_id": self.dialog_id,
            "cursor": self.cursor,
            "options": self.options,
            "state": self.state,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DialogInstance":
        return cls(
            dialog_id=data["dialog_id"],
            cursor=data.get("cursor", 0),
            options=data.get("options") or {},
            state=data.get("state") or {},
        )


class DialogStack:
    """Ordered dialog instances of one conversation. The last one is active."""

    def __init__(self, instances: list[DialogInstance] | None = None):
        self._instances: list[DialogInstance] = list(instances or [])

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self):
        return iter(self._instances)

    @property
    def depth(self) -> int:
        return len(self._instances)

    @property
    def is_empty(self) -> bool:
        return not self._instances

    @property
    def top(self) -> DialogInstance | None:
        return self._instances[-1] if self._instances else None

    def push(self, instance: DialogInstance) -> None:
        self._instances.append(instance)

    def pop(self) -> DialogInstance:
        if not self._instances:
            raise EmptyStackError("Cannot pop from an empty dialog stack")
        return self._instances.pop()

    def clear(self) -> list[DialogInstance]:
        """Remove every instance, returning them top first."""
        removed = list(reversed(self._instances))
        self._instances.clear()
        return removed

    def ids(self) -> list[str]:
        return [instance.dialog_id for instance in self._instances]

    def to_snapshot(self) -> list[dict]:
        return [instance.to_dict() for instance in self._instances]

    @classmethod
    def from_snapshot(cls, snapshot: list[dict] | None) -> "DialogStack":
        return cls([DialogInstance.from_dict(item) for item in snapshot or []])


@dataclass
class ConversationState:
    """Everything persisted for a conversation between turns."""

    conversation_id: str
    dialog_stack: DialogStack = field(default_factory=DialogStack)
    properties: dict[str, Any] = field(default_factory=dict)

    def to_snapshot(self) -> dict:
        return {
            "dialog_stack": self.dialog_stack.to_snapshot(),
            "properties": self.properties,
        }

    @classmethod
    def from_snapshot(cls, conversation_id: str, snapshot: dict) -> "ConversationState":
        return cls(
            conversation_id=conversation_id,
            dialog_stack=DialogStack.from_snapshot(snapshot.get("dialog_stack")),
            properties=dict(snapshot.get("properties") or {}),
        )
