"""Error types raised by the event bot."""


class EventBotError(Exception):
    """Base class for all event bot errors."""


class DialogError(EventBotError):
    """Raised when a dialog operation fails."""


class DuplicateIdError(DialogError):
    """A dialog with the same id is already registered."""

    def __init__(self, dialog_id: str):
        super().__init__(f"Dialog '{dialog_id}' is already registered")
        self.dialog_id = dialog_id


class UnknownDialogError(DialogError):
    """No dialog is registered under the requested id."""

    def __init__(self, dialog_id: str):
        super().__init__(f"Dialog '{dialog_id}' is not registered")
        self.dialog_id = dialog_id


class EmptyStackError(DialogError):
    """The dialog stack has no active instance."""


class StackDepthError(DialogError):
    """Beginning another dialog would exceed the configured stack depth."""

    def __init__(self, dialog_id: str, max_depth: int):
        super().__init__(
            f"Cannot begin '{dialog_id}': stack depth limit {max_depth} reached"
        )
        self.dialog_id = dialog_id
        self.max_depth = max_depth


class ValidationError(DialogError):
    """User input was rejected by a prompt."""


class PersistenceError(EventBotError):
    """Loading or saving conversation state failed."""


class KnowledgeLookupError(EventBotError):
    """The knowledge base could not answer the question."""
