"""Registry of dialog definitions, filled once at startup."""

from typing import Iterable, Union

from ..errors import DuplicateIdError, UnknownDialogError
from ..logging_config import get_logger
from .prompts import Prompt
from .waterfall import WaterfallDialog

logger = get_logger(__name__)


DialogDefinition = Union[WaterfallDialog, Prompt]


class DialogRegistry:
    """Maps dialog ids to their definitions."""

    def __init__(self, definitions: Iterable[DialogDefinition] = ()):
        self._definitions: dict[str, DialogDefinition] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: DialogDefinition) -> "DialogRegistry":
        """Add a definition. Raises DuplicateIdError if the id is taken."""
        if definition.id in self._definitions:
            raise DuplicateIdError(definition.id)
        self._definitions[definition.id] = definition
        logger.debug("Registered dialog %s", definition.id)
        return self

    def lookup(self, dialog_id: str) -> DialogDefinition:
        """Get a definition. Raises UnknownDialogError if absent."""
        try:
            return self._definitions[dialog_id]
        except KeyError:
            raise UnknownDialogError(dialog_id) from None

    def ids(self) -> list[str]:
        return list(self._definitions)

    def __contains__(self, dialog_id: object) -> bool:
        return dialog_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
