"""Waterfall dialog definition."""

from typing import Sequence

from .steps import WaterfallStep


class WaterfallDialog:
    """A dialog made of ordered steps, each receiving the previous result."""

    def __init__(self, dialog_id: str, steps: Sequence[WaterfallStep]):
        if not steps:
            raise ValueError(f"Waterfall '{dialog_id}' needs at least one step")
        self._id = dialog_id
        self._steps = tuple(steps)

    @property
    def id(self) -> str:
        return self._id

    @property
    def steps(self) -> tuple[WaterfallStep, ...]:
        return self._steps

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"WaterfallDialog(id={self._id!r}, steps={len(self._steps)})"
