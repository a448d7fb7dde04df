"""TurnContext: one inbound activity plus the replies produced for it."""

from ..models import Activity, OutboundMessage


class TurnContext:
    """Carries an activity through a turn and buffers outgoing replies."""

    def __init__(self, activity: Activity):
        self._activity = activity
        self._responses: list[OutboundMessage] = []

    @property
    def activity(self) -> Activity:
        return self._activity

    @property
    def responses(self) -> list[OutboundMessage]:
        return list(self._responses)

    @property
    def responded(self) -> bool:
        return bool(self._responses)

    async def send_activity(self, message: str | OutboundMessage) -> OutboundMessage:
        """Queue a reply for the transport."""
        if isinstance(message, str):
            message = OutboundMessage(text=message)
        self._responses.append(message)
        return message

    def discard_responses(self) -> None:
        """Drop replies queued so far (used when a turn is abandoned)."""
        self._responses.clear()
