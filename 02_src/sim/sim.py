"""SIM implementation - scripted festival conversations for manual testing."""

import asyncio
import random
import uuid
from typing import Protocol

import httpx

from eventbot.logging_config import get_logger
from eventbot.tracker import ITracker

logger = get_logger(__name__)

BOT_ACCOUNT = {"id": "festival-bot", "name": "Festival Guide"}

# (user, scripted inputs); None means "join the conversation"
SCENARIOS: list[tuple[dict, list[str | None]]] = [
    (
        {"id": "user_001", "name": "Alice"},
        [None, "hi", "Band Search", "black diamond", "Navigate", "Food Court"],
    ),
    (
        {"id": "user_002", "name": "Bob"},
        [None, "hello", "Tickets?", "Navigate", "Backstage", "cancel", "FAQs", "When do gates open?"],
    ),
    (
        {"id": "user_003", "name": "Charlie"},
        ["hey", "Band Search", "start over", "Band Search", "fresh tracks"],
    ),
]


class ISim(Protocol):
    """Generate test traffic against the messaging endpoint."""

    async def start(self) -> None:
        """Start the scripted scenario."""
        ...

    async def stop(self) -> None:
        """Stop the scenario."""
        ...


class Sim:
    """Plays scripted conversations through the HTTP API."""

    def __init__(
        self,
        api_url: str = "http://localhost:3978",
        tracker: ITracker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        delay_range: tuple[float, float] = (1.0, 3.0),
    ):
        self._api_url = api_url
        self._tracker = tracker
        self._transport = transport
        self._delay_range = delay_range
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM trace events."""
        self._tracker = tracker

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the scripted scenario in the background."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient(transport=self._transport)
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop the scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def wait(self) -> None:
        """Wait until the scenario has played out."""
        if self._task:
            await self._task

    async def _run_scenario(self) -> None:
        """Interleave the scripted conversations turn by turn."""
        message_count = sum(len(inputs) for _, inputs in SCENARIOS)
        conversations = {user["id"]: f"sim-{uuid.uuid4()}" for user, _ in SCENARIOS}

        try:
            if self._tracker:
                await self._tracker.track(
                    "sim_started",
                    "sim",
                    {"user_count": len(SCENARIOS), "message_count": message_count},
                )

            rounds = max(len(inputs) for _, inputs in SCENARIOS)
            for i in range(rounds):
                if not self._running:
                    break

                for user, inputs in SCENARIOS:
                    if not self._running:
                        break
                    if i >= len(inputs):
                        continue

                    await self._send_activity(conversations[user["id"]], user, inputs[i])
                    await asyncio.sleep(random.uniform(*self._delay_range))

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False
            if self._tracker:
                await self._tracker.track(
                    "sim_completed",
                    "sim",
                    {"user_count": len(SCENARIOS), "message_count": message_count},
                )

    async def _send_activity(
        self, conversation_id: str, user: dict, text: str | None
    ) -> None:
        """Post one activity to the messaging endpoint."""
        if not self._client:
            return

        activity: dict = {
            "from": user,
            "recipient": BOT_ACCOUNT,
            "conversation": {"id": conversation_id},
            "channelId": "sim",
        }
        if text is None:
            activity["type"] = "conversationUpdate"
            activity["membersAdded"] = [user]
        else:
            activity["type"] = "message"
            activity["text"] = text

        try:
            response = await self._client.post(
                f"{self._api_url}/api/messages",
                json=activity,
                timeout=10.0,
            )

            if response.status_code == 200:
                replies = [a.get("text") for a in response.json().get("activities", [])]
                logger.info("SIM: %s -> %s", user["id"], text or "<joined>")
                logger.info("SIM: Replies: %s", replies)
            else:
                logger.error("SIM: Error sending activity: %s", response.status_code)

        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send activity: %s", e)
