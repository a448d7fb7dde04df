"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory SQLite storage for testing."""
    from eventbot.storage import SqliteStorage

    st = SqliteStorage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest_asyncio.fixture
async def memory_storage():
    """Create process-local storage for testing."""
    from eventbot.storage import MemoryStorage

    st = MemoryStorage()
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from eventbot.tracker import Tracker

    return Tracker(storage=storage)


@pytest.fixture
def make_activity():
    """Factory for inbound activities."""
    from eventbot.models import Activity, ChannelAccount

    def _make(
        text: str | None = None,
        conversation_id: str = "conv1",
        user_id: str = "user1",
        type: str = "message",
        members_added: list[str] | None = None,
    ) -> Activity:
        return Activity(
            type=type,
            conversation_id=conversation_id,
            from_account=ChannelAccount(id=user_id, name="User"),
            recipient=ChannelAccount(id="bot", name="Festival Guide"),
            text=text,
            members_added=[ChannelAccount(id=m) for m in members_added or []],
            channel_id="test",
        )

    return _make


@pytest.fixture
def make_turn(make_activity):
    """Factory for TurnContexts wrapping a message activity."""
    from eventbot.adapter import TurnContext

    def _make(text: str | None = None, **kwargs) -> TurnContext:
        return TurnContext(make_activity(text, **kwargs))

    return _make


@pytest.fixture
def mock_knowledge_base():
    """Create mock knowledge base that always finds a confident answer."""
    from eventbot.knowledge import QnAResult

    kb = Mock()
    kb.get_answers = AsyncMock(
        return_value=[QnAResult(answer="Gates open at 10:00.", score=0.92)]
    )
    kb.close = AsyncMock()
    return kb


@pytest.fixture
def festival_registry(mock_knowledge_base):
    """Registry with every festival dialog."""
    from eventbot.bot import build_registry

    return build_registry(mock_knowledge_base, score_threshold=0.5)


@pytest.fixture
def festival_engine(festival_registry):
    """Engine over the festival dialogs."""
    from eventbot.dialogs import DialogEngine

    return DialogEngine(festival_registry, max_prompt_retries=3, max_stack_depth=10)


@pytest.fixture
def router(festival_engine, memory_storage):
    """TurnRouter over the festival dialogs and memory storage."""
    from eventbot.bot import MAIN_MENU
    from eventbot.router import TurnRouter

    return TurnRouter(
        engine=festival_engine,
        storage=memory_storage,
        root_dialog_id=MAIN_MENU,
        cancel_patterns=["cancel", "start over"],
    )


@pytest.fixture
def settings():
    """Settings for an in-memory application without a knowledge base."""
    from eventbot.config import BotSettings

    return BotSettings(storage_backend="sqlite", db_path=":memory:")
