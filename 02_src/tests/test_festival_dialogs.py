"""Tests for the festival guide dialogs."""

from unittest.mock import AsyncMock

import pytest

from eventbot.adapter import TurnContext
from eventbot.bot import (
    AREA_QUESTION,
    BAND_NOT_FOUND,
    DIRECTIONS,
    FAQ_FALLBACK,
    FAQ_QUESTION,
    MAIN_MENU,
    MENU_PROMPT,
    build_registry,
    find_performances,
)
from eventbot.dialogs import DialogEngine
from eventbot.errors import KnowledgeLookupError
from eventbot.knowledge import QnAResult
from eventbot.router import TurnRouter


@pytest.fixture
def chat(router, make_activity):
    """Send a message and get back the reply texts."""

    async def _chat(text: str) -> list[str]:
        turn = TurnContext(make_activity(text))
        await router.on_turn(turn)
        return [message.text for message in turn.responses]

    return _chat


async def stack_ids(memory_storage) -> list[str]:
    state = await memory_storage.load_state("conv1")
    return state.dialog_stack.ids()


class TestMainMenu:
    """Tests for the main menu."""

    @pytest.mark.asyncio
    async def test_menu_offers_three_choices(self, router, make_activity):
        """Test the menu is sent with suggested actions."""
        turn = TurnContext(make_activity("hi"))
        await router.on_turn(turn)

        menu = turn.responses[-1]
        assert menu.text == MENU_PROMPT
        assert menu.suggested_actions == ["FAQs", "Band Search", "Navigate"]


class TestBandSearch:
    """Tests for the band search dialog."""

    @pytest.mark.asyncio
    async def test_band_found(self, chat, memory_storage):
        """Test a known band is reported and the menu comes back."""
        await chat("hi")
        await chat("Band Search")

        replies = await chat("black diamond")

        assert replies == [
            "Black Diamond plays the Main Stage on Saturday at 21:00.",
            MENU_PROMPT,
        ]
        assert await stack_ids(memory_storage) == [MAIN_MENU]

    @pytest.mark.asyncio
    async def test_band_not_found(self, chat, memory_storage):
        """Test an unknown band gets a not-found reply."""
        await chat("hi")
        await chat("Band Search")

        replies = await chat("Nobody")

        assert replies == [BAND_NOT_FOUND.format(query="Nobody"), MENU_PROMPT]
        assert await stack_ids(memory_storage) == [MAIN_MENU]

    def test_find_performances(self):
        """Test lineup search is a case-insensitive substring match."""
        assert [p.band for p in find_performances("FRESH")] == ["Fresh Tracks"]
        assert find_performances("  ") == []


class TestNavigate:
    """Tests for the navigation dialog."""

    @pytest.mark.asyncio
    async def test_directions(self, chat, memory_storage):
        """Test choosing a place gives directions and returns to the menu."""
        await chat("hi")

        replies = await chat("Navigate")
        assert replies == [AREA_QUESTION]
        assert await stack_ids(memory_storage) == [MAIN_MENU, "navigate", "area_prompt"]

        replies = await chat("Food Court")
        assert replies == [DIRECTIONS["Food Court"], MENU_PROMPT]
        assert await stack_ids(memory_storage) == [MAIN_MENU]

    @pytest.mark.asyncio
    async def test_unknown_place_reprompts(self, chat, memory_storage):
        """Test an unknown place re-asks without unwinding."""
        await chat("hi")
        await chat("Navigate")

        replies = await chat("Backstage")

        assert replies == ["Please choose one of the places below."]
        assert await stack_ids(memory_storage) == [MAIN_MENU, "navigate", "area_prompt"]

    @pytest.mark.asyncio
    async def test_giving_up_returns_to_menu(self, chat, memory_storage):
        """Test exhausting the retries ends navigation quietly."""
        await chat("hi")
        await chat("Navigate")
        for _ in range(3):
            await chat("Backstage")

        replies = await chat("Backstage")

        assert replies == ["Let's try something else.", MENU_PROMPT]
        assert await stack_ids(memory_storage) == [MAIN_MENU]


class TestFaq:
    """Tests for the FAQ dialog."""

    @pytest.mark.asyncio
    async def test_confident_answer(self, chat, mock_knowledge_base):
        """Test a confident knowledge base answer is relayed."""
        await chat("hi")
        assert await chat("FAQs") == [FAQ_QUESTION]

        replies = await chat("When do gates open?")

        assert replies == ["Gates open at 10:00.", MENU_PROMPT]
        mock_knowledge_base.get_answers.assert_awaited_once_with("When do gates open?")

    @pytest.mark.asyncio
    async def test_low_score_falls_back(self, chat, mock_knowledge_base):
        """Test an answer under the threshold is not used."""
        mock_knowledge_base.get_answers.return_value = [
            QnAResult(answer="Maybe.", score=0.2)
        ]
        await chat("hi")
        await chat("FAQs")

        replies = await chat("Can I bring my dog?")

        assert replies == [FAQ_FALLBACK, MENU_PROMPT]

    @pytest.mark.asyncio
    async def test_lookup_error_falls_back(self, chat, mock_knowledge_base):
        """Test a failing knowledge base gives the fallback answer."""
        mock_knowledge_base.get_answers = AsyncMock(
            side_effect=KnowledgeLookupError("timeout")
        )
        await chat("hi")
        await chat("FAQs")

        replies = await chat("Is there wifi?")

        assert replies == [FAQ_FALLBACK, MENU_PROMPT]

    @pytest.mark.asyncio
    async def test_without_knowledge_base(self, memory_storage, make_activity):
        """Test FAQs work without a knowledge base configured."""
        engine = DialogEngine(build_registry(None))
        router = TurnRouter(engine, memory_storage, MAIN_MENU)

        for text in ("hi", "FAQs"):
            await router.on_turn(TurnContext(make_activity(text)))
        turn = TurnContext(make_activity("Where is the toilet?"))
        await router.on_turn(turn)

        assert [m.text for m in turn.responses] == [FAQ_FALLBACK, MENU_PROMPT]
