"""Dialogs of the festival guide: main menu, FAQs, band search, navigation."""

from ..dialogs import (
    ChoicePrompt,
    DialogRegistry,
    StepContext,
    StepResult,
    TextPrompt,
    WaterfallDialog,
)
from ..errors import KnowledgeLookupError
from ..knowledge import IKnowledgeBase, best_answer
from ..logging_config import get_logger
from ..models import suggested_actions
from .lineup import DIRECTIONS, find_performances

logger = get_logger(__name__)

MAIN_MENU = "main_menu"
FAQ = "faq"
BAND_SEARCH = "band_search"
NAVIGATE = "navigate"
QUESTION_PROMPT = "question_prompt"
AREA_PROMPT = "area_prompt"

MENU_PROMPT = "How would you like to explore the event?"
MENU_CHOICES: dict[str, str] = {
    "FAQs": FAQ,
    "Band Search": BAND_SEARCH,
    "Navigate": NAVIGATE,
}

NOT_UNDERSTOOD = "Sorry, I didn't understand that. Please pick one of the options."
BAND_QUESTION = "Which band are you looking for?"
BAND_NOT_FOUND = "I couldn't find '{query}' in this year's lineup."
FAQ_QUESTION = "What would you like to know about the event?"
FAQ_FALLBACK = (
    "I don't have an answer for that yet. Please ask at the information desk "
    "next to the main gate."
)
AREA_QUESTION = "Where do you want to go?"


class FestivalDialogs:
    """Step functions of the festival dialogs, bound to their collaborators."""

    def __init__(
        self,
        knowledge_base: IKnowledgeBase | None = None,
        score_threshold: float = 0.5,
    ):
        self._knowledge_base = knowledge_base
        self._score_threshold = score_threshold

    def register(self, registry: DialogRegistry) -> DialogRegistry:
        """Add every festival dialog to the registry."""
        registry.register(
            WaterfallDialog(
                MAIN_MENU,
                [self.show_menu, self.dispatch_choice, self.loop_menu],
            )
        )
        registry.register(WaterfallDialog(BAND_SEARCH, [self.ask_band, self.find_band]))
        registry.register(WaterfallDialog(NAVIGATE, [self.ask_area, self.give_directions]))
        registry.register(WaterfallDialog(FAQ, [self.ask_question, self.answer_question]))
        registry.register(
            TextPrompt(
                QUESTION_PROMPT,
                FAQ_QUESTION,
                max_length=500,
                retry_prompt="Please type your question.",
            )
        )
        registry.register(
            ChoicePrompt(
                AREA_PROMPT,
                AREA_QUESTION,
                choices=list(DIRECTIONS),
                retry_prompt="Please choose one of the places below.",
            )
        )
        return registry

    # Main menu

    async def show_menu(self, step: StepContext) -> StepResult:
        await step.send(suggested_actions(list(MENU_CHOICES), MENU_PROMPT))
        return step.wait()

    async def dispatch_choice(self, step: StepContext) -> StepResult:
        choice = (step.result or "").strip()
        child = MENU_CHOICES.get(choice)
        if child is None:
            await step.send(NOT_UNDERSTOOD)
            await step.send(suggested_actions(list(MENU_CHOICES), MENU_PROMPT))
            return step.retry()
        return step.begin_dialog(child)

    async def loop_menu(self, step: StepContext) -> StepResult:
        return step.replace_dialog(MAIN_MENU)

    # Band search

    async def ask_band(self, step: StepContext) -> StepResult:
        await step.send(BAND_QUESTION)
        return step.wait()

    async def find_band(self, step: StepContext) -> StepResult:
        query = (step.result or "").strip()
        matches = find_performances(query)
        if not matches:
            await step.send(BAND_NOT_FOUND.format(query=query))
            return step.end_dialog(None)

        for performance in matches:
            await step.send(
                f"{performance.band} plays the {performance.stage} on "
                f"{performance.day} at {performance.start}."
            )
        return step.end_dialog(matches[0].band)

    # Navigation

    async def ask_area(self, step: StepContext) -> StepResult:
        return step.begin_dialog(AREA_PROMPT)

    async def give_directions(self, step: StepContext) -> StepResult:
        area = step.result
        if area is None:
            return step.end_dialog(None)
        await step.send(DIRECTIONS[area])
        return step.end_dialog(area)

    # FAQs

    async def ask_question(self, step: StepContext) -> StepResult:
        return step.begin_dialog(QUESTION_PROMPT)

    async def answer_question(self, step: StepContext) -> StepResult:
        question = step.result
        if question is None:
            return step.end_dialog(None)

        answer = None
        if self._knowledge_base is not None:
            try:
                results = await self._knowledge_base.get_answers(question)
                answer = best_answer(results, self._score_threshold)
            except KnowledgeLookupError as e:
                logger.error("Knowledge lookup failed: %s", e, exc_info=True)

        if answer is None:
            await step.send(FAQ_FALLBACK)
            return step.end_dialog(None)

        await step.send(answer.answer)
        return step.end_dialog(answer.answer)


def build_registry(
    knowledge_base: IKnowledgeBase | None = None,
    score_threshold: float = 0.5,
) -> DialogRegistry:
    """Registry holding every festival dialog."""
    return FestivalDialogs(knowledge_base, score_threshold).register(DialogRegistry())
