"""Tests for DialogRegistry and dialog definitions."""

import pytest

from eventbot.dialogs import ChoicePrompt, DialogRegistry, TextPrompt, WaterfallDialog
from eventbot.errors import DuplicateIdError, UnknownDialogError, ValidationError


async def _noop(step):
    return step.end_dialog()


class TestDialogRegistry:
    """Tests for registration and lookup."""

    def test_register_and_lookup(self):
        """Test a registered definition can be looked up by id."""
        dialog = WaterfallDialog("greet", [_noop])
        registry = DialogRegistry().register(dialog)

        assert registry.lookup("greet") is dialog
        assert "greet" in registry
        assert len(registry) == 1

    def test_duplicate_id_raises(self):
        """Test registering the same id twice fails."""
        registry = DialogRegistry([WaterfallDialog("greet", [_noop])])

        with pytest.raises(DuplicateIdError) as exc_info:
            registry.register(TextPrompt("greet", "Name?"))
        assert exc_info.value.dialog_id == "greet"

    def test_unknown_id_raises(self):
        """Test looking up an unregistered id fails."""
        with pytest.raises(UnknownDialogError) as exc_info:
            DialogRegistry().lookup("missing")
        assert exc_info.value.dialog_id == "missing"

    def test_ids_keep_registration_order(self):
        """Test ids are listed in registration order."""
        registry = DialogRegistry(
            [
                WaterfallDialog("b", [_noop]),
                TextPrompt("a", "A?"),
            ]
        )
        assert registry.ids() == ["b", "a"]

    def test_festival_registry(self, festival_registry):
        """Test the festival dialogs are all registered."""
        assert set(festival_registry.ids()) == {
            "main_menu",
            "faq",
            "band_search",
            "navigate",
            "question_prompt",
            "area_prompt",
        }


class TestDefinitions:
    """Tests for waterfall and prompt definitions."""

    def test_waterfall_needs_steps(self):
        """Test an empty waterfall is rejected."""
        with pytest.raises(ValueError):
            WaterfallDialog("empty", [])

    def test_choice_prompt_needs_choices(self):
        """Test a choice prompt without choices is rejected."""
        with pytest.raises(ValueError):
            ChoicePrompt("pick", "Pick one", choices=[])

    def test_text_prompt_validation(self):
        """Test text prompt strips input and rejects blanks."""
        prompt = TextPrompt("q", "Question?", max_length=5)

        assert prompt.validate("  hello ", {}) == "hello"
        with pytest.raises(ValidationError):
            prompt.validate("   ", {})
        with pytest.raises(ValidationError):
            prompt.validate(None, {})
        with pytest.raises(ValidationError):
            prompt.validate("too long", {})

    def test_choice_prompt_validation(self):
        """Test choice prompt accepts exact choices only."""
        prompt = ChoicePrompt("pick", "Pick one", choices=["Parking", "First Aid"])

        assert prompt.validate(" Parking ", {}) == "Parking"
        with pytest.raises(ValidationError):
            prompt.validate("parking", {})
        with pytest.raises(ValidationError):
            prompt.validate("Food", {})
