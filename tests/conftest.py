import pytest
import os

# Set environment before the settings object is created on import
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "ERROR"  # Reduce noise in tests
os.environ["LIST_PICKER_BUTTON_TEXT"] = "Options"

from template_validator.schemas.template import (  # noqa: E402
    CallToAction,
    ListItem,
    QuickReplyButton,
    TemplateDraft,
    TemplateVariable,
)


@pytest.fixture
def test_template_payload():
    """Sample valid template payload, as the authoring UI would post it."""
    return {
        "name": "booking_confirmation",
        "language": "pt_BR",
        "category": "UTILITY",
        "template_type": "text",
        "body": "Olá {{1}}, sua reserva foi confirmada para {{2}}.",
        "header": "Reserva",
        "footer": "Obrigado",
        "variables": [
            {"key": "1", "name": "customer", "example": "Maria"},
            {"key": "2", "name": "date", "example": "12/05"},
        ],
    }


@pytest.fixture
def make_draft(test_template_payload):
    """Build a TemplateDraft from the sample payload with overrides."""

    def _make(**overrides):
        data = dict(test_template_payload)
        data.update(overrides)
        return TemplateDraft(**data)

    return _make


@pytest.fixture
def make_buttons():
    def _make(count):
        return [QuickReplyButton(id=f"btn_{i}", title=f"Option {i}") for i in range(count)]

    return _make


@pytest.fixture
def make_list_items():
    def _make(count):
        return [ListItem(id=f"item_{i}", title=f"Item {i}") for i in range(count)]

    return _make


@pytest.fixture
def make_actions():
    def _make(*types):
        return [
            CallToAction(type=action_type, title=f"Action {i}", value="x")
            for i, action_type in enumerate(types)
        ]

    return _make


@pytest.fixture
def variable():
    def _make(key, name="", example=""):
        return TemplateVariable(key=key, name=name, example=example)

    return _make
