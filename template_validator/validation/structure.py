"""Per-type cardinality rules for a template's structural payload."""

from typing import Optional, Sequence, Union

from template_validator.core.exceptions import UnknownTemplateTypeError
from template_validator.schemas.template import (
    ActionType,
    CallToAction,
    ListItem,
    QuickReplyButton,
    TemplateType,
)
from template_validator.schemas.validation import RejectionKind, ValidationResult

MAX_QUICK_REPLY_BUTTONS = 10
MAX_URL_ACTIONS = 2
MAX_PHONE_ACTIONS = 1
MAX_ACTIONS = 3
MAX_LIST_ITEMS = 10


def coerce_template_type(template_type: Union[str, TemplateType]) -> TemplateType:
    try:
        return TemplateType(template_type)
    except ValueError:
        raise UnknownTemplateTypeError(template_type) from None


def _too_many(field: str, message: str) -> ValidationResult:
    return ValidationResult.reject(
        RejectionKind.STRUCTURAL_CARDINALITY_EXCEEDED, field, message
    )


def validate_structure(
    template_type: Union[str, TemplateType],
    buttons: Optional[Sequence[QuickReplyButton]] = None,
    actions: Optional[Sequence[CallToAction]] = None,
    list_items: Optional[Sequence[ListItem]] = None,
) -> ValidationResult:
    """
    Check the cardinality rules for ``template_type`` and report the first one
    violated. Field lengths are not checked here.

    Raises:
        UnknownTemplateTypeError: If ``template_type`` is not a TemplateType.
    """
    template_type = coerce_template_type(template_type)

    if template_type is TemplateType.QUICK_REPLY:
        if buttons and len(buttons) > MAX_QUICK_REPLY_BUTTONS:
            return _too_many(
                "buttons",
                f"A maximum of {MAX_QUICK_REPLY_BUTTONS} buttons is allowed",
            )

    elif template_type is TemplateType.CALL_TO_ACTION:
        if actions:
            url_count = sum(1 for a in actions if a.type == ActionType.URL.value)
            phone_count = sum(1 for a in actions if a.type == ActionType.PHONE.value)
            if url_count > MAX_URL_ACTIONS:
                return _too_many(
                    "actions", f"A maximum of {MAX_URL_ACTIONS} URL actions is allowed"
                )
            if phone_count > MAX_PHONE_ACTIONS:
                return _too_many(
                    "actions",
                    f"A maximum of {MAX_PHONE_ACTIONS} phone action is allowed",
                )
            if len(actions) > MAX_ACTIONS:
                return _too_many(
                    "actions", f"A maximum of {MAX_ACTIONS} actions is allowed"
                )

    elif template_type is TemplateType.LIST_PICKER:
        if list_items and len(list_items) > MAX_LIST_ITEMS:
            return _too_many(
                "list_items", f"A maximum of {MAX_LIST_ITEMS} list items is allowed"
            )

    return ValidationResult.ok()
