"""
Full-record validation of a template draft.

Rules run in a fixed order and the first violation wins, so the same invalid
draft always reports the same error:

1. name pattern and length
2. language, then category, are known values
3. template_type is a known value
4. body length
5. distinct placeholders form a gapless run 1..k
6. no two placeholders separated only by whitespace
7. header, then footer, length
8. per-type cardinality (see ``validation.structure``)
9. button, action and list-item field lengths
10. media URL for media templates
"""

import re
from typing import Any, Mapping, Optional, Union

from pydantic import AnyUrl, TypeAdapter, ValidationError

from template_validator.schemas.template import (
    ActionType,
    TemplateCategory,
    TemplateDraft,
    TemplateLanguage,
    TemplateType,
)
from template_validator.schemas.validation import RejectionKind, ValidationResult
from template_validator.validation.structure import validate_structure
from template_validator.validation.variables import extract_variables, numeric_key

NAME_PATTERN = re.compile(r"[a-z][a-z0-9_]*")
NAME_MAX_LENGTH = 512
BODY_MAX_LENGTH = 1024
HEADER_MAX_LENGTH = 60
FOOTER_MAX_LENGTH = 60
BUTTON_TITLE_MAX_LENGTH = 20
ACTION_TITLE_MAX_LENGTH = 25
LIST_ITEM_TITLE_MAX_LENGTH = 24
LIST_ITEM_DESCRIPTION_MAX_LENGTH = 72

ADJACENT_PLACEHOLDERS = re.compile(r"\{\{[0-9]+\}\}\s*\{\{[0-9]+\}\}")

_url_adapter = TypeAdapter(AnyUrl)


def text_length(text: str) -> int:
    """Length in UTF-16 code units, the unit the provider counts limits in."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def template_name_error(name: str) -> Optional[str]:
    """Message explaining why ``name`` is not a valid identifier, or None."""
    if not name:
        return "Name is required"
    if text_length(name) > NAME_MAX_LENGTH:
        return f"Maximum of {NAME_MAX_LENGTH} characters"
    if not re.match(r"^[a-z]", name):
        return "Must start with a lowercase letter"
    if not NAME_PATTERN.fullmatch(name):
        return "Use only lowercase letters, numbers and underscores"
    return None


def is_valid_template_name(name: str) -> bool:
    return template_name_error(name) is None


def normalize_template_name(raw: str) -> str:
    """Lowercase ``raw`` and replace anything outside [a-z0-9_] with '_'."""
    return re.sub(r"[^a-z0-9_]", "_", raw.lower())


def has_sequential_variables(body: str) -> bool:
    numbers = {numeric_key(key) for key in extract_variables(body)}
    return numbers == {str(n) for n in range(1, len(numbers) + 1)}


def has_adjacent_variables(body: str) -> bool:
    return ADJACENT_PLACEHOLDERS.search(body) is not None


def is_absolute_url(value: Optional[str]) -> bool:
    if not value:
        return False
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def _enum_error(field: str, value: Any, enum_cls) -> ValidationResult:
    allowed = ", ".join(member.value for member in enum_cls)
    return ValidationResult.reject(
        RejectionKind.INVALID_ENUM_VALUE,
        field,
        f"Invalid {field} {value!r}. Must be one of: {allowed}",
    )


def _too_long(field: str, limit: int) -> ValidationResult:
    return ValidationResult.reject(
        RejectionKind.FIELD_LENGTH_EXCEEDED,
        field,
        f"Maximum of {limit} characters",
    )


def _required(field: str) -> ValidationResult:
    return ValidationResult.reject(
        RejectionKind.FIELD_LENGTH_EXCEEDED, field, f"{field} is required"
    )


def _is_member(value: Any, enum_cls) -> bool:
    return value in {member.value for member in enum_cls}


def _check_entries(draft: TemplateDraft) -> Optional[ValidationResult]:
    for index, button in enumerate(draft.buttons):
        prefix = f"buttons[{index}]"
        if not button.id:
            return _required(f"{prefix}.id")
        if not button.title:
            return _required(f"{prefix}.title")
        if text_length(button.title) > BUTTON_TITLE_MAX_LENGTH:
            return _too_long(f"{prefix}.title", BUTTON_TITLE_MAX_LENGTH)

    for index, action in enumerate(draft.actions):
        prefix = f"actions[{index}]"
        if not _is_member(action.type, ActionType):
            return _enum_error(f"{prefix}.type", action.type, ActionType)
        if not action.title:
            return _required(f"{prefix}.title")
        if text_length(action.title) > ACTION_TITLE_MAX_LENGTH:
            return _too_long(f"{prefix}.title", ACTION_TITLE_MAX_LENGTH)

    for index, item in enumerate(draft.list_items):
        prefix = f"list_items[{index}]"
        if not item.id:
            return _required(f"{prefix}.id")
        if not item.title:
            return _required(f"{prefix}.title")
        if text_length(item.title) > LIST_ITEM_TITLE_MAX_LENGTH:
            return _too_long(f"{prefix}.title", LIST_ITEM_TITLE_MAX_LENGTH)
        if (
            item.description is not None
            and text_length(item.description) > LIST_ITEM_DESCRIPTION_MAX_LENGTH
        ):
            return _too_long(f"{prefix}.description", LIST_ITEM_DESCRIPTION_MAX_LENGTH)

    return None


def validate_template(
    draft: Union[TemplateDraft, Mapping[str, Any]]
) -> ValidationResult:
    """
    Validate a complete draft and return the first failure, if any.

    ``draft`` may be a TemplateDraft or a plain mapping (e.g. decoded JSON).
    A mapping that cannot even be shaped into a draft raises pydantic's
    ValidationError; every other problem is returned as a rejection.
    """
    if not isinstance(draft, TemplateDraft):
        draft = TemplateDraft.model_validate(draft)

    name_error = template_name_error(draft.name)
    if name_error:
        return ValidationResult.reject(RejectionKind.INVALID_NAME, "name", name_error)

    if not _is_member(draft.language, TemplateLanguage):
        return _enum_error("language", draft.language, TemplateLanguage)
    if not _is_member(draft.category, TemplateCategory):
        return _enum_error("category", draft.category, TemplateCategory)
    if not _is_member(draft.template_type, TemplateType):
        return _enum_error("template_type", draft.template_type, TemplateType)

    if not draft.body:
        return ValidationResult.reject(
            RejectionKind.BODY_EMPTY, "body", "Body is required"
        )
    if text_length(draft.body) > BODY_MAX_LENGTH:
        return ValidationResult.reject(
            RejectionKind.BODY_LENGTH_EXCEEDED,
            "body",
            f"Maximum of {BODY_MAX_LENGTH} characters",
        )

    if not has_sequential_variables(draft.body):
        return ValidationResult.reject(
            RejectionKind.NON_SEQUENTIAL_VARIABLES,
            "body",
            "Variables must be sequential: {{1}}, {{2}}, etc.",
        )
    if has_adjacent_variables(draft.body):
        return ValidationResult.reject(
            RejectionKind.ADJACENT_VARIABLES,
            "body",
            "Add text between variables",
        )

    if draft.header is not None and text_length(draft.header) > HEADER_MAX_LENGTH:
        return _too_long("header", HEADER_MAX_LENGTH)
    if draft.footer is not None and text_length(draft.footer) > FOOTER_MAX_LENGTH:
        return _too_long("footer", FOOTER_MAX_LENGTH)

    structure = validate_structure(
        draft.template_type, draft.buttons, draft.actions, draft.list_items
    )
    if not structure.valid:
        return structure

    entry_error = _check_entries(draft)
    if entry_error is not None:
        return entry_error

    if draft.template_type == TemplateType.MEDIA.value and not is_absolute_url(
        draft.media_url
    ):
        return ValidationResult.reject(
            RejectionKind.INVALID_MEDIA_URL, "media_url", "Invalid URL"
        )

    return ValidationResult.ok()
