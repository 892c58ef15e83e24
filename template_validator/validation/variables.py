"""Placeholder extraction and variables-table synchronization."""

import re
from typing import Dict, Iterable, List, Optional

from template_validator.schemas.template import TemplateVariable

# ASCII digits only; the provider does not recognize other numerals
PLACEHOLDER_PATTERN = re.compile(r"\{\{([0-9]+)\}\}")


def numeric_key(key: str) -> str:
    """Canonical form of a digit span: leading zeros stripped ("007" -> "7")."""
    return key.lstrip("0") or "0"


def numeric_order(key: str):
    # Compares digit spans by value without int(), which refuses very long spans
    canonical = numeric_key(key)
    return (len(canonical), canonical, key)


def extract_variables(body: str) -> List[str]:
    """
    Return the distinct placeholder keys in ``body``, numerically ascending.

    Keys are the literal digit spans (``"1"``, ``"10"``), so ``{{10}}`` sorts
    after ``{{9}}``. Appearance order in the text does not matter.
    """
    unique = dict.fromkeys(PLACEHOLDER_PATTERN.findall(body))
    return sorted(unique, key=numeric_order)


def reconcile_variables(
    old_variables: Iterable[TemplateVariable], new_keys: List[str]
) -> List[TemplateVariable]:
    """
    Rebuild the variables table for a freshly extracted key list.

    Rows whose key survives keep their name and example; new keys get empty
    ones; rows for keys no longer in the body are dropped.
    """
    if not new_keys:
        return []

    existing: Dict[str, TemplateVariable] = {}
    for variable in old_variables:
        existing.setdefault(variable.key, variable)

    reconciled = []
    for key in new_keys:
        previous = existing.get(key)
        if previous is None:
            reconciled.append(TemplateVariable(key=key))
        else:
            reconciled.append(
                TemplateVariable(key=key, name=previous.name, example=previous.example)
            )
    return reconciled


def sync_variables(
    body: str, old_variables: Iterable[TemplateVariable]
) -> List[TemplateVariable]:
    """Re-extract ``body`` and reconcile the table against it."""
    return reconcile_variables(old_variables, extract_variables(body))


def next_placeholder(body: str) -> str:
    """The placeholder token an "insert variable" action appends to ``body``."""
    return "{{%d}}" % (len(extract_variables(body)) + 1)


def missing_examples(variables: Iterable[TemplateVariable]) -> List[str]:
    """Keys whose example value is blank."""
    return [variable.key for variable in variables if not variable.example.strip()]


def render_preview(
    body: str,
    variables: Iterable[TemplateVariable],
    values: Optional[Dict[str, str]] = None,
) -> str:
    """
    Substitute every placeholder in ``body`` for display.

    Each placeholder takes, in order of preference: the send-time value from
    ``values``, the variable's example, ``[name]``, or ``[Variable n]``.
    Placeholders with no matching table row are left untouched.
    """
    values = values or {}
    table = {variable.key: variable for variable in variables}

    def _substitute(match):
        key = match.group(1)
        value = values.get(key)
        if value:
            return value
        variable = table.get(key)
        if variable is None:
            return match.group(0)
        if variable.example:
            return variable.example
        return f"[{variable.name or f'Variable {key}'}]"

    return PLACEHOLDER_PATTERN.sub(_substitute, body)
