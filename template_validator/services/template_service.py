import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from template_validator.core.config import settings
from template_validator.core.exceptions import TemplateRejectedError
from template_validator.schemas.template import (
    ActionType,
    TemplateDraft,
    TemplateType,
    TemplateVariable,
)
from template_validator.schemas.validation import ValidationResult
from template_validator.validation.schema import validate_template
from template_validator.validation.variables import (
    extract_variables,
    missing_examples,
    next_placeholder,
    render_preview,
    sync_variables,
)

logger = logging.getLogger(__name__)

# Content API button types for each call-to-action kind, and the key that
# carries the action's value
_CTA_CONTENT_TYPES = {
    ActionType.URL.value: ("URL", "url"),
    ActionType.PHONE.value: ("PHONE_NUMBER", "phone"),
    ActionType.COPY_CODE.value: ("COPY_CODE", "code"),
}


class TemplateService:
    """
    Entry point for the authoring UI and the submission pipeline.
    Wraps the pure validators and builds the provider payload for accepted
    drafts.
    """

    def __init__(self, list_picker_button_text: Optional[str] = None):
        self.list_picker_button_text = (
            list_picker_button_text or settings.LIST_PICKER_BUTTON_TEXT
        )

    def validate(
        self, draft: Union[TemplateDraft, Mapping[str, Any]]
    ) -> ValidationResult:
        """Run the full-record check and log the outcome."""
        if not isinstance(draft, TemplateDraft):
            draft = TemplateDraft.model_validate(draft)

        result = validate_template(draft)
        if result.valid:
            logger.debug(f"Template '{draft.name}' accepted")
        else:
            logger.info(
                f"Template '{draft.name}' rejected: {result.error.message}",
                extra={
                    "template_name": draft.name,
                    "rejection_kind": result.error.kind.value,
                    "field": result.error.field,
                },
            )
        return result

    def sync_variables(
        self, body: str, variables: List[TemplateVariable]
    ) -> List[TemplateVariable]:
        return sync_variables(body, variables)

    def extract_variables(self, body: str) -> List[str]:
        return extract_variables(body)

    def next_placeholder(self, body: str) -> str:
        return next_placeholder(body)

    def render_preview(
        self,
        body: str,
        variables: List[TemplateVariable],
        values: Optional[Dict[str, str]] = None,
    ) -> str:
        return render_preview(body, variables, values)

    def submission_readiness(self, draft: TemplateDraft) -> Dict[str, Any]:
        """
        Validation result plus the variables still missing an example.
        The provider rejects templates whose variables have no sample value.
        """
        variables = sync_variables(draft.body, draft.variables)
        return {
            "result": self.validate(draft),
            "missing_examples": missing_examples(variables),
        }

    def build_content_payload(self, draft: TemplateDraft) -> Dict[str, Any]:
        """
        Build the Content API creation body for an accepted draft.

        The variables table is re-synchronized against the body first, so a
        stale table never leaks into the payload.

        Raises:
            TemplateRejectedError: If the draft does not validate.
        """
        result = self.validate(draft)
        if not result.valid:
            raise TemplateRejectedError(result.error)

        template_type = TemplateType(draft.template_type)
        content: Dict[str, Any] = {"body": draft.body}

        if template_type is TemplateType.QUICK_REPLY:
            content["actions"] = [
                {"id": button.id, "title": button.title} for button in draft.buttons
            ]
        elif template_type is TemplateType.CALL_TO_ACTION:
            actions = []
            for action in draft.actions:
                content_type, value_key = _CTA_CONTENT_TYPES[action.type]
                entry = {"type": content_type, "title": action.title}
                if action.value:
                    entry[value_key] = action.value
                actions.append(entry)
            content["actions"] = actions
        elif template_type is TemplateType.LIST_PICKER:
            items = []
            for item in draft.list_items:
                entry = {"id": item.id, "item": item.title}
                if item.description:
                    entry["description"] = item.description
                items.append(entry)
            content["button"] = self.list_picker_button_text
            content["items"] = items
        elif template_type is TemplateType.MEDIA:
            content["media"] = [draft.media_url]

        payload: Dict[str, Any] = {
            "friendly_name": draft.name,
            "language": draft.language,
            "types": {f"twilio/{template_type.value}": content},
        }

        variables = sync_variables(draft.body, draft.variables)
        if variables:
            payload["variables"] = {v.key: v.example for v in variables}

        logger.info(
            f"Built content payload for template '{draft.name}'",
            extra={"template_type": template_type.value},
        )
        return payload


# Instantiate service for use in handlers
template_service = TemplateService()
