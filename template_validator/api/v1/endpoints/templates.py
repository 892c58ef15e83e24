import logging
from typing import Any, Dict

from fastapi import APIRouter, Query

from template_validator.core.exceptions import TemplateRejectedError
from template_validator.schemas.response import APIResponse
from template_validator.schemas.template import (
    NameCheckResponse,
    PreviewRequest,
    PreviewResponse,
    TemplateDraft,
    VariableSyncRequest,
    VariableSyncResponse,
)
from template_validator.schemas.validation import ValidationResult
from template_validator.services.template_service import template_service
from template_validator.validation.schema import (
    normalize_template_name,
    template_name_error,
)
from template_validator.validation.variables import missing_examples

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/templates/validate", response_model=APIResponse[ValidationResult])
async def validate_template(payload: TemplateDraft):
    """
    Validate a complete template draft before submission.

    **Returns:**
    - 200: Template is ready for submission
    - 422: The first rule the draft violates, scoped to the offending field
    """
    result = template_service.validate(payload)
    if not result.valid:
        raise TemplateRejectedError(result.error)

    return APIResponse(
        success=True,
        message="Template is valid",
        data=result,
    )


@router.post("/templates/variables", response_model=APIResponse[VariableSyncResponse])
async def sync_template_variables(payload: VariableSyncRequest):
    """
    Re-synchronize the variables table after a body edit.

    Names and examples of placeholders that survive the edit are preserved.
    """
    variables = template_service.sync_variables(payload.body, payload.variables)

    return APIResponse(
        success=True,
        message="Variables synchronized",
        data=VariableSyncResponse(
            keys=[variable.key for variable in variables],
            variables=variables,
            next_placeholder=template_service.next_placeholder(payload.body),
            missing_examples=missing_examples(variables),
        ),
    )


@router.post("/templates/preview", response_model=APIResponse[PreviewResponse])
async def preview_template(payload: PreviewRequest):
    """Render the body with examples (or send-time values) substituted."""
    text = template_service.render_preview(
        payload.body, payload.variables, payload.values
    )
    return APIResponse(
        success=True,
        message="Preview rendered",
        data=PreviewResponse(text=text),
    )


@router.post("/templates/content", response_model=APIResponse[Dict[str, Any]])
async def build_template_content(payload: TemplateDraft):
    """
    Build the provider's content-creation payload for a valid draft.

    **Returns:**
    - 200: The payload, ready to be sent by the submission pipeline
    - 422: The draft does not validate
    """
    content = template_service.build_content_payload(payload)
    return APIResponse(
        success=True,
        message="Content payload built",
        data=content,
    )


@router.get("/templates/name-check", response_model=APIResponse[NameCheckResponse])
async def check_template_name(name: str = Query(..., description="Name as typed")):
    """Validate a name as the user types and suggest its normalized form."""
    error = template_name_error(name)
    return APIResponse(
        success=True,
        message="Name checked",
        data=NameCheckResponse(
            name=name,
            normalized=normalize_template_name(name),
            valid=error is None,
            error=error,
        ),
    )
