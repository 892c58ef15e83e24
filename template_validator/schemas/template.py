from typing import Optional, Dict, List
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TemplateLanguage(str, Enum):
    """Locale tags a template may be authored in."""

    PT_BR = "pt_BR"
    PT_BR_HYPHEN = "pt-BR"
    EN = "en"
    ES = "es"


class TemplateCategory(str, Enum):
    """Approval category. Opaque here, it only drives the provider's review policy."""

    UTILITY = "UTILITY"
    MARKETING = "MARKETING"
    AUTHENTICATION = "AUTHENTICATION"


class TemplateType(str, Enum):
    """Structural shape of a template; selects which payload fields apply."""

    TEXT = "text"
    QUICK_REPLY = "quick-reply"
    LIST_PICKER = "list-picker"
    CALL_TO_ACTION = "call-to-action"
    MEDIA = "media"


class ActionType(str, Enum):
    """Kinds of call-to-action buttons."""

    URL = "url"
    PHONE = "phone"
    COPY_CODE = "copy_code"


class TemplateVariable(BaseModel):
    """One row of the variables table, keyed by the placeholder number."""

    key: str = Field(..., description="Literal digit span of the placeholder, e.g. '1'")
    name: str = Field("", description="Friendly name shown to the editor")
    example: str = Field(
        "", description="Sample value; required by the provider for approval"
    )


class QuickReplyButton(BaseModel):
    id: str
    title: str


class CallToAction(BaseModel):
    # Kept as a plain string so an unknown type is reported as a rejection
    type: str
    title: str
    value: Optional[str] = None


class ListItem(BaseModel):
    id: str
    title: str
    description: Optional[str] = None


class TemplateDraft(BaseModel):
    """
    The caller-held template record, as edited in the authoring UI.

    Enumerated fields are carried as strings: drafts often arrive from an
    untyped boundary (JSON), and an out-of-set value must surface as a
    validation rejection rather than a construction error.
    """

    name: str = Field(..., description="Template identifier (lowercase, digits, underscores)")
    language: str = Field(TemplateLanguage.PT_BR.value, description="Locale tag")
    category: str = Field(TemplateCategory.UTILITY.value, description="Approval category")
    template_type: str = Field(TemplateType.TEXT.value, description="Structural shape")
    body: str = Field(..., description="Message text with {{n}} placeholders")
    header: Optional[str] = None
    footer: Optional[str] = None
    variables: List[TemplateVariable] = Field(default_factory=list)
    buttons: List[QuickReplyButton] = Field(default_factory=list)
    actions: List[CallToAction] = Field(default_factory=list)
    list_items: List[ListItem] = Field(default_factory=list)
    media_url: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "booking_confirmation",
                "language": "pt_BR",
                "category": "UTILITY",
                "template_type": "quick-reply",
                "body": "Olá {{1}}, sua reserva foi confirmada para {{2}}.",
                "footer": "Responda para confirmar",
                "variables": [
                    {"key": "1", "name": "customer", "example": "Maria"},
                    {"key": "2", "name": "date", "example": "12/05"},
                ],
                "buttons": [
                    {"id": "btn_yes", "title": "Confirmar"},
                    {"id": "btn_no", "title": "Cancelar"},
                ],
            }
        }
    )


class VariableSyncRequest(BaseModel):
    """Body text after an edit, plus the variables table from before it."""

    body: str
    variables: List[TemplateVariable] = Field(default_factory=list)


class VariableSyncResponse(BaseModel):
    keys: List[str]
    variables: List[TemplateVariable]
    next_placeholder: str
    missing_examples: List[str]


class PreviewRequest(BaseModel):
    body: str
    variables: List[TemplateVariable] = Field(default_factory=list)
    values: Optional[Dict[str, str]] = Field(
        None, description="Send-time values keyed by placeholder number"
    )


class PreviewResponse(BaseModel):
    text: str


class NameCheckResponse(BaseModel):
    name: str
    normalized: str
    valid: bool
    error: Optional[str] = None
