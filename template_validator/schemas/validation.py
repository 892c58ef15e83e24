from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RejectionKind(str, Enum):
    """The closed set of reasons a template draft can be rejected."""

    INVALID_NAME = "InvalidName"
    INVALID_ENUM_VALUE = "InvalidEnumValue"
    BODY_EMPTY = "BodyEmpty"
    BODY_LENGTH_EXCEEDED = "BodyLengthExceeded"
    NON_SEQUENTIAL_VARIABLES = "NonSequentialVariables"
    ADJACENT_VARIABLES = "AdjacentVariables"
    FIELD_LENGTH_EXCEEDED = "FieldLengthExceeded"
    STRUCTURAL_CARDINALITY_EXCEEDED = "StructuralCardinalityExceeded"
    INVALID_MEDIA_URL = "InvalidMediaUrl"


class ValidationRejection(BaseModel):
    """A single field-scoped validation failure."""

    kind: RejectionKind
    field: str = Field(..., description="Offending field, e.g. 'body' or 'buttons[2].title'")
    message: str = Field(..., description="Human-readable message for the editor")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "kind": "NonSequentialVariables",
                "field": "body",
                "message": "Variables must be sequential: {{1}}, {{2}}, etc.",
            }
        },
    )


class ValidationResult(BaseModel):
    """
    Outcome of a validation pass: either accepted, or rejected with the first
    failure found.
    """

    valid: bool
    error: Optional[ValidationRejection] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def reject(
        cls, kind: RejectionKind, field: str, message: str
    ) -> "ValidationResult":
        return cls(
            valid=False,
            error=ValidationRejection(kind=kind, field=field, message=message),
        )

    def __bool__(self) -> bool:
        return self.valid
