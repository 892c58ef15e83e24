from pydantic import BaseModel, ConfigDict
from typing import TypeVar, Generic

# Define a TypeVar for the generic data payload
DataT = TypeVar("DataT")


class APIResponse(BaseModel, Generic[DataT]):
    """
    Standardized API response structure.
    This wrapper ensures consistency across all successful responses.
    """

    success: bool = True
    message: str
    data: DataT

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Template is valid",
                "data": {"valid": True, "error": None},
            }
        }
    )
