import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from template_validator.core.config import settings
from template_validator.schemas.validation import ValidationRejection

logger = logging.getLogger(__name__)


class UnknownTemplateTypeError(ValueError):
    """
    Raised when a validator is invoked with a template type outside the closed
    enumeration. This is a caller bug, not a user-facing rejection.
    """

    def __init__(self, template_type):
        self.template_type = template_type
        super().__init__(f"Unknown template type: {template_type!r}")


class TemplateRejectedError(Exception):
    """Raised where an accepted template is required but validation rejected it."""

    def __init__(self, rejection: ValidationRejection):
        self.rejection = rejection
        super().__init__(f"{rejection.field}: {rejection.message}")


def register_exception_handlers(app):
    """Register all exception handlers."""

    @app.exception_handler(ValidationError)
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc):
        """Handle validation errors."""
        logger.warning(f"Validation error on {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "success": False,
                "message": "Validation error",
                "errors": exc.errors() if hasattr(exc, "errors") else str(exc),
            },
        )

    @app.exception_handler(TemplateRejectedError)
    async def template_rejected_handler(request: Request, exc: TemplateRejectedError):
        """Render a template rejection next to the offending field."""
        logger.info(
            f"Template rejected on {request.url.path}: {exc.rejection.kind.value}"
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "success": False,
                "message": exc.rejection.message,
                "errors": [exc.rejection.model_dump(mode="json")],
            },
        )

    @app.exception_handler(UnknownTemplateTypeError)
    async def unknown_template_type_handler(
        request: Request, exc: UnknownTemplateTypeError
    ):
        logger.error(f"Unknown template type on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "message": str(exc),
                "path": str(request.url.path),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all uncaught exceptions."""
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": str(exc) if settings.DEBUG else "Internal server error",
                "path": str(request.url.path),
            },
        )
