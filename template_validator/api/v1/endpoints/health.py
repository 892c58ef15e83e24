from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from template_validator.core.config import settings
from template_validator.schemas.template import TemplateType
from template_validator.validation.schema import validate_template
from datetime import datetime
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

# A draft that must always validate; used to prove the validator is loaded
_SELF_CHECK_DRAFT = {
    "name": "health_check",
    "template_type": TemplateType.TEXT.value,
    "body": "Hello {{1}}, this is a health check.",
}


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """
    Health check endpoint for monitoring and load balancers.
    Runs the validator against a known-good draft.

    Returns:
        - 200: Validator healthy
        - 503: Validator rejected the known-good draft
    """
    health_data = {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "checks": {"validator": {"status": "unknown", "message": ""}},
    }

    result = validate_template(_SELF_CHECK_DRAFT)
    if result.valid:
        health_data["checks"]["validator"] = {
            "status": "healthy",
            "message": "Self-check draft accepted",
        }
        logger.debug("Validator health check passed")
        return JSONResponse(status_code=status.HTTP_200_OK, content=health_data)

    health_data["status"] = "degraded"
    health_data["checks"]["validator"] = {
        "status": "unhealthy",
        "message": f"Self-check draft rejected: {result.error.message}",
    }
    logger.error(f"Validator health check failed: {result.error.message}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_data
    )


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check():
    """
    Liveness probe endpoint.
    Returns 200 if the service is alive.
    """
    return {
        "alive": True,
        "timestamp": datetime.utcnow().isoformat(),
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
    }
