from fastapi import APIRouter
from template_validator.api.v1.endpoints import health, templates


# This is the main router for API version v1 (e.g., /api/v1/...)
api_router = APIRouter()

# Include the template endpoints
api_router.include_router(
    templates.router,
    prefix="",  # The endpoints already start with /templates in their definition
    tags=["templates"],
)

# Include health endpoints (no prefix, so /api/v1/health works)
api_router.include_router(health.router, tags=["Health"])
