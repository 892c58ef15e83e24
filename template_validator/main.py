import logging

from fastapi import FastAPI

# Local Imports
from template_validator.api.v1.router import api_router
from template_validator.core.config import settings
from template_validator.core.exceptions import register_exception_handlers

# --- 1. App Initialization ---

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

# Set up logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)

# --- 2. Routes and Error Handlers ---

app.include_router(api_router, prefix="/api/v1")
register_exception_handlers(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "template_validator.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
