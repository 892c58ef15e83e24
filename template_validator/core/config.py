from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


# Define the acceptable environments for type checking
Environment = Literal["development", "staging", "production"]


class Settings(BaseSettings):
    """
    Application-wide settings.
    Settings are loaded from environment variables (case-insensitive)
    or from a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", case_sensitive=False
    )

    # CORE APPLICATION SETTINGS ---
    PROJECT_NAME: str = "WhatsApp Template Validator"
    ENVIRONMENT: Environment = "development"
    DEBUG: bool = True
    VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # TEMPLATE DEFAULTS ---
    # Label of the button that opens a list-picker menu on the handset
    LIST_PICKER_BUTTON_TEXT: str = "Options"


settings = Settings()
