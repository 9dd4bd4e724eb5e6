"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here — no scattered magic strings.
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiKeyGrant(BaseModel):
    """Identity and permissions attached to one API key.

    Attributes:
        name: Display name of the caller holding the key.
        permissions: Permission patterns such as ``shops.viewAny``,
            ``shops.*`` or ``*``.
    """

    name: str
    permissions: list[str] = Field(default_factory=list)


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API and the HTML page title.
        version: Current application version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        database_url: SQLAlchemy URL of the shop database.
        shops_per_page: Page size used when listing shops.
        asset_version: Front-end asset version sent with every page object.
        frontend_entry: Script URL loaded by the HTML page shell.
        rate_limit_enabled: Turn request rate limiting on or off.
        rate_limit_default: Default rate limit for all endpoints.
        api_keys: Mapping of API key to the caller it authenticates.
            Set as JSON, e.g. ``{"s3cret": {"name": "admin", "permissions": ["*"]}}``.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Shopdesk"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite:///./shopdesk.db"
    shops_per_page: int = 15

    asset_version: str = "1"
    frontend_entry: str = "/build/app.js"

    rate_limit_enabled: bool = True
    rate_limit_default: str = "120/minute"

    api_keys: dict[str, ApiKeyGrant] = Field(default_factory=dict)


settings = Settings()
