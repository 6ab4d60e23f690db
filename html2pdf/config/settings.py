"""
Application Settings
===================

Main application settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.

Most values are read from ``HTML2PDF_``-prefixed environment variables. The
listen port and environment name also honour the conventional un-prefixed
``PORT`` and ``ENVIRONMENT``/``NODE_ENV`` variables set by hosting platforms.
"""

from typing import Annotated, Optional, List, Union
import json

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

ENVIRONMENT_ALIASES = {
    "dev": "development",
    "test": "testing",
    "prod": "production",
}


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="HTML to PDF Conversion Service", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development",
        description="Environment: development, testing, production or a custom name",
        validation_alias=AliasChoices("html2pdf_environment", "environment", "node_env"),
    )
    expose_error_details: Optional[bool] = Field(
        default=None,
        description="Include internal error messages in responses (defaults to development only)",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(
        default=3000,
        ge=0,
        le=65535,
        description="Server port",
        validation_alias=AliasChoices("html2pdf_port", "port"),
    )
    max_body_size: int = Field(
        default=10 * 1024 * 1024, gt=0, description="Maximum request body size in bytes"
    )

    # Browser Configuration
    playwright_headless: bool = Field(default=True, description="Run browser in headless mode")
    load_timeout: int = Field(
        default=30000, gt=0, description="Page content load timeout in milliseconds"
    )
    launch_timeout: int = Field(
        default=30000, gt=0, description="Browser launch timeout in milliseconds"
    )
    export_timeout: float = Field(default=60.0, gt=0, description="PDF export timeout in seconds")
    max_concurrent_renders: int = Field(
        default=0, ge=0, description="Maximum in-flight renders, 0 for unlimited"
    )

    # API Documentation Configuration
    enable_docs: bool = Field(default=False, description="Enable FastAPI docs endpoints")

    # Security Configuration
    allowed_origins: Annotated[List[str], NoDecode] = Field(
        default=["*"], description="Allowed origins for CORS"
    )

    # Monitoring Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Normalize the environment name.

        Short names common in ``NODE_ENV`` map to their full form. Other names
        such as ``staging`` are kept as given and behave like production except
        for the log renderer.
        """
        v = v.strip().lower()
        if not v:
            raise ValueError("Environment must not be empty")
        return ENVIRONMENT_ALIASES.get(v, v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string: ["*"] or ["https://a", "https://b"]
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Handle comma-separated string: "*" or "https://a,https://b"
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @model_validator(mode="after")
    def default_error_exposure(self) -> "Settings":
        """Expose error details only in development unless set explicitly."""
        if self.expose_error_details is None:
            self.expose_error_details = self.environment == "development"
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="HTML2PDF_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
