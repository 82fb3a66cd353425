"""
Configuration Models

Pydantic model for the analyzer's runtime configuration. Credentials are
sourced by CredentialManager and passed in explicitly; nothing else in the
package reads the environment.
"""

import os
from typing import Dict, Optional, Protocol

from pydantic import BaseModel, Field, field_validator

GITHUB_TOKEN_KEY = "GITHUB_TOKEN"
GEMINI_API_KEY_KEY = "GEMINI_API_KEY"
GEMINI_MODEL_KEY = "GEMINI_MODEL"
LOG_LEVEL_KEY = "LOG_LEVEL"
LOG_FILE_KEY = "LOG_FILE"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


class CredentialSource(Protocol):
    def check_required_credentials(self) -> Dict[str, str]: ...


class AnalyzerConfig(BaseModel):
    """Runtime configuration for one analysis run."""

    github_token: str = Field(..., min_length=1, repr=False)
    gemini_api_key: str = Field(..., min_length=1, repr=False)
    github_api_url: str = Field(default="https://api.github.com")
    gemini_api_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta"
    )
    model: str = Field(default="gemini-pro", min_length=1)
    request_timeout: float = Field(
        default=10.0, gt=0, description="Timeout in seconds for each GitHub call"
    )
    repos_per_page: int = Field(default=15, gt=0, le=100)
    log_level: str = Field(default="WARNING")
    log_file: Optional[str] = None

    @field_validator("github_api_url", "gemini_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @classmethod
    def from_env(
        cls, credentials: CredentialSource, model: Optional[str] = None
    ) -> "AnalyzerConfig":
        """Build configuration from required credentials and optional env settings.

        Args:
            credentials: Source of the required credentials
            model: Override for the Gemini model identifier

        Returns:
            AnalyzerConfig: Validated configuration

        Raises:
            ConfigurationError: If a credential is missing or a setting is invalid
        """
        found = credentials.check_required_credentials()

        settings: Dict[str, str] = {}
        model = model or os.getenv(GEMINI_MODEL_KEY)
        if model:
            settings["model"] = model
        log_level = os.getenv(LOG_LEVEL_KEY)
        if log_level:
            settings["log_level"] = log_level
        log_file = os.getenv(LOG_FILE_KEY)
        if log_file:
            settings["log_file"] = log_file

        try:
            return cls(
                github_token=found[GITHUB_TOKEN_KEY],
                gemini_api_key=found[GEMINI_API_KEY_KEY],
                **settings,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
