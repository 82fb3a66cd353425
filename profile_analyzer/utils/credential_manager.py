"""
Credential Manager Module
Loads API credentials from the environment and an optional .env file.
"""

import os
from pathlib import Path
from typing import Dict, Iterable

import structlog
from dotenv import load_dotenv

from profile_analyzer.models.config import (
    GEMINI_API_KEY_KEY,
    GITHUB_TOKEN_KEY,
    ConfigurationError,
)

logger = structlog.get_logger(__name__)

REQUIRED_CREDENTIALS = {
    GITHUB_TOKEN_KEY: "GitHub personal access token",
    GEMINI_API_KEY_KEY: "Gemini API key",
}


class CredentialManager:
    """Reads required credentials; missing values are a configuration error."""

    def __init__(self, env_file: Path = Path(".env")):
        """
        Initialize credential manager.

        Args:
            env_file: Path to .env file; values already in the process
                environment take precedence over it
        """
        self.env_file = Path(env_file)
        logger.debug("credential_manager_initialized", env_file=str(self.env_file))
        self._load_credentials()

    def _load_credentials(self) -> None:
        """Load existing credentials from .env file."""
        if self.env_file.exists():
            load_dotenv(self.env_file, override=False)
            logger.info("credentials_loaded_from_env", env_file=str(self.env_file))
        else:
            logger.debug("no_env_file_found", env_file=str(self.env_file))

    def get_credential(self, key: str, description: str = "") -> str:
        """
        Get a required credential from the environment.

        Args:
            key: Environment variable name (e.g., "GITHUB_TOKEN")
            description: Human-readable name used in the error message

        Returns:
            Credential value with surrounding whitespace removed

        Raises:
            ConfigurationError: If the credential is unset or blank
        """
        value = (os.getenv(key) or "").strip()
        if value:
            logger.debug(
                "credential_found_in_env",
                key=key,
                masked_value=self.mask_credential(value),
            )
            return value

        logger.debug("required_credential_not_provided", key=key)
        label = f"{description} ({key})" if description else key
        raise ConfigurationError(
            f"Missing {label}. Set {key} in your environment or in {self.env_file}"
        )

    def check_required_credentials(
        self, keys: Iterable[str] = tuple(REQUIRED_CREDENTIALS)
    ) -> Dict[str, str]:
        """
        Check that every required credential is present.

        Args:
            keys: Environment variable names to check

        Returns:
            Dictionary of credential values keyed by variable name

        Raises:
            ConfigurationError: Listing every missing credential
        """
        credentials: Dict[str, str] = {}
        missing = []
        for key in keys:
            try:
                credentials[key] = self.get_credential(
                    key, REQUIRED_CREDENTIALS.get(key, "")
                )
            except ConfigurationError:
                missing.append(key)

        if missing:
            raise ConfigurationError(
                f"Please set {' and '.join(missing)} in your environment or .env file"
            )

        logger.info("all_credentials_present", credential_count=len(credentials))
        return credentials

    @staticmethod
    def mask_credential(value: str, show_chars: int = 3) -> str:
        """
        Mask credential for display in logs.

        Args:
            value: Credential value to mask
            show_chars: Number of characters to show at start

        Returns:
            Masked credential (e.g., "abc***")
        """
        if not value or len(value) <= show_chars:
            return "***"
        return f"{value[:show_chars]}{'*' * (len(value) - show_chars)}"
