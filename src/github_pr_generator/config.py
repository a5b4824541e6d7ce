"""
Configuration management for the GitHub PR Generator.

Reads environment variables (optionally from a dotenv file), validates them
once at startup, and exposes them to every service as a single object.
"""

import os
from typing import Optional, Dict, Any
from pathlib import Path
from dotenv import load_dotenv
from loguru import logger

from .constants import BRANCH, LLM
from .exceptions import ConfigurationError
from .validation import InputValidator, sanitize_for_logging

DEFAULT_ENV_FILE = ".env.local"


class Config:
    """Configuration for one PR generation run."""

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration with environment variables.

        Args:
            env_file: Optional path to .env file. Falls back to .env.local in
                the working directory, then to the default .env lookup.
        """
        if env_file and Path(env_file).exists():
            load_dotenv(env_file)
        elif Path(DEFAULT_ENV_FILE).exists():
            load_dotenv(DEFAULT_ENV_FILE)
        else:
            load_dotenv()

        self._required_vars = {
            "GITHUB_OWNER": "Owner (user or organization) of the target repository",
            "GITHUB_REPO": "Name of the target repository",
            "GOOGLE_API_KEY": "Google API key for the Gemini chat model",
        }

        self._optional_vars = {
            "GITHUB_TOKEN": None,
            "LLM_MODEL": LLM.DEFAULT_MODEL,
            "LLM_TEMPERATURE": str(LLM.DEFAULT_TEMPERATURE),
            "BRANCH_PREFIX": BRANCH.DEFAULT_PREFIX,
            "LOG_LEVEL": "INFO",
        }

        self._validate_and_load()

    def _validate_and_load(self) -> None:
        """Validate required variables and load all configuration."""
        missing_vars = []

        for var_name, description in self._required_vars.items():
            value = os.getenv(var_name)
            if not value:
                missing_vars.append(f"{var_name} ({description})")

        if missing_vars:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join([var.split(' (')[0] for var in missing_vars])}",
                missing_vars=missing_vars,
                details={
                    "suggestion": "Set these variables in .env.local, .env or the system environment"
                }
            )

        self._load_values()
        logger.info("Configuration loaded and validated successfully")
        logger.debug(f"Configuration: {sanitize_for_logging(self.to_dict())}")

    def _load_values(self) -> None:
        """Load all configuration values from environment."""
        try:
            self.github_owner = InputValidator.validate_owner(os.getenv("GITHUB_OWNER"))
            self.github_repo = InputValidator.validate_repo_name(os.getenv("GITHUB_REPO"))
        except ValueError as e:
            raise ConfigurationError(str(e), cause=e)

        self.google_api_key = os.getenv("GOOGLE_API_KEY")

        # Unauthenticated access works for public repositories at a lower rate limit
        self.github_token = os.getenv("GITHUB_TOKEN") or None

        self.llm_model = os.getenv("LLM_MODEL", LLM.DEFAULT_MODEL)
        try:
            self.llm_temperature = float(os.getenv("LLM_TEMPERATURE", str(LLM.DEFAULT_TEMPERATURE)))
        except ValueError as e:
            raise ConfigurationError(
                f"LLM_TEMPERATURE must be a number, got {os.getenv('LLM_TEMPERATURE')!r}",
                cause=e
            )

        self.branch_prefix = os.getenv("BRANCH_PREFIX", BRANCH.DEFAULT_PREFIX)
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def repo_full_name(self) -> str:
        """Repository name in 'owner/repo' format."""
        return f"{self.github_owner}/{self.github_repo}"

    def to_dict(self) -> Dict[str, Any]:
        """Configuration values, including credentials; sanitize before logging."""
        return {
            "github_owner": self.github_owner,
            "github_repo": self.github_repo,
            "github_token": self.github_token,
            "google_api_key": self.google_api_key,
            "llm_model": self.llm_model,
            "llm_temperature": self.llm_temperature,
            "branch_prefix": self.branch_prefix,
            "log_level": self.log_level,
        }

    def __repr__(self) -> str:
        """String representation of configuration (without sensitive data)."""
        return (
            f"Config("
            f"repo={self.repo_full_name}, "
            f"authenticated={self.github_token is not None}, "
            f"model={self.llm_model}"
            f")"
        )
