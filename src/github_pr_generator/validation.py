"""
Input validation for values that end up in GitHub API URLs.

Repository owner and name come from the environment and are interpolated
into REST paths, so they are checked once at startup.
"""

import re
from typing import Any


class InputValidator:
    """Centralized input validation."""

    # GitHub logins: alphanumerics and single hyphens, no leading hyphen
    OWNER_PATTERN = re.compile(r'^[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?$')
    REPO_NAME_PATTERN = re.compile(r'^[a-zA-Z0-9_.-]+$')

    MAX_OWNER_LENGTH = 39
    MAX_REPO_NAME_LENGTH = 100

    @staticmethod
    def validate_owner(owner: str) -> str:
        """
        Validate a GitHub user or organization login.

        Args:
            owner: Repository owner

        Returns:
            Validated owner

        Raises:
            ValueError: If the owner is invalid
        """
        if not owner or not isinstance(owner, str):
            raise ValueError("Repository owner must be a non-empty string")

        if len(owner) > InputValidator.MAX_OWNER_LENGTH:
            raise ValueError(
                f"Repository owner too long (max {InputValidator.MAX_OWNER_LENGTH} chars)"
            )

        if not InputValidator.OWNER_PATTERN.match(owner):
            raise ValueError(
                f"Invalid repository owner: {owner}. "
                "Only alphanumeric characters and hyphens are allowed."
            )

        return owner

    @staticmethod
    def validate_repo_name(repo_name: str) -> str:
        """
        Validate a repository name (without the owner).

        Args:
            repo_name: Repository name

        Returns:
            Validated repository name

        Raises:
            ValueError: If the repository name is invalid
        """
        if not repo_name or not isinstance(repo_name, str):
            raise ValueError("Repository name must be a non-empty string")

        if len(repo_name) > InputValidator.MAX_REPO_NAME_LENGTH:
            raise ValueError(
                f"Repository name too long (max {InputValidator.MAX_REPO_NAME_LENGTH} chars)"
            )

        if repo_name in (".", ".."):
            raise ValueError(f"Path traversal detected in repository name: {repo_name}")

        if not InputValidator.REPO_NAME_PATTERN.match(repo_name):
            raise ValueError(
                f"Invalid repository name: {repo_name}. "
                "Only alphanumeric characters, hyphens, underscores, and dots are allowed."
            )

        return repo_name

    @staticmethod
    def sanitize_for_logging(data: Any) -> Any:
        """
        Sanitize data for logging to prevent leaking credentials.

        Args:
            data: Data to sanitize (dict, list, string, etc.)

        Returns:
            Sanitized data safe for logging
        """
        if isinstance(data, dict):
            sensitive_keys = {'api_key', 'token', 'password', 'secret', 'credential', 'authorization'}
            return {
                k: '***REDACTED***' if any(s in k.lower() for s in sensitive_keys) else InputValidator.sanitize_for_logging(v)
                for k, v in data.items()
            }
        elif isinstance(data, (list, tuple)):
            return [InputValidator.sanitize_for_logging(item) for item in data]
        return data


def sanitize_for_logging(data: Any) -> Any:
    """Sanitize data for logging."""
    return InputValidator.sanitize_for_logging(data)
