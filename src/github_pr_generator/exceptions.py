"""
Custom exceptions for the GitHub PR Generator.

Provides specific exception types for each pipeline stage with detailed
error information for debugging. Every exception logs itself when raised.
"""

from typing import Optional, Dict, Any
from loguru import logger


class PRGeneratorError(Exception):
    """Base exception for all GitHub PR Generator errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause
        logger.error(f"{self.__class__.__name__}: {message}")
        if details:
            logger.error(f"Error details: {details}")
        if cause:
            logger.error(f"Caused by: {cause}")


class ConfigurationError(PRGeneratorError):
    """Raised when there are configuration issues."""

    def __init__(self, message: str, missing_vars: Optional[list] = None, **kwargs):
        details = kwargs.pop("details", {})
        if missing_vars:
            details["missing_environment_variables"] = missing_vars
        cause = kwargs.pop("cause", None)
        super().__init__(message, details=details, cause=cause)


class RepositoryError(PRGeneratorError):
    """Raised when the repository cannot be accessed or read."""

    def __init__(
        self,
        message: str,
        repository: Optional[str] = None,
        github_error: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if repository:
            details["repository"] = repository
        if github_error:
            details["github_error"] = github_error
        cause = kwargs.pop("cause", None)
        super().__init__(message, details=details, cause=cause)


class RequirementError(PRGeneratorError):
    """Raised when the change request cannot be read from the terminal."""


class GenerationError(PRGeneratorError):
    """Raised when the language model call fails."""

    def __init__(
        self,
        message: str,
        model: Optional[str] = None,
        requirement: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if model:
            details["model"] = model
        if requirement:
            details["requirement"] = requirement[:200] + "..." if len(requirement) > 200 else requirement
        cause = kwargs.pop("cause", None)
        super().__init__(message, details=details, cause=cause)


class ResponseParseError(PRGeneratorError):
    """Raised when the model response does not contain a valid payload."""

    def __init__(self, message: str, parse_stage: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if parse_stage:
            details["parse_stage"] = parse_stage
        cause = kwargs.pop("cause", None)
        super().__init__(message, details=details, cause=cause)


class PublishError(PRGeneratorError):
    """Raised when creating the branch, files, pull request or comment fails."""

    def __init__(
        self,
        message: str,
        repository: Optional[str] = None,
        branch: Optional[str] = None,
        publish_stage: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if repository:
            details["repository"] = repository
        if branch:
            details["branch"] = branch
        if publish_stage:
            details["publish_stage"] = publish_stage
        cause = kwargs.pop("cause", None)
        super().__init__(message, details=details, cause=cause)
