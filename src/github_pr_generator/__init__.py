"""
GitHub PR Generator

Reads a whole GitHub repository, asks a language model to implement a
free-text change request against it, and publishes the resulting file edits
as a new branch and pull request, with the model's reasoning posted as a
review comment.
"""

__version__ = "1.0.0"

from .config import Config
from .models import (
    RepoFile,
    SubtreeResult,
    GeneratedEdit,
    PullRequestMetadata,
    GeneratedChanges,
    GenerationResult,
    PublishResult,
)
from .exceptions import (
    PRGeneratorError,
    ConfigurationError,
    RepositoryError,
    RequirementError,
    GenerationError,
    ResponseParseError,
    PublishError,
)
from .pipeline import PullRequestGenerator

__all__ = [
    # Core
    "PullRequestGenerator",
    "Config",
    # Models
    "RepoFile",
    "SubtreeResult",
    "GeneratedEdit",
    "PullRequestMetadata",
    "GeneratedChanges",
    "GenerationResult",
    "PublishResult",
    # Exceptions
    "PRGeneratorError",
    "ConfigurationError",
    "RepositoryError",
    "RequirementError",
    "GenerationError",
    "ResponseParseError",
    "PublishError",
]
