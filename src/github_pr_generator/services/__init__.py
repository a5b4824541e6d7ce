"""
Service layer for the GitHub PR Generator.

One service per pipeline stage: reading the repository, prompting for the
change request, generating changes, parsing the reply, and publishing.
"""

from .repository_service import RepositoryService
from .prompt_service import RequirementPrompt
from .generation_service import GenerationService
from .response_parser import parse_model_response
from .publisher_service import PublisherService

__all__ = [
    "RepositoryService",
    "RequirementPrompt",
    "GenerationService",
    "parse_model_response",
    "PublisherService",
]
