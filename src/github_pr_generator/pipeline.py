"""
GitHub PR Generator pipeline.

Wires the services together and runs them in sequence: fetch the repository,
read the change request, generate changes, parse them, publish the pull
request. This is the single place where fatal errors are caught.
"""

from typing import Optional
from loguru import logger

from .config import Config
from .exceptions import PRGeneratorError
from .models import PublishResult
from .services import (
    RepositoryService,
    RequirementPrompt,
    GenerationService,
    PublisherService,
    parse_model_response,
)


class PullRequestGenerator:
    """Main pipeline class with services built from one configuration."""

    def __init__(
        self,
        config: Config,
        repository_service: Optional[RepositoryService] = None,
        prompt: Optional[RequirementPrompt] = None,
        generation_service: Optional[GenerationService] = None,
        publisher_service: Optional[PublisherService] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Validated configuration
            repository_service: Optional override (tests inject mocks)
            prompt: Optional override for the requirement prompt
            generation_service: Optional override for the model service
            publisher_service: Optional override for the publisher
        """
        self.config = config
        self.repository_service = repository_service or RepositoryService(config)
        self.prompt = prompt or RequirementPrompt()
        self.generation_service = generation_service or GenerationService(config)
        self.publisher_service = publisher_service or PublisherService(
            config, self.repository_service
        )

    async def run(self) -> Optional[PublishResult]:
        """
        Run the whole pipeline once.

        Returns:
            The publishing summary, or None if the run failed
        """
        try:
            logger.info(f"Getting repo files for {self.config.repo_full_name}...")
            repo_files = await self.repository_service.fetch_repository_files()

            # Blocking read on the event loop thread
            requirement = self.prompt.read_requirement()

            generation = await self.generation_service.generate_changes(repo_files, requirement)
            changes = parse_model_response(generation.text)

            result = await self.publisher_service.publish(changes, generation.reasoning)
            logger.success(f"Pull request created: {result.pull_request_url}")
            logger.debug(f"Publish result: {result.to_dict()}")
            return result

        except PRGeneratorError as e:
            logger.error(f"Error creating PR: {e.message}")
            return None
        except Exception as e:
            logger.error(f"Error creating PR: {e}")
            logger.error(f"Error details: {type(e).__name__}: {e}")
            return None
