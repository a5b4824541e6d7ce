"""
Publisher service for the GitHub PR Generator.

Turns parsed model output into remote state: a feature branch cut from the
default branch head, one commit per edited file, a pull request, and a
review comment carrying the model's reasoning.

Nothing here is rolled back: a failure part-way leaves the branch and any
files already written in place.
"""

import asyncio
import re
import time
from loguru import logger
from typing import Callable, List, Optional

from github import GithubException, UnknownObjectException
from github.PullRequest import PullRequest
from github.Repository import Repository

from ..config import Config
from ..constants import BRANCH, COMMIT_MESSAGE_TEMPLATE, REVIEW_COMMENT_TEMPLATE
from ..exceptions import PublishError
from ..models import GeneratedChanges, GeneratedEdit, PublishResult
from .repository_service import RepositoryService

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Lower-case a title and collapse each run of non-alphanumerics into one hyphen."""
    return _NON_ALNUM_RUN.sub(BRANCH.SEPARATOR, title.lower())


def derive_branch_name(title: str, timestamp_ms: int, prefix: str = BRANCH.DEFAULT_PREFIX) -> str:
    """Branch name for a pull request title, made unique by a millisecond timestamp."""
    return f"{prefix}{slugify(title)}{BRANCH.SEPARATOR}{timestamp_ms}"


def build_review_comment(reasoning: str, modified_paths: List[str]) -> str:
    """Markdown comment with the reasoning trace and the list of modified files."""
    return REVIEW_COMMENT_TEMPLATE.format(
        reasoning=reasoning,
        modified_files="\n".join(f"- {path}" for path in modified_paths),
    )


class PublisherService:
    """Service that publishes generated changes as a pull request."""

    def __init__(
        self,
        config: Config,
        repository_service: RepositoryService,
        clock: Optional[Callable[[], float]] = None
    ):
        """
        Initialize publisher service.

        Args:
            config: Configuration instance
            repository_service: Provides the target repository object
            clock: Seconds since the epoch; used for branch name timestamps
        """
        self.config = config
        self.repository_service = repository_service
        self.clock = clock or time.time

    async def publish(self, changes: GeneratedChanges, reasoning: str) -> PublishResult:
        """
        Create a branch, write every edit to it, open a pull request and comment on it.

        Args:
            changes: Parsed pull request metadata and ordered file edits
            reasoning: Model reasoning trace for the review comment

        Returns:
            Summary of the created branch and pull request

        Raises:
            PublishError: If any step fails; later steps are not attempted
        """
        repo = await self.repository_service.get_repository()
        title = changes.pull_request.title

        default_branch = await self._run_step("default_branch", None, lambda: repo.default_branch)
        branch_name = derive_branch_name(
            title, int(self.clock() * 1000), prefix=self.config.branch_prefix
        )
        logger.info(f"Creating branch {branch_name} from {default_branch}")

        await self._run_step(
            "create_branch", branch_name,
            lambda: self._create_branch_sync(repo, default_branch, branch_name)
        )

        for edit in changes.edits:
            await self._run_step(
                "write_file", branch_name,
                lambda edit=edit: self._write_file_sync(repo, edit, branch_name)
            )

        pull = await self._run_step(
            "create_pull_request", branch_name,
            lambda: repo.create_pull(
                title=title,
                body=changes.pull_request.body,
                head=branch_name,
                base=default_branch,
            )
        )
        logger.info(f"Opened pull request #{pull.number}")

        await self._run_step(
            "comment", branch_name,
            lambda: self._comment_sync(pull, reasoning, changes.modified_paths)
        )

        return PublishResult(
            branch_name=branch_name,
            base_branch=default_branch,
            pull_request_number=pull.number,
            pull_request_url=pull.html_url,
            files_written=changes.modified_paths,
        )

    async def _run_step(self, stage: str, branch: Optional[str], action: Callable):
        """Run one blocking GitHub call in a worker thread, wrapping failures."""
        try:
            return await asyncio.to_thread(action)
        except GithubException as e:
            message = e.data.get("message", str(e)) if isinstance(e.data, dict) else str(e)
            raise PublishError(
                f"GitHub API error during {stage}: HTTP {e.status}: {message}",
                repository=self.config.repo_full_name,
                branch=branch,
                publish_stage=stage,
                cause=e
            )
        except Exception as e:
            raise PublishError(
                f"Failed during {stage}: {str(e)}",
                repository=self.config.repo_full_name,
                branch=branch,
                publish_stage=stage,
                cause=e
            )

    def _create_branch_sync(self, repo: Repository, base_branch: str, branch_name: str) -> None:
        """Point a new branch at the current head of the base branch."""
        base_ref = repo.get_git_ref(f"heads/{base_branch}")
        repo.create_git_ref(ref=f"refs/heads/{branch_name}", sha=base_ref.object.sha)

    def _write_file_sync(self, repo: Repository, edit: GeneratedEdit, branch_name: str) -> None:
        """Create or overwrite one file on the branch as its own commit."""
        message = COMMIT_MESSAGE_TEMPLATE.format(path=edit.path)
        try:
            existing = repo.get_contents(edit.path, ref=branch_name)
        except UnknownObjectException:
            existing = None

        # PyGithub base64-encodes the content for transport
        if existing is None or isinstance(existing, list):
            repo.create_file(edit.path, message, edit.content, branch=branch_name)
            logger.info(f"Created {edit.path}")
        else:
            repo.update_file(edit.path, message, edit.content, existing.sha, branch=branch_name)
            logger.info(f"Updated {edit.path}")

    def _comment_sync(self, pull: PullRequest, reasoning: str, modified_paths: List[str]) -> None:
        pull.create_issue_comment(build_review_comment(reasoning, modified_paths))
