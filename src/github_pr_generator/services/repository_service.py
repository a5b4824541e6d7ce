"""
Repository service for the GitHub PR Generator.

Reads the target repository through the GitHub REST API: repository
metadata and a best-effort recursive download of every file.
"""

import asyncio
import base64
from loguru import logger
from typing import List, Optional

from github import Auth, Github, GithubException
from github.Repository import Repository

from ..config import Config
from ..exceptions import RepositoryError
from ..models import RepoFile, SubtreeResult


class RepositoryService:
    """Service for reading the target GitHub repository."""

    def __init__(self, config: Config, github_client: Optional[Github] = None):
        """
        Initialize repository service.

        Args:
            config: Configuration instance
            github_client: Optional pre-built client (tests inject a mock)
        """
        self.config = config
        self._github_client = github_client
        self._repository: Optional[Repository] = None

    @property
    def github_client(self) -> Github:
        """Get or create GitHub client."""
        if self._github_client is None:
            if self.config.github_token:
                self._github_client = Github(auth=Auth.Token(self.config.github_token), retry=None)
            else:
                logger.warning("GITHUB_TOKEN not set, using unauthenticated GitHub access")
                self._github_client = Github(retry=None)
        return self._github_client

    def _get_repository_sync(self) -> Repository:
        """Synchronous repository getter for thread pool execution."""
        if self._repository is None:
            self._repository = self.github_client.get_repo(self.config.repo_full_name)
        return self._repository

    async def get_repository(self) -> Repository:
        """
        Get the configured repository object.

        Returns:
            GitHub repository object

        Raises:
            RepositoryError: If the repository cannot be accessed
        """
        try:
            logger.debug(f"Getting repository: {self.config.repo_full_name}")
            return await asyncio.to_thread(self._get_repository_sync)
        except GithubException as e:
            raise RepositoryError(
                f"GitHub API error for repository '{self.config.repo_full_name}'",
                repository=self.config.repo_full_name,
                github_error=f"HTTP {e.status}: {_github_message(e)}",
                cause=e
            )
        except Exception as e:
            raise RepositoryError(
                f"Failed to get repository '{self.config.repo_full_name}': {str(e)}",
                repository=self.config.repo_full_name,
                cause=e
            )

    async def fetch_repository_files(self, path: str = "") -> List[RepoFile]:
        """
        Download every file reachable under a path, recursing into directories.

        Listing or download failures drop the affected subtree and are
        logged; they never abort the walk.

        Args:
            path: Directory relative to the repository root ("" for the root)

        Returns:
            Files in host traversal order
        """
        logger.info(f"Getting repository files from {self.config.repo_full_name}/{path}")
        result = await self.fetch_subtree(path)
        logger.info(f"Fetched {len(result.files)} files")
        return result.files

    async def fetch_subtree(self, path: str = "") -> SubtreeResult:
        """Fetch one subtree and report its outcome explicitly."""
        # Skipped subtrees are warnings, so RepositoryError (logged at ERROR) is not raised here
        try:
            repo = await asyncio.to_thread(self._get_repository_sync)
        except Exception as e:
            logger.warning(
                f"Cannot access {self.config.repo_full_name}, skipping '{path or '/'}': {e}"
            )
            return SubtreeResult.failed(path, str(e))
        return await asyncio.to_thread(self._fetch_subtree_sync, repo, path)

    def _fetch_subtree_sync(self, repo: Repository, path: str) -> SubtreeResult:
        """Depth-first fetch of one directory; nested failures only empty themselves."""
        files: List[RepoFile] = []
        try:
            contents = repo.get_contents(path)
            entries = contents if isinstance(contents, list) else [contents]

            for item in entries:
                logger.debug(f"Item: {item.type} {item.path}")
                if item.type == "file":
                    files.append(self._fetch_file_sync(repo, item.path, item.sha))
                elif item.type == "dir":
                    files.extend(self._fetch_subtree_sync(repo, item.path).files)
        except Exception as e:
            logger.warning(f"Error reading '{path or '/'}', skipping subtree: {e}")
            return SubtreeResult.failed(path, str(e))

        return SubtreeResult(path=path, files=files)

    def _fetch_file_sync(self, repo: Repository, path: str, sha: str) -> RepoFile:
        """Download a blob by SHA and decode it to text."""
        blob = repo.get_git_blob(sha)
        return RepoFile(path=path, content=decode_blob_content(blob.content), sha=sha)


def decode_blob_content(encoded: str) -> str:
    """Decode base64 blob content to text; undecodable bytes are replaced."""
    return base64.b64decode(encoded).decode("utf-8", errors="replace")


def _github_message(error: GithubException) -> str:
    if isinstance(error.data, dict):
        return error.data.get("message", "Unknown error")
    return str(error.data)
