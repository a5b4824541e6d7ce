"""
In-memory stand-ins for the GitHub repository and the chat model.
"""

import base64
import os
from types import SimpleNamespace
from typing import Dict, Iterable, List, Optional
from unittest.mock import MagicMock, patch

from github import GithubException, UnknownObjectException

from github_pr_generator.config import Config
from github_pr_generator.services import RepositoryService

TEST_ENV = {
    "GITHUB_OWNER": "octo",
    "GITHUB_REPO": "demo",
    "GOOGLE_API_KEY": "test-google-key",
    "GITHUB_TOKEN": "ghp_testtoken",
}


def make_config(**overrides) -> Config:
    """Build a Config from a controlled environment without reading dotenv files."""
    env = dict(TEST_ENV)
    env.update(overrides)
    env = {k: v for k, v in env.items() if v is not None}
    with patch.dict(os.environ, env, clear=True), \
            patch("github_pr_generator.config.load_dotenv"):
        return Config()


class FakePullRequest:
    def __init__(self, repo: "FakeRepository", number: int, title: str, body: str):
        self.repo = repo
        self.number = number
        self.title = title
        self.body = body
        self.html_url = f"https://github.com/octo/demo/pull/{number}"

    def create_issue_comment(self, body: str):
        self.repo.write_calls.append(("create_issue_comment", self.number, body))


class FakeRepository:
    """Repository whose tree is derived from a {path: content} mapping.

    Directory listings follow insertion order of the mapping. Write calls are
    recorded in `write_calls` in the order they are made.
    """

    default_branch = "main"

    def __init__(
        self,
        files: Optional[Dict[str, str]] = None,
        failing_dirs: Iterable[str] = (),
        failing_blobs: Iterable[str] = (),
    ):
        self.files = dict(files or {})
        self.failing_dirs = set(failing_dirs)
        self.failing_blobs = set(failing_blobs)
        self.listings: Dict[str, List[SimpleNamespace]] = {"": []}
        self.branch_files: Dict[str, str] = {}
        self.write_calls: List[tuple] = []
        self.pulls: List[FakePullRequest] = []

        for path in self.files:
            parts = path.split("/")
            for depth in range(1, len(parts) + 1):
                parent = "/".join(parts[:depth - 1])
                entry_path = "/".join(parts[:depth])
                is_file = depth == len(parts)
                if any(e.path == entry_path for e in self.listings[parent]):
                    continue
                self.listings[parent].append(SimpleNamespace(
                    path=entry_path,
                    type="file" if is_file else "dir",
                    sha=self.sha_for(entry_path),
                ))
                if not is_file:
                    self.listings[entry_path] = []

    @staticmethod
    def sha_for(path: str) -> str:
        return f"sha-{path}"

    def get_contents(self, path: str, ref: Optional[str] = None):
        if ref is not None:
            if path in self.branch_files:
                return SimpleNamespace(path=path, type="file", sha=self.branch_files[path])
            raise UnknownObjectException(404, {"message": "Not Found"}, None)
        if path in self.failing_dirs:
            raise GithubException(500, {"message": f"cannot list {path}"}, None)
        if path in self.listings:
            return list(self.listings[path])
        if path in self.files:
            return SimpleNamespace(path=path, type="file", sha=self.sha_for(path))
        raise UnknownObjectException(404, {"message": "Not Found"}, None)

    def get_git_blob(self, sha: str):
        path = sha[len("sha-"):]
        if path in self.failing_blobs:
            raise GithubException(500, {"message": f"cannot read blob {sha}"}, None)
        encoded = base64.b64encode(self.files[path].encode("utf-8")).decode("ascii")
        return SimpleNamespace(sha=sha, content=encoded, encoding="base64")

    def get_git_ref(self, ref: str):
        return SimpleNamespace(ref=f"refs/{ref}", object=SimpleNamespace(sha="head-sha"))

    def create_git_ref(self, ref: str, sha: str):
        self.write_calls.append(("create_git_ref", ref, sha))
        self.branch_files = {path: self.sha_for(path) for path in self.files}

    def create_file(self, path, message, content, branch=None):
        self.write_calls.append(("create_file", path, message, content, branch))
        self.branch_files[path] = f"written-{len(self.write_calls)}"

    def update_file(self, path, message, content, sha, branch=None):
        self.write_calls.append(("update_file", path, message, content, sha, branch))
        self.branch_files[path] = f"written-{len(self.write_calls)}"

    def create_pull(self, title, body, head, base):
        self.write_calls.append(("create_pull", title, head, base))
        pull = FakePullRequest(self, len(self.pulls) + 1, title, body)
        self.pulls.append(pull)
        return pull


def make_repository_service(config: Config, repo) -> RepositoryService:
    """RepositoryService backed by a fake client returning `repo`."""
    client = MagicMock()
    client.get_repo.return_value = repo
    return RepositoryService(config, github_client=client)


def make_llm(content) -> MagicMock:
    """Chat model double whose invoke() returns a message with `content`."""
    llm = MagicMock()
    llm.invoke.return_value = SimpleNamespace(content=content)
    return llm
