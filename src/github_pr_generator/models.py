"""
Data models for the GitHub PR Generator.

Defines the values passed between pipeline stages: fetched repository files,
per-subtree fetch results, parsed model output and the publishing summary.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional


@dataclass(frozen=True)
class RepoFile:
    """A file read from the repository."""
    path: str
    content: str
    sha: str


@dataclass
class SubtreeResult:
    """Outcome of fetching one directory subtree.

    A failed subtree carries no files and the error that caused it to be
    skipped; results of sibling subtrees are combined by concatenation.
    """
    path: str
    files: List[RepoFile] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failed(cls, path: str, error: str) -> "SubtreeResult":
        return cls(path=path, files=[], error=error)


@dataclass(frozen=True)
class GeneratedEdit:
    """Desired final content of a file at a path."""
    path: str
    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"path": self.path, "content": self.content}


@dataclass(frozen=True)
class PullRequestMetadata:
    """Title and body of the pull request to open."""
    title: str
    body: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"title": self.title, "body": self.body}


@dataclass
class GeneratedChanges:
    """Decoded model response: pull request description and ordered file edits."""
    pull_request: PullRequestMetadata
    edits: List[GeneratedEdit] = field(default_factory=list)

    @property
    def modified_paths(self) -> List[str]:
        return [edit.path for edit in self.edits]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "pull_request": self.pull_request.to_dict(),
            "edits": [edit.to_dict() for edit in self.edits],
        }


@dataclass
class GenerationResult:
    """Raw model answer and the reasoning trace split off from it."""
    text: str
    reasoning: str = ""


@dataclass
class PublishResult:
    """Summary of the remote changes made for one run."""
    branch_name: str
    base_branch: str
    pull_request_number: int
    pull_request_url: str
    files_written: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "branch_name": self.branch_name,
            "base_branch": self.base_branch,
            "pull_request_number": self.pull_request_number,
            "pull_request_url": self.pull_request_url,
            "files_written": self.files_written,
        }
