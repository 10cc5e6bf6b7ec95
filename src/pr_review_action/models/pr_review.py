"""
PR Review Data Models

Immutable models passed between pipeline stages.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class FileStatus(str, Enum):
    """File change status as reported by the GitHub pull request files API."""
    ADDED = "added"
    MODIFIED = "modified"
    CHANGED = "changed"
    REMOVED = "removed"
    RENAMED = "renamed"
    COPIED = "copied"
    UNCHANGED = "unchanged"


REVIEWABLE_STATUSES = frozenset({FileStatus.ADDED, FileStatus.MODIFIED, FileStatus.CHANGED})


class ReviewRequest(BaseModel):
    """One changed file of a pull request, as a candidate for review."""
    model_config = ConfigDict(frozen=True)

    filename: str
    patch: Optional[str] = None
    status: FileStatus
    sha: str = ""

    @classmethod
    def from_github(cls, file_data: Dict[str, Any]) -> "ReviewRequest":
        """Create a review request from a pull request files API entry."""
        return cls(
            filename=file_data["filename"],
            patch=file_data.get("patch"),
            status=FileStatus(file_data["status"]),
            sha=file_data.get("sha") or "",
        )

    @property
    def is_reviewable(self) -> bool:
        return self.status in REVIEWABLE_STATUSES

    @property
    def has_diff(self) -> bool:
        return bool(self.patch)


class ReviewResult(BaseModel):
    """Markdown review text produced for a file or a hunk."""
    model_config = ConfigDict(frozen=True)

    text: str


class DiffHunk(BaseModel):
    """A single @@ block of a unified diff, header line included in content."""
    model_config = ConfigDict(frozen=True)

    header: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    content: str


class CommentTarget(BaseModel):
    """Fully determines where a review comment is attached."""
    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    pull_number: int = Field(gt=0)
    commit_id: str = Field(min_length=1)
    path: str = Field(min_length=1)
    body: str = Field(min_length=1)
    subject_type: str = "file"

    @classmethod
    def for_review(
        cls,
        owner: str,
        repo: str,
        pull_number: int,
        commit_id: str,
        request: ReviewRequest,
        result: ReviewResult,
    ) -> "CommentTarget":
        return cls(
            owner=owner,
            repo=repo,
            pull_number=pull_number,
            commit_id=commit_id,
            path=request.filename,
            body=result.text,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Request body for the create-review-comment endpoint."""
        return {
            "body": self.body,
            "commit_id": self.commit_id,
            "path": self.path,
            "subject_type": self.subject_type,
        }


class PullRequestEvent(BaseModel):
    """The triggering event, reduced to what a review run needs."""
    model_config = ConfigDict(frozen=True)

    event_name: str
    action: Optional[str] = None
    owner: str = ""
    repo: str = ""
    pull_number: int = 0
    head_sha: str = ""

    @property
    def kind(self) -> str:
        if self.action:
            return f"{self.event_name}.{self.action}"
        return self.event_name

    @property
    def repo_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Success value or typed failure returned by every stage call."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "StageResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


@dataclass
class RunOutcome:
    """Terminal state of a review run."""

    success: bool
    message: str = ""
    reviewed_files: List[str] = field(default_factory=list)
    skipped_files: List[Tuple[str, str]] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
