from .pr_review import (
    REVIEWABLE_STATUSES,
    CommentTarget,
    DiffHunk,
    FileStatus,
    PullRequestEvent,
    ReviewRequest,
    ReviewResult,
    RunOutcome,
    StageResult,
)

__all__ = [
    "REVIEWABLE_STATUSES",
    "CommentTarget",
    "DiffHunk",
    "FileStatus",
    "PullRequestEvent",
    "ReviewRequest",
    "ReviewResult",
    "RunOutcome",
    "StageResult",
]
