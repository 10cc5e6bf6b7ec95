"""
PR Review Pipeline Specific Exceptions

Typed failure kinds for the PR review pipeline. Every exception carries a
human-readable message and a ``retryable`` flag consulted by
``retry_with_backoff``.
"""

from typing import Optional


# ============================================================================
# BASE PR REVIEW EXCEPTIONS
# ============================================================================

class PRReviewException(Exception):
    """Base exception for PR review pipeline errors."""
    def __init__(self, message: str, retryable: bool = False):
        self.message = message
        self.retryable = retryable
        super().__init__(self.message)


# ============================================================================
# PRE-RUN EXCEPTIONS
# ============================================================================

class MissingConfigurationException(PRReviewException):
    """Raised when a required action input is empty."""
    def __init__(self, input_name: str):
        super().__init__(message=f"Input required and not supplied: {input_name}")
        self.input_name = input_name


class UnsupportedEventKindException(PRReviewException):
    """Raised when the triggering event is not a pull request event."""
    def __init__(self, event_kind: str):
        message = f"This action only works on pull_request events. Got: {event_kind}"
        super().__init__(message=message)
        self.event_kind = event_kind


class InvalidEventPayloadException(PRReviewException):
    """Raised when the event payload lacks repository or pull request data."""
    def __init__(self, detail: str):
        super().__init__(message=f"Invalid pull_request event payload: {detail}")


# ============================================================================
# GITHUB API EXCEPTIONS
# ============================================================================

class GitHubAPIException(PRReviewException):
    """Base exception for GitHub API related errors."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message=message, retryable=is_retryable_status(status_code))
        self.status_code = status_code


class GitHubRateLimitException(GitHubAPIException):
    """Raised when GitHub API rate limit is exceeded."""
    def __init__(self, retry_after_seconds: Optional[int] = None):
        message = "GitHub API rate limit exceeded"
        if retry_after_seconds:
            message += f". Retry after {retry_after_seconds} seconds"
        super().__init__(message=message, status_code=429)
        self.retry_after_seconds = retry_after_seconds


class UnavailableHostException(PRReviewException):
    """Raised when the host could not return the pull request file list."""
    def __init__(self, repo_name: str, pr_number: int, cause: Exception):
        attempts = getattr(cause, "attempts", 1)
        message = (
            f"Failed to fetch files for {repo_name}#{pr_number} "
            f"after {attempts} attempt(s): {cause}"
        )
        super().__init__(message=message)
        self.attempts = attempts


# ============================================================================
# PER-FILE REVIEW EXCEPTIONS
# ============================================================================

class NoDiffAvailableException(PRReviewException):
    """Raised when a file has no textual diff to review."""
    def __init__(self, file_path: str):
        super().__init__(message=f"No diff available for {file_path}")
        self.file_path = file_path


class LanguageUndetectedException(PRReviewException):
    """Raised when no language could be determined for a file."""
    def __init__(self, file_path: str):
        super().__init__(message=f"Could not detect language for {file_path}")
        self.file_path = file_path


class DiffParseFailureException(PRReviewException):
    """Raised when a patch cannot be split into hunks."""
    def __init__(self, file_path: str, detail: str = "no hunk header found"):
        super().__init__(message=f"Failed to parse diff for {file_path}: {detail}")
        self.file_path = file_path


class UnknownGenerationFailureException(PRReviewException):
    """Raised when the review generator call fails."""
    def __init__(self, file_path: str, detail: str):
        super().__init__(message=f"Review generation failed for {file_path}: {detail}")
        self.file_path = file_path


# ============================================================================
# PUBLISHING / RUN EXCEPTIONS
# ============================================================================

class CommentPublishingException(PRReviewException):
    """Raised when a review comment could not be published."""
    def __init__(self, file_path: str, cause: Exception):
        attempts = getattr(cause, "attempts", 1)
        message = (
            f"Failed to publish review comment for {file_path} "
            f"after {attempts} attempt(s): {cause}"
        )
        super().__init__(message=message)
        self.file_path = file_path
        self.attempts = attempts


class RunTimeoutException(PRReviewException):
    """Raised when the whole review run exceeds its time budget."""
    def __init__(self, timeout_seconds: float):
        super().__init__(message=f"Review run timed out after {timeout_seconds}s")


# Failures confined to one file; skipped unless fail-fast is enabled
PER_FILE_EXCEPTIONS = (
    NoDiffAvailableException,
    LanguageUndetectedException,
    DiffParseFailureException,
)


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def is_retryable_status(status_code: Optional[int]) -> bool:
    """
    Determine if a GitHub API status code should be retried.

    Returns True for transport errors (no status), rate limits and server
    errors, False for other client errors.
    """
    if status_code is None:
        return True
    return status_code == 429 or status_code >= 500
