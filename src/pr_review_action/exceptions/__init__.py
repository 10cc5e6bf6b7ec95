from .pr_review_exceptions import (
    PER_FILE_EXCEPTIONS,
    CommentPublishingException,
    DiffParseFailureException,
    GitHubAPIException,
    GitHubRateLimitException,
    InvalidEventPayloadException,
    LanguageUndetectedException,
    MissingConfigurationException,
    NoDiffAvailableException,
    PRReviewException,
    RunTimeoutException,
    UnavailableHostException,
    UnknownGenerationFailureException,
    UnsupportedEventKindException,
    is_retryable_status,
)

__all__ = [
    "PER_FILE_EXCEPTIONS",
    "CommentPublishingException",
    "DiffParseFailureException",
    "GitHubAPIException",
    "GitHubRateLimitException",
    "InvalidEventPayloadException",
    "LanguageUndetectedException",
    "MissingConfigurationException",
    "NoDiffAvailableException",
    "PRReviewException",
    "RunTimeoutException",
    "UnavailableHostException",
    "UnknownGenerationFailureException",
    "UnsupportedEventKindException",
    "is_retryable_status",
]
