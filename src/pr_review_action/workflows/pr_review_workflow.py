"""
PR Review Workflow

Drives one review run: dispatches on the triggering event, fetches the
reviewable files, then reviews and publishes each file sequentially in list
order. The first unrecovered failure ends the run; per-file content failures
are skipped unless fail-fast is enabled.
"""

import asyncio
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from pr_review_action.core.config import ActionConfig, PublishMode, ReviewMode
from pr_review_action.exceptions import (
    PER_FILE_EXCEPTIONS,
    InvalidEventPayloadException,
    RunTimeoutException,
    UnsupportedEventKindException,
)
from pr_review_action.models import (
    CommentTarget,
    PullRequestEvent,
    ReviewRequest,
    ReviewResult,
    RunOutcome,
    StageResult,
)
from pr_review_action.services.github import VersionControlHost
from pr_review_action.services.llm import ReviewGenerator
from pr_review_action.stages import (
    CommentPublishingStage,
    FileRetrievalStage,
    ReviewGenerationStage,
)
from pr_review_action.utils.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_EVENT = "pull_request"
SUPPORTED_ACTIONS = frozenset({"opened", "synchronize", "reopened"})
CHUNK_SEPARATOR = "\n\n---\n\n"


class WorkflowState(str, Enum):
    AWAITING_EVENT = "awaiting_event"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PRReviewWorkflow:
    """
    Composes the pipeline stages for a single pull request review run.

    Usage:
        workflow = PRReviewWorkflow.from_config(config, host, generator)
        outcome = await workflow.run(event)
    """

    def __init__(
        self,
        file_retrieval: FileRetrievalStage,
        review_generation: ReviewGenerationStage,
        comment_publishing: CommentPublishingStage,
        exclude_patterns: Sequence[str] = (),
        review_mode: ReviewMode = ReviewMode.FILE,
        publish_mode: PublishMode = PublishMode.COMMENT,
        fail_fast: bool = False,
        run_timeout_seconds: Optional[float] = None,
    ):
        self.file_retrieval = file_retrieval
        self.review_generation = review_generation
        self.comment_publishing = comment_publishing
        self.exclude_patterns = list(exclude_patterns)
        self.review_mode = review_mode
        self.publish_mode = publish_mode
        self.fail_fast = fail_fast
        self.run_timeout_seconds = run_timeout_seconds
        self.state = WorkflowState.AWAITING_EVENT

    @classmethod
    def from_config(
        cls,
        config: ActionConfig,
        host: VersionControlHost,
        generator: ReviewGenerator,
    ) -> "PRReviewWorkflow":
        """Wire the stages to the given capabilities using one retry policy for the host."""
        return cls(
            file_retrieval=FileRetrievalStage(host, retry_policy=config.retry_policy),
            review_generation=ReviewGenerationStage(generator),
            comment_publishing=CommentPublishingStage(host, retry_policy=config.retry_policy),
            exclude_patterns=config.exclude_patterns,
            review_mode=config.review_mode,
            publish_mode=config.publish_mode,
            fail_fast=config.fail_fast,
            run_timeout_seconds=config.run_timeout_seconds,
        )

    async def run(self, event: PullRequestEvent) -> RunOutcome:
        """Run the review for one event and return its terminal outcome."""
        if event.event_name != SUPPORTED_EVENT or (
            event.action is not None and event.action not in SUPPORTED_ACTIONS
        ):
            return self._fail(UnsupportedEventKindException(event.kind))

        missing = [
            name for name, value in (
                ("repository owner", event.owner),
                ("repository name", event.repo),
                ("pull request number", event.pull_number),
                ("head commit sha", event.head_sha),
            ) if not value
        ]
        if missing:
            return self._fail(InvalidEventPayloadException(f"missing {', '.join(missing)}"))

        self.state = WorkflowState.RUNNING
        logger.info(
            f"repoName: {event.repo} pull_number: {event.pull_number} "
            f"owner: {event.owner} sha: {event.head_sha}"
        )

        if not self.run_timeout_seconds:
            return await self._process(event)

        try:
            return await asyncio.wait_for(self._process(event), timeout=self.run_timeout_seconds)
        except asyncio.TimeoutError:
            return self._fail(RunTimeoutException(self.run_timeout_seconds))

    async def _process(self, event: PullRequestEvent) -> RunOutcome:
        files_result = await self.file_retrieval.fetch_reviewable_files(
            event.owner, event.repo, event.pull_number, self.exclude_patterns
        )
        if not files_result.ok:
            return self._fail(files_result.error)

        requests = [request for request in files_result.value if request.has_diff]
        if len(requests) < len(files_result.value):
            logger.info(f"Skipping {len(files_result.value) - len(requests)} file(s) without a diff")

        reviewed: List[str] = []
        skipped: List[Tuple[str, str]] = []
        pending: List[CommentTarget] = []

        for request in requests:
            review_result = await self._review(request)

            if not review_result.ok:
                error = review_result.error
                if isinstance(error, PER_FILE_EXCEPTIONS) and not self.fail_fast:
                    logger.warning(f"Skipping {request.filename}: {error}")
                    skipped.append((request.filename, str(error)))
                    continue
                return self._fail(error, reviewed, skipped)

            result = review_result.value
            if not result.text.strip():
                logger.warning(f"Skipping {request.filename}: empty review")
                skipped.append((request.filename, "empty review"))
                continue

            target = CommentTarget.for_review(
                event.owner, event.repo, event.pull_number, event.head_sha, request, result
            )

            if self.publish_mode == PublishMode.REVIEW:
                pending.append(target)
            else:
                publish_result = await self.comment_publishing.publish_comment(target)
                if not publish_result.ok:
                    return self._fail(publish_result.error, reviewed, skipped)

            reviewed.append(request.filename)

        if self.publish_mode == PublishMode.REVIEW:
            publish_result = await self.comment_publishing.publish_review(
                event.owner, event.repo, event.pull_number, event.head_sha, pending
            )
            if not publish_result.ok:
                return self._fail(publish_result.error, [], skipped)

        return self._succeed(reviewed, skipped)

    async def _review(self, request: ReviewRequest) -> StageResult[ReviewResult]:
        """Review one file in the configured mode; chunk reviews are joined into one body."""
        if self.review_mode != ReviewMode.CHUNK:
            return await self.review_generation.review_file(request)

        chunk_result = await self.review_generation.review_file_by_chunk(request)
        if not chunk_result.ok:
            return StageResult.failure(chunk_result.error)
        text = CHUNK_SEPARATOR.join(r.text for r in chunk_result.value if r.text.strip())
        return StageResult.success(ReviewResult(text=text))

    def _succeed(self, reviewed: List[str], skipped: List[Tuple[str, str]]) -> RunOutcome:
        self.state = WorkflowState.SUCCEEDED
        message = f"Reviewed {len(reviewed)} file(s)"
        if skipped:
            message += f", skipped {len(skipped)}: " + "; ".join(
                f"{filename} ({reason})" for filename, reason in skipped
            )
        logger.info(message)
        return RunOutcome(success=True, message=message, reviewed_files=reviewed, skipped_files=skipped)

    def _fail(
        self,
        error: Exception,
        reviewed: Optional[List[str]] = None,
        skipped: Optional[List[Tuple[str, str]]] = None,
    ) -> RunOutcome:
        self.state = WorkflowState.FAILED
        message = str(error) or type(error).__name__
        logger.error(f"Review run failed: {message}")
        return RunOutcome(
            success=False,
            message=message,
            reviewed_files=reviewed or [],
            skipped_files=skipped or [],
            error=error,
        )
