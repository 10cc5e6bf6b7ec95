"""
Comment Publishing Stage

Posts generated reviews back to the pull request, either as one file-level
review comment per file or as a single batch review.
"""

from typing import Any, Dict, List, Optional

from pr_review_action.exceptions import CommentPublishingException
from pr_review_action.models import CommentTarget, StageResult
from pr_review_action.services.github import VersionControlHost
from pr_review_action.utils.logging import get_logger
from pr_review_action.utils.retry import RetryPolicy, retry_with_backoff

logger = get_logger(__name__)

# GitHub rejects comment and review bodies longer than this
MAX_BODY_LENGTH = 65536
TRUNCATION_NOTICE = "\n\n_Review truncated._"


def truncate_body(body: str, max_length: int = MAX_BODY_LENGTH) -> str:
    if len(body) <= max_length:
        return body
    return body[: max_length - len(TRUNCATION_NOTICE)] + TRUNCATION_NOTICE


class CommentPublishingStage:
    """Publishes review text through the host, retrying transient failures."""

    def __init__(self, host: VersionControlHost, retry_policy: Optional[RetryPolicy] = None):
        self.host = host
        self.retry_policy = retry_policy or RetryPolicy()

    async def publish_comment(self, target: CommentTarget) -> StageResult[Dict[str, Any]]:
        """Create one review comment attached to ``target.path``."""
        payload = target.to_payload()
        payload["body"] = truncate_body(payload["body"])

        try:
            response = await retry_with_backoff(
                self.host.create_review_comment,
                target.owner,
                target.repo,
                target.pull_number,
                payload,
                policy=self.retry_policy,
            )
        except Exception as e:
            logger.error(f"Failed to publish review comment for {target.path}: {e}")
            return StageResult.failure(CommentPublishingException(target.path, e))

        return StageResult.success(response)

    async def publish_review(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        commit_id: str,
        targets: List[CommentTarget],
    ) -> StageResult[Dict[str, Any]]:
        """
        Create one top-level review whose body holds every file's review.

        Nothing is posted when there are no targets.
        """
        if not targets:
            logger.info("No reviews to publish")
            return StageResult.success({})

        sections = [f"### `{target.path}`\n\n{target.body}" for target in targets]
        payload = {
            "commit_id": commit_id,
            "body": truncate_body("\n\n---\n\n".join(sections)),
            "event": "COMMENT",
            "comments": [],
        }

        try:
            response = await retry_with_backoff(
                self.host.create_review,
                owner,
                repo,
                pull_number,
                payload,
                policy=self.retry_policy,
            )
        except Exception as e:
            logger.error(f"Failed to publish review for {owner}/{repo}#{pull_number}: {e}")
            return StageResult.failure(CommentPublishingException(f"{owner}/{repo}#{pull_number}", e))

        logger.info(f"Published review with {len(targets)} file reviews")
        return StageResult.success(response)
