"""Tests for publishing reviews to the pull request."""

import pytest

from pr_review_action.exceptions import CommentPublishingException, GitHubAPIException
from pr_review_action.models import CommentTarget
from pr_review_action.stages import CommentPublishingStage
from pr_review_action.stages.comment_publishing import MAX_BODY_LENGTH, truncate_body


def make_target(path="src/app.ts", body="Looks good."):
    return CommentTarget(owner="octo", repo="repo", pull_number=7, commit_id="abc123", path=path, body=body)


@pytest.mark.asyncio
async def test_publish_comment_posts_file_level_comment(fake_host, fast_policy):
    stage = CommentPublishingStage(fake_host, retry_policy=fast_policy)

    result = await stage.publish_comment(make_target())

    assert result.ok
    assert fake_host.comments == [{
        "owner": "octo",
        "repo": "repo",
        "pull_number": 7,
        "body": "Looks good.",
        "commit_id": "abc123",
        "path": "src/app.ts",
        "subject_type": "file",
    }]


@pytest.mark.asyncio
async def test_publish_comment_retries_transient_errors(fake_host, fast_policy):
    fake_host.comment_errors = [GitHubAPIException("unavailable", status_code=503)]
    stage = CommentPublishingStage(fake_host, retry_policy=fast_policy)

    result = await stage.publish_comment(make_target())

    assert result.ok
    assert len(fake_host.comments) == 1


@pytest.mark.asyncio
async def test_publish_comment_failure_after_retries(fake_host, fast_policy):
    fake_host.comment_errors = [GitHubAPIException("unavailable", status_code=503) for _ in range(3)]
    stage = CommentPublishingStage(fake_host, retry_policy=fast_policy)

    result = await stage.publish_comment(make_target())

    assert isinstance(result.error, CommentPublishingException)
    assert result.error.attempts == 3
    assert result.error.file_path == "src/app.ts"
    assert fake_host.comments == []


@pytest.mark.asyncio
async def test_publish_review_combines_targets_into_one_review(fake_host, fast_policy):
    stage = CommentPublishingStage(fake_host, retry_policy=fast_policy)
    targets = [make_target("a.py", "First"), make_target("b.py", "Second")]

    result = await stage.publish_review("octo", "repo", 7, "abc123", targets)

    assert result.ok
    assert len(fake_host.reviews) == 1
    review = fake_host.reviews[0]
    assert review["event"] == "COMMENT"
    assert review["commit_id"] == "abc123"
    assert review["body"].index("`a.py`") < review["body"].index("`b.py`")
    assert "First" in review["body"] and "Second" in review["body"]


@pytest.mark.asyncio
async def test_publish_review_with_no_targets_posts_nothing(fake_host, fast_policy):
    stage = CommentPublishingStage(fake_host, retry_policy=fast_policy)

    result = await stage.publish_review("octo", "repo", 7, "abc123", [])

    assert result.ok
    assert fake_host.reviews == []


@pytest.mark.unit
def test_truncate_body_limits_length():
    assert truncate_body("short") == "short"

    truncated = truncate_body("x" * (MAX_BODY_LENGTH + 10))

    assert len(truncated) == MAX_BODY_LENGTH
    assert truncated.endswith("_Review truncated._")
