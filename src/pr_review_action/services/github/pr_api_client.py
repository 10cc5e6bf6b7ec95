"""
GitHub API Client for Pull Request Operations

Token-authenticated async client for the pull request endpoints used by the
review pipeline, with typed error conversion and rate limit tracking.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from pr_review_action.exceptions import GitHubAPIException, GitHubRateLimitException
from pr_review_action.services.github.base_host import VersionControlHost
from pr_review_action.utils.logging import get_logger

logger = get_logger(__name__)

GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "pr-review-action/1.0"
MAX_FILES_PER_PAGE = 100


@dataclass
class GitHubAPIRateLimit:
    """Rate limit information from GitHub API headers."""
    limit: int
    remaining: int
    reset_time: int
    used: int

    @classmethod
    def from_headers(cls, headers: httpx.Headers) -> Optional['GitHubAPIRateLimit']:
        """Create rate limit info from response headers."""
        if 'x-ratelimit-remaining' not in headers:
            return None
        try:
            return cls(
                limit=int(headers.get('x-ratelimit-limit', 0)),
                remaining=int(headers.get('x-ratelimit-remaining', 0)),
                reset_time=int(headers.get('x-ratelimit-reset', 0)),
                used=int(headers.get('x-ratelimit-used', 0))
            )
        except (ValueError, TypeError):
            return None

    @property
    def seconds_until_reset(self) -> int:
        """Seconds until rate limit resets."""
        return max(0, self.reset_time - int(time.time()))


class PRApiClient(VersionControlHost):
    """
    GitHub REST client specialized for PR review operations.

    One ``httpx.AsyncClient`` is shared for the lifetime of the client and is
    safe to reuse across sequential calls.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self._rate_limit_info: Optional[GitHubAPIRateLimit] = None
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "User-Agent": USER_AGENT,
            },
        )

    async def __aenter__(self) -> "PRApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def list_pull_request_files(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        page: int = 1,
        per_page: int = MAX_FILES_PER_PAGE,
    ) -> List[Dict[str, Any]]:
        """
        Get one page of files changed in a pull request, with their patches.

        Args:
            owner: Repository owner
            repo: Repository name
            pull_number: Pull request number
            page: 1-based page number
            per_page: Files per page (GitHub caps this at 100)

        Returns:
            List of file objects with filename, status, patch, sha, etc.

        Raises:
            GitHubAPIException: For API and transport errors
        """
        endpoint = f"/repos/{owner}/{repo}/pulls/{pull_number}/files"
        params = {"per_page": min(per_page, MAX_FILES_PER_PAGE), "page": page}

        logger.info(f"Fetching PR files for {owner}/{repo}#{pull_number} (page {page})")
        return await self._make_api_request("GET", endpoint, params=params)

    async def create_review_comment(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        payload: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Create a review comment on a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pull_number: Pull request number
            payload: Comment body with body, commit_id, path and subject_type

        Returns:
            Created comment object
        """
        endpoint = f"/repos/{owner}/{repo}/pulls/{pull_number}/comments"

        logger.debug(f"Creating review comment on {owner}/{repo}#{pull_number}: {payload}")
        response_data = await self._make_api_request("POST", endpoint, json_data=payload)

        logger.info(
            f"Created review comment {response_data.get('id')} on "
            f"{owner}/{repo}#{pull_number} for {payload.get('path')}"
        )
        return response_data

    async def create_review(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        payload: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Create a pull request review with comments.

        Args:
            owner: Repository owner
            repo: Repository name
            pull_number: Pull request number
            payload: Review payload with commit_id, body, event, and comments

        Returns:
            Created review object with ID and URL
        """
        endpoint = f"/repos/{owner}/{repo}/pulls/{pull_number}/reviews"

        logger.info(f"Creating review for {owner}/{repo}#{pull_number}")
        response_data = await self._make_api_request("POST", endpoint, json_data=payload)

        logger.info(
            f"Successfully created review {response_data.get('id')} for {owner}/{repo}#{pull_number}"
        )
        return response_data

    async def _make_api_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make one authenticated API request.

        Raises:
            GitHubRateLimitException: For rate limit exceeded
            GitHubAPIException: For other API and transport errors
        """
        try:
            response = await self._client.request(
                method=method,
                url=endpoint,
                params=params,
                json=json_data,
            )
        except httpx.HTTPError as e:
            raise GitHubAPIException(f"Request to {endpoint} failed: {e}") from e

        rate_limit = GitHubAPIRateLimit.from_headers(response.headers)
        if rate_limit:
            self._rate_limit_info = rate_limit
            if rate_limit.remaining < 10:
                logger.warning(
                    f"Rate limit nearly exceeded ({rate_limit.remaining} remaining), "
                    f"resets in {rate_limit.seconds_until_reset}s"
                )

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._handle_http_error(e, f"{method} {endpoint}") from e

        if not response.content:
            return {}
        return response.json()

    def _handle_http_error(self, error: httpx.HTTPStatusError, operation: str) -> GitHubAPIException:
        """
        Convert HTTP status error to appropriate GitHub exception.

        Args:
            error: HTTP status error from httpx
            operation: Description of the operation that failed

        Returns:
            Appropriate GitHubAPIException subclass
        """
        status_code = error.response.status_code
        response_text = error.response.text

        if status_code == 429 or (
            status_code == 403 and error.response.headers.get('x-ratelimit-remaining') == '0'
        ):
            retry_after = error.response.headers.get('retry-after')
            return GitHubRateLimitException(
                retry_after_seconds=int(retry_after) if retry_after and retry_after.isdigit() else None
            )

        message = f"GitHub API error during {operation}: {status_code}"
        if response_text:
            message += f" - {response_text}"
        return GitHubAPIException(message=message, status_code=status_code)

    def get_current_rate_limit(self) -> Optional[GitHubAPIRateLimit]:
        """Get current rate limit information."""
        return self._rate_limit_info
