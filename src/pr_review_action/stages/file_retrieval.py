"""
File Retrieval Stage

Fetches the changed files of a pull request and keeps only those worth
reviewing: added/modified/changed files that match no exclusion glob.
"""

from typing import Any, Dict, List, Optional, Sequence

from wcmatch import glob

from pr_review_action.exceptions import UnavailableHostException
from pr_review_action.models import REVIEWABLE_STATUSES, ReviewRequest, StageResult
from pr_review_action.services.github import VersionControlHost
from pr_review_action.services.github.pr_api_client import MAX_FILES_PER_PAGE
from pr_review_action.utils.logging import get_logger
from pr_review_action.utils.retry import RetryPolicy, retry_with_backoff

logger = get_logger(__name__)

# GitHub lists at most 3000 files for a pull request
MAX_FILE_PAGES = 30

_REVIEWABLE_STATUS_VALUES = frozenset(status.value for status in REVIEWABLE_STATUSES)

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.MATCHBASE | glob.FORCEUNIX


def matches_pattern(filename: str, pattern: str) -> bool:
    """
    Glob-match a filename against one exclusion pattern.

    ``*`` stays within one path segment, ``**`` spans any number of them and
    ``{a,b}`` expands to alternatives. A pattern without a slash is matched
    against the basename.
    """
    if not pattern:
        return False
    return glob.globmatch(filename, pattern, flags=GLOB_FLAGS)


def is_excluded(filename: str, exclude_patterns: Sequence[str]) -> bool:
    """A file is excluded if it matches any pattern."""
    return any(matches_pattern(filename, pattern) for pattern in exclude_patterns)


def filter_reviewable(
    files: List[Dict[str, Any]],
    exclude_patterns: Sequence[str],
) -> List[ReviewRequest]:
    """Keep reviewable-status, non-excluded files in the order received."""
    return [
        ReviewRequest.from_github(file_data)
        for file_data in files
        if file_data.get("status") in _REVIEWABLE_STATUS_VALUES
        and not is_excluded(file_data["filename"], exclude_patterns)
    ]


class FileRetrievalStage:
    """Paginated fetch and filtering of a pull request's changed files."""

    def __init__(
        self,
        host: VersionControlHost,
        retry_policy: Optional[RetryPolicy] = None,
        per_page: int = MAX_FILES_PER_PAGE,
        max_pages: int = MAX_FILE_PAGES,
    ):
        self.host = host
        self.retry_policy = retry_policy or RetryPolicy()
        self.per_page = per_page
        self.max_pages = max_pages

    async def fetch_reviewable_files(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        exclude_patterns: Sequence[str],
    ) -> StageResult[List[ReviewRequest]]:
        """
        Fetch and filter the files of a pull request.

        Returns:
            StageResult with the filtered ReviewRequests (possibly empty), or
            an UnavailableHostException failure if the file list could not be
            fetched.
        """
        try:
            files = await self._fetch_all_files(owner, repo, pull_number)
        except Exception as e:
            logger.error(f"Could not fetch files for {owner}/{repo}#{pull_number}: {e}")
            return StageResult.failure(UnavailableHostException(f"{owner}/{repo}", pull_number, e))

        if not files:
            logger.warning("No files found in pull request")
            return StageResult.success([])

        logger.info(
            f"Original files for review {len(files)}: {[f.get('filename') for f in files]}"
        )

        filtered = filter_reviewable(files, exclude_patterns)

        if not filtered:
            logger.warning(f"No files matched filter criteria. Total files: {len(files)}")

        logger.info(
            f"Filtered files for review {len(filtered)}: {[r.filename for r in filtered]}"
        )
        return StageResult.success(filtered)

    async def _fetch_all_files(self, owner: str, repo: str, pull_number: int) -> List[Dict[str, Any]]:
        all_files: List[Dict[str, Any]] = []

        for page in range(1, self.max_pages + 1):
            page_files = await retry_with_backoff(
                self.host.list_pull_request_files,
                owner,
                repo,
                pull_number,
                page=page,
                per_page=self.per_page,
                policy=self.retry_policy,
            )

            if not page_files:
                break

            all_files.extend(page_files)

            # A short page is the last one
            if len(page_files) < self.per_page:
                break
        else:
            logger.warning(f"Reached pagination limit fetching files for {owner}/{repo}#{pull_number}")

        return all_files
