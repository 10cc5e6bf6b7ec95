"""Version control host capability consumed by the review pipeline."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class VersionControlHost(ABC):
    """
    Pull request operations the pipeline needs from a hosting platform.

    Implementations make exactly one request per call; retrying is the
    caller's concern.
    """

    @abstractmethod
    async def list_pull_request_files(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        page: int = 1,
        per_page: int = 100,
    ) -> List[Dict[str, Any]]:
        """Return one page of changed files for a pull request."""

    @abstractmethod
    async def create_review_comment(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        payload: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Create a review comment on a pull request."""

    @abstractmethod
    async def create_review(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        payload: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Create a pull request review, optionally with comments."""

    async def close(self) -> None:
        """Release any held resources."""
