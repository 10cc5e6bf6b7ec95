"""Shared fakes for pipeline tests."""

from typing import Any, Dict, List, Optional

import pytest

from pr_review_action.services.github import VersionControlHost
from pr_review_action.services.llm import ReviewGenerator
from pr_review_action.utils.retry import RetryPolicy


SAMPLE_PATCH = (
    "@@ -1,3 +1,4 @@\n"
    " import os\n"
    "+import sys\n"
    " \n"
    " def main():\n"
    "@@ -10,2 +11,3 @@ def main():\n"
    "     run()\n"
    "+    sys.exit(0)\n"
)


def make_file(filename: str, status: str = "modified", patch: Optional[str] = SAMPLE_PATCH) -> Dict[str, Any]:
    file_data = {"filename": filename, "status": status, "sha": "f" * 40}
    if patch is not None:
        file_data["patch"] = patch
    return file_data


class FakeHost(VersionControlHost):
    """In-memory host recording every call; errors can be queued per method."""

    def __init__(self, files: Optional[List[Dict[str, Any]]] = None):
        self.files = files or []
        self.list_calls: List[Dict[str, Any]] = []
        self.comments: List[Dict[str, Any]] = []
        self.reviews: List[Dict[str, Any]] = []
        self.list_errors: List[Exception] = []
        self.comment_errors: List[Exception] = []
        self.review_errors: List[Exception] = []
        self.closed = False

    async def list_pull_request_files(self, owner, repo, pull_number, page=1, per_page=100):
        self.list_calls.append({"owner": owner, "repo": repo, "pull_number": pull_number, "page": page})
        if self.list_errors:
            raise self.list_errors.pop(0)
        start = (page - 1) * per_page
        return self.files[start:start + per_page]

    async def create_review_comment(self, owner, repo, pull_number, payload):
        if self.comment_errors:
            raise self.comment_errors.pop(0)
        self.comments.append({"owner": owner, "repo": repo, "pull_number": pull_number, **payload})
        return {"id": len(self.comments)}

    async def create_review(self, owner, repo, pull_number, payload):
        if self.review_errors:
            raise self.review_errors.pop(0)
        self.reviews.append({"owner": owner, "repo": repo, "pull_number": pull_number, **payload})
        return {"id": len(self.reviews)}

    async def close(self):
        self.closed = True


class FakeGenerator(ReviewGenerator):
    """Returns canned review text and records the params of each call."""

    def __init__(self, text: str = "Looks good.", error: Optional[Exception] = None):
        super().__init__(model="fake-model")
        self.text = text
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def generate(self, system_prompt, human_prompt_template, params):
        self.calls.append(dict(params))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def fast_policy():
    return RetryPolicy(max_attempts=3, initial_delay=0.0, jitter=False)


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def make_pr_file():
    return make_file


@pytest.fixture
def sample_patch():
    return SAMPLE_PATCH


@pytest.fixture
def host_factory():
    return FakeHost


@pytest.fixture
def generator_factory():
    return FakeGenerator
