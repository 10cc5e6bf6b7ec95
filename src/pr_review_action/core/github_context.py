"""
GitHub Actions run context.

Reads the triggering event from the runner environment
(``GITHUB_EVENT_NAME``, ``GITHUB_EVENT_PATH``, ``GITHUB_REPOSITORY``).
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pr_review_action.models import PullRequestEvent
from pr_review_action.utils.logging import get_logger

logger = get_logger(__name__)


def _read_payload(event_path: Optional[str]) -> Dict[str, Any]:
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        logger.warning(f"GITHUB_EVENT_PATH {event_path} does not exist")
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def event_from_payload(
    event_name: str,
    payload: Dict[str, Any],
    repository: str = "",
) -> PullRequestEvent:
    """
    Build a PullRequestEvent from a webhook payload.

    Repository owner/name come from the payload when present, otherwise from
    the ``owner/name`` repository string.
    """
    owner, _, repo = repository.partition("/")
    repo_data = payload.get("repository") or {}
    owner = (repo_data.get("owner") or {}).get("login") or owner
    repo = repo_data.get("name") or repo

    pull_request = payload.get("pull_request") or {}
    pull_number = pull_request.get("number") or payload.get("number") or 0
    head_sha = (pull_request.get("head") or {}).get("sha") or ""

    return PullRequestEvent(
        event_name=event_name,
        action=payload.get("action"),
        owner=owner,
        repo=repo,
        pull_number=int(pull_number),
        head_sha=head_sha,
    )


def load_event(env: Optional[Mapping[str, str]] = None) -> PullRequestEvent:
    """Load the triggering event from the Actions runner environment."""
    env = os.environ if env is None else env
    event_name = env.get("GITHUB_EVENT_NAME", "")
    payload = _read_payload(env.get("GITHUB_EVENT_PATH"))
    event = event_from_payload(event_name, payload, env.get("GITHUB_REPOSITORY", ""))
    logger.debug(f"Loaded event {event.kind} for {event.repo_name}#{event.pull_number}")
    return event
