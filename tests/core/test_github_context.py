import json

import pytest

from pr_review_action.core.github_context import event_from_payload, load_event


@pytest.fixture
def pull_request_payload():
    return {
        "action": "opened",
        "number": 7,
        "pull_request": {"number": 7, "head": {"sha": "abc123"}},
        "repository": {"name": "repo", "owner": {"login": "octo"}},
    }


@pytest.mark.unit
def test_event_from_pull_request_payload(pull_request_payload):
    event = event_from_payload("pull_request", pull_request_payload)

    assert event.kind == "pull_request.opened"
    assert event.repo_name == "octo/repo"
    assert event.pull_number == 7
    assert event.head_sha == "abc123"


@pytest.mark.unit
def test_repository_string_used_when_payload_lacks_repository():
    event = event_from_payload("push", {}, repository="octo/repo")

    assert event.kind == "push"
    assert (event.owner, event.repo) == ("octo", "repo")
    assert event.pull_number == 0
    assert event.head_sha == ""


@pytest.mark.unit
def test_load_event_reads_runner_environment(tmp_path, pull_request_payload):
    event_path = tmp_path / "event.json"
    event_path.write_text(json.dumps(pull_request_payload))

    event = load_event({
        "GITHUB_EVENT_NAME": "pull_request",
        "GITHUB_EVENT_PATH": str(event_path),
        "GITHUB_REPOSITORY": "octo/repo",
    })

    assert event.kind == "pull_request.opened"
    assert event.pull_number == 7


@pytest.mark.unit
def test_load_event_with_missing_event_file(tmp_path):
    event = load_event({
        "GITHUB_EVENT_NAME": "workflow_dispatch",
        "GITHUB_EVENT_PATH": str(tmp_path / "missing.json"),
        "GITHUB_REPOSITORY": "octo/repo",
    })

    assert event.kind == "workflow_dispatch"
    assert event.repo_name == "octo/repo"
