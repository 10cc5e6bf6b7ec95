"""Tests for the action entry point."""

import json
from unittest.mock import patch

import pytest

from pr_review_action import main
from pr_review_action.models import RunOutcome


@pytest.fixture
def action_env(monkeypatch, tmp_path):
    for name in ("GITHUB_TOKEN", "ANTHROPIC_API_KEY", "EXCLUDE_FILES", "LOG_LEVEL", "REVIEW_MODE", "PUBLISH_MODE"):
        monkeypatch.delenv(f"INPUT_{name}", raising=False)
    monkeypatch.setenv("INPUT_GITHUB_TOKEN", "ghs_x")
    monkeypatch.setenv("INPUT_ANTHROPIC_API_KEY", "sk-x")

    def write_event(event_name, payload):
        event_path = tmp_path / "event.json"
        event_path.write_text(json.dumps(payload))
        monkeypatch.setenv("GITHUB_EVENT_NAME", event_name)
        monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_path))
        monkeypatch.setenv("GITHUB_REPOSITORY", "octo/repo")

    return write_event


@pytest.mark.asyncio
async def test_run_reviews_pull_request(action_env, host_factory, make_pr_file, fake_generator):
    action_env("pull_request", {
        "action": "synchronize",
        "pull_request": {"number": 7, "head": {"sha": "abc123"}},
    })
    host = host_factory([make_pr_file("a.ts")])

    with patch.object(main, "build_host", return_value=host), \
            patch.object(main, "build_generator", return_value=fake_generator):
        outcome = await main.run()

    assert outcome.success
    assert [comment["path"] for comment in host.comments] == ["a.ts"]
    assert host.closed


@pytest.mark.asyncio
async def test_run_reads_inputs_and_event_from_same_environment(
    action_env, monkeypatch, host_factory, make_pr_file, fake_generator
):
    action_env("pull_request", {
        "action": "opened",
        "pull_request": {"number": 12, "head": {"sha": "def456"}},
    })
    monkeypatch.setenv("INPUT_EXCLUDE_FILES", "*.{lock,md}")
    host = host_factory([make_pr_file("yarn.lock"), make_pr_file("src/app.ts"), make_pr_file("README.md")])

    with patch.object(main, "build_host", return_value=host), \
            patch.object(main, "build_generator", return_value=fake_generator):
        outcome = await main.run()

    assert outcome.reviewed_files == ["src/app.ts"]
    assert host.list_calls[0]["pull_number"] == 12
    assert host.comments[0]["commit_id"] == "def456"


@pytest.mark.asyncio
async def test_run_rejects_push_event(action_env, fake_host, fake_generator):
    action_env("push", {"ref": "refs/heads/main"})

    with patch.object(main, "build_host", return_value=fake_host), \
            patch.object(main, "build_generator", return_value=fake_generator):
        outcome = await main.run()

    assert not outcome.success
    assert "push" in outcome.message
    assert fake_host.list_calls == []
    assert fake_host.closed


@pytest.mark.asyncio
async def test_run_fails_when_token_missing(action_env, monkeypatch):
    monkeypatch.setenv("INPUT_GITHUB_TOKEN", "")

    with patch.object(main, "build_host") as build_host:
        outcome = await main.run()

    assert not outcome.success
    assert outcome.message == "Input required and not supplied: github_token"
    build_host.assert_not_called()


@pytest.mark.unit
def test_cli_reports_failure_and_exits_nonzero(capsys):
    async def failing_run():
        return RunOutcome(success=False, message="This action only works on pull_request events. Got: push")

    with patch.object(main, "load_dotenv"), patch.object(main, "run", failing_run):
        with pytest.raises(SystemExit) as exc_info:
            main.cli()

    assert exc_info.value.code == 1
    assert "::error::This action only works on pull_request events. Got: push" in capsys.readouterr().out


@pytest.mark.unit
def test_cli_exits_zero_on_success(capsys):
    async def passing_run():
        return RunOutcome(success=True, message="Reviewed 1 file(s)")

    with patch.object(main, "load_dotenv"), patch.object(main, "run", passing_run):
        with pytest.raises(SystemExit) as exc_info:
            main.cli()

    assert exc_info.value.code == 0
    assert "::error::" not in capsys.readouterr().out


@pytest.mark.unit
def test_cli_reports_initialization_errors(capsys):
    async def broken_run():
        raise RuntimeError("bad credentials format")

    with patch.object(main, "load_dotenv"), patch.object(main, "run", broken_run):
        with pytest.raises(SystemExit) as exc_info:
            main.cli()

    assert exc_info.value.code == 1
    assert "::error::Initialization failed: bad credentials format" in capsys.readouterr().out


@pytest.mark.unit
def test_escape_command_value():
    assert main.escape_command_value("50%\nnext\rline") == "50%25%0Anext%0Dline"
