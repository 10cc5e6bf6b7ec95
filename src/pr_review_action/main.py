import asyncio
import sys

from dotenv import load_dotenv

from pr_review_action.core.config import ActionConfig, load_config
from pr_review_action.core.github_context import load_event
from pr_review_action.exceptions import MissingConfigurationException
from pr_review_action.models import RunOutcome
from pr_review_action.services.github import PRApiClient, VersionControlHost
from pr_review_action.services.llm import ClaudeClient, ReviewGenerator
from pr_review_action.utils.logging import logger, set_log_level
from pr_review_action.workflows import PRReviewWorkflow


def escape_command_value(value: str) -> str:
    """Escape a value for a GitHub Actions workflow command."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_failed(message: str) -> None:
    """Report the run as failed to the Actions runner."""
    print(f"::error::{escape_command_value(message)}", flush=True)


def build_host(config: ActionConfig) -> VersionControlHost:
    return PRApiClient(token=config.github_token, base_url=config.github_api_url)


def build_generator(config: ActionConfig) -> ReviewGenerator:
    return ClaudeClient(
        api_key=config.anthropic_api_key,
        model=config.model_name,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )


async def run() -> RunOutcome:
    """Load inputs and the triggering event from the runner environment, then run one review."""
    try:
        config = load_config()
    except MissingConfigurationException as e:
        logger.error(e.message)
        return RunOutcome(success=False, message=e.message, error=e)

    set_log_level(config.log_level.value)
    event = load_event()

    logger.info(f"Starting PR review for {event.kind} on {event.repo_name}")
    host = build_host(config)
    try:
        generator = build_generator(config)
        workflow = PRReviewWorkflow.from_config(config, host, generator)
        return await workflow.run(event)
    finally:
        await host.close()


def cli() -> None:
    load_dotenv()
    try:
        outcome = asyncio.run(run())
    except Exception as e:
        logger.exception(f"Initialization failed: {e}")
        outcome = RunOutcome(success=False, message=f"Initialization failed: {e}", error=e)

    if not outcome.success:
        set_failed(outcome.message)
    sys.exit(outcome.exit_code)


if __name__ == "__main__":
    cli()
