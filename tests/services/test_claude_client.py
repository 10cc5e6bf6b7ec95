import pytest
from langchain_core.language_models import FakeListChatModel

from pr_review_action.services.llm import HUMAN_PROMPT_TEMPLATE, SYSTEM_PROMPT, ClaudeClient


@pytest.mark.asyncio
async def test_generate_returns_model_text():
    client = ClaudeClient(api_key="sk-test", llm=FakeListChatModel(responses=["Consider a guard clause."]))

    text = await client.generate(SYSTEM_PROMPT, HUMAN_PROMPT_TEMPLATE, {"lang": "Python", "diff": "+x = 1"})

    assert text == "Consider a guard clause."
    assert client.provider_name == "claude"


@pytest.mark.asyncio
async def test_generate_raises_when_prompt_params_missing():
    client = ClaudeClient(api_key="sk-test", llm=FakeListChatModel(responses=["unused"]))

    with pytest.raises(KeyError):
        await client.generate(SYSTEM_PROMPT, HUMAN_PROMPT_TEMPLATE, {"lang": "Python"})


@pytest.mark.unit
def test_human_prompt_has_language_and_diff_placeholders():
    assert "{lang}" in HUMAN_PROMPT_TEMPLATE
    assert "{diff}" in HUMAN_PROMPT_TEMPLATE
