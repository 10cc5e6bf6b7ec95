"""Anthropic Claude review generator built on LangChain."""

from typing import Any, Dict, Optional

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from .base_client import ReviewGenerator
from pr_review_action.utils.logging import get_logger

logger = get_logger(__name__)


class ClaudeClient(ReviewGenerator):
    """
    Wrapper for Claude via ``langchain-anthropic``.

    Transient API failures are retried by the Anthropic SDK itself
    (``max_retries``); anything that still fails is raised to the caller.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-sonnet-20241022",
        max_tokens: int = 4096,
        temperature: float = 0.0,
        timeout: float = 120.0,
        max_retries: int = 2,
        llm: Optional[BaseChatModel] = None,
    ):
        super().__init__(model, temperature, max_tokens)

        self.llm = llm if llm is not None else ChatAnthropic(
            model=model,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            max_retries=max_retries,
        )

    @property
    def provider_name(self) -> str:
        """Return provider name."""
        return "claude"

    async def generate(
        self,
        system_prompt: str,
        human_prompt_template: str,
        params: Dict[str, Any],
    ) -> str:
        prompt = ChatPromptTemplate.from_messages([
            ("system", system_prompt),
            ("human", human_prompt_template),
        ])
        chain = prompt | self.llm | StrOutputParser()

        logger.debug(f"Invoking {self.model} with params {sorted(params)}")
        try:
            text = await chain.ainvoke(params)
        except Exception as e:
            logger.error(f"Claude API error: {e}", exc_info=True)
            raise

        logger.info(f"Received {len(text)} characters from {self.model}")
        return text
