"""Review generator capability consumed by the review generation stage."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class ReviewGenerator(ABC):
    """
    Text-generation backend behind a narrow interface, so the model provider
    can change without touching orchestration logic.
    """

    def __init__(self, model: str, temperature: float = 0.0, max_tokens: int = 4096):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider name."""

    @abstractmethod
    async def generate(
        self,
        system_prompt: str,
        human_prompt_template: str,
        params: Dict[str, Any],
    ) -> str:
        """
        Render the prompt pair with ``params`` and return the generated text.

        ``human_prompt_template`` uses ``{name}`` placeholders filled from
        ``params``.
        """
