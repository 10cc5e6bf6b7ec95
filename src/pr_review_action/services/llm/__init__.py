from .base_client import ReviewGenerator
from .claude_client import ClaudeClient
from .prompts import HUMAN_PROMPT_TEMPLATE, SYSTEM_PROMPT

__all__ = ["ReviewGenerator", "ClaudeClient", "HUMAN_PROMPT_TEMPLATE", "SYSTEM_PROMPT"]
