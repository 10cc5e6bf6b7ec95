"""
Review Generation Stage

Turns a file's diff into Markdown review text, either for the whole diff or
hunk by hunk.
"""

import asyncio
from typing import List, Optional

from pr_review_action.exceptions import (
    LanguageUndetectedException,
    NoDiffAvailableException,
    PRReviewException,
    UnknownGenerationFailureException,
)
from pr_review_action.models import ReviewRequest, ReviewResult, StageResult
from pr_review_action.services.diff import UnifiedDiffParser
from pr_review_action.services.language import LanguageDetector
from pr_review_action.services.llm import HUMAN_PROMPT_TEMPLATE, SYSTEM_PROMPT, ReviewGenerator
from pr_review_action.utils.logging import get_logger

logger = get_logger(__name__)


class ReviewGenerationStage:
    """
    Builds the review prompt from a file's diff and detected language and
    invokes the review generator.

    Generator calls are not retried here: the generator handles transient
    network failures itself, and content failures are not retryable.
    """

    def __init__(
        self,
        generator: ReviewGenerator,
        language_detector: Optional[LanguageDetector] = None,
        diff_parser: Optional[UnifiedDiffParser] = None,
        system_prompt: str = SYSTEM_PROMPT,
        human_prompt_template: str = HUMAN_PROMPT_TEMPLATE,
    ):
        self.generator = generator
        self.language_detector = language_detector or LanguageDetector()
        self.diff_parser = diff_parser or UnifiedDiffParser()
        self.system_prompt = system_prompt
        self.human_prompt_template = human_prompt_template

    async def review_file(self, request: ReviewRequest) -> StageResult[ReviewResult]:
        """Review a file's whole diff in one generator call."""
        try:
            lang = self._resolve_language(request)
            result = await self._review_diff(request.filename, lang, request.patch)
        except PRReviewException as e:
            logger.warning(f"Review of {request.filename} failed: {e.message}")
            return StageResult.failure(e)

        return StageResult.success(result)

    async def review_file_by_chunk(self, request: ReviewRequest) -> StageResult[List[ReviewResult]]:
        """
        Review each hunk of a file's diff independently.

        Hunk reviews run concurrently; results are in hunk order.
        """
        try:
            lang = self._resolve_language(request)
            hunks = self.diff_parser.parse_hunks(request.patch, request.filename)

            logger.info(f"Reviewing {request.filename} in {len(hunks)} chunks")
            outcomes = await asyncio.gather(
                *(self._review_diff(request.filename, lang, hunk.content) for hunk in hunks),
                return_exceptions=True,
            )

            for outcome in outcomes:
                if isinstance(outcome, BaseException):
                    raise outcome
        except PRReviewException as e:
            logger.warning(f"Chunked review of {request.filename} failed: {e.message}")
            return StageResult.failure(e)

        return StageResult.success(list(outcomes))

    def _resolve_language(self, request: ReviewRequest) -> str:
        if not request.patch:
            raise NoDiffAvailableException(request.filename)

        lang = self.language_detector.detect(request.filename)
        if lang is None:
            raise LanguageUndetectedException(request.filename)
        return lang

    async def _review_diff(self, filename: str, lang: str, diff: str) -> ReviewResult:
        logger.info(f"Generating review for {filename} ({lang})")
        try:
            text = await self.generator.generate(
                self.system_prompt,
                self.human_prompt_template,
                {"lang": lang, "diff": diff},
            )
            return ReviewResult(text=text)
        except Exception as e:
            raise UnknownGenerationFailureException(filename, str(e) or type(e).__name__) from e
