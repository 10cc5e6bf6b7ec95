"""
Unified Diff Parser

Splits a single file's unified diff patch (as returned in the ``patch`` field
of the pull request files API) into hunks.
"""

import re
from typing import List, Optional

from pr_review_action.exceptions import DiffParseFailureException
from pr_review_action.models import DiffHunk
from pr_review_action.utils.logging import get_logger

logger = get_logger(__name__)


class UnifiedDiffParser:
    """
    Parser for per-file unified diff patches.

    Each hunk keeps its ``@@ -a,b +c,d @@`` header as the first line of its
    content so it can be reviewed on its own.
    """

    def __init__(self):
        self.hunk_header_pattern = re.compile(r'^@@\s*-(\d+)(?:,(\d+))?\s*\+(\d+)(?:,(\d+))?\s*@@(.*)$')
        self.binary_file_pattern = re.compile(r'^Binary files? .* differ$', re.MULTILINE)

    def parse_hunks(self, patch: Optional[str], file_path: str = "<unknown>") -> List[DiffHunk]:
        """
        Parse a patch into hunks, in the order they appear.

        Args:
            patch: Raw unified diff for one file
            file_path: File the patch belongs to, used in error messages

        Returns:
            List of DiffHunk objects

        Raises:
            DiffParseFailureException: If the patch is empty, binary, or has no hunk header
        """
        if not patch:
            raise DiffParseFailureException(file_path, "empty patch")

        if self.binary_file_pattern.search(patch):
            raise DiffParseFailureException(file_path, "binary file diff")

        hunks: List[DiffHunk] = []
        header_match = None
        header_line = ""
        body: List[str] = []

        for line in patch.split('\n'):
            match = self.hunk_header_pattern.match(line)
            if match:
                if header_match:
                    hunks.append(self._build_hunk(header_match, header_line, body))
                header_match = match
                header_line = line
                body = []
            elif header_match:
                body.append(line)
            # lines before the first header (diff --git, ---, +++) are ignored

        if header_match:
            hunks.append(self._build_hunk(header_match, header_line, body))

        if not hunks:
            raise DiffParseFailureException(file_path)

        logger.debug(f"Parsed {len(hunks)} hunks for {file_path}")
        return hunks

    def _build_hunk(self, match: re.Match, header_line: str, body: List[str]) -> DiffHunk:
        # A trailing newline in the patch leaves one empty element
        while body and body[-1] == "":
            body = body[:-1]

        return DiffHunk(
            header=header_line,
            old_start=int(match.group(1)),
            old_count=int(match.group(2) or 1),
            new_start=int(match.group(3)),
            new_count=int(match.group(4) or 1),
            content='\n'.join([header_line] + body),
        )
