# ============================================================================
# email_body_parser/extractors/verification_code.py
# ============================================================================
"""
Keyword-anchored verification code extraction.

The subject is searched first with a tight window, then the body (stripped
HTML followed by the plain text) with a tight window, then the body with a
loose window whose candidates must also pass the false-positive filter.
There is no bare-digit fallback here; see preview_code for the
looser variant used for list previews.
"""

import logging
from typing import Any, Dict, List, Optional

from ..converters import strip_html
from ..interfaces import CodeExtractor
from ..models import ExtractionContext, as_extraction_context
from .false_positive import FalsePositiveFilter
from .rules import SOURCE_BODY, SOURCE_SUBJECT, CodeRule, build_window_rules, evaluate_rules


class VerificationCodeExtractor(CodeExtractor):
    """Extracts a 4-8 digit one-time code from subject and body."""

    def __init__(
        self,
        logger: logging.Logger,
        false_positive_filter: Optional[FalsePositiveFilter] = None,
        min_length: int = 4,
        max_length: int = 8,
        subject_window: int = 20,
        body_window: int = 30,
        loose_body_window: int = 80,
    ):
        self.logger = logger
        self.false_positive_filter = false_positive_filter or FalsePositiveFilter(logger)
        self.min_length = min_length
        self.max_length = max_length
        self.rules = self._build_rules(subject_window, body_window, loose_body_window)

    def _build_rules(self, subject_window: int, body_window: int, loose_body_window: int) -> List[CodeRule]:
        rules: List[CodeRule] = []
        rules += build_window_rules('subject', SOURCE_SUBJECT, subject_window,
                                    self.min_length, self.max_length)
        rules += build_window_rules('body', SOURCE_BODY, body_window,
                                    self.min_length, self.max_length)
        rules += build_window_rules('body_loose', SOURCE_BODY, loose_body_window,
                                    self.min_length, self.max_length, check_false_positive=True)
        return rules

    @staticmethod
    def build_sources(context: ExtractionContext) -> Dict[str, str]:
        body = f"{strip_html(context.html)} {context.text}".strip()
        return {SOURCE_SUBJECT: context.subject, SOURCE_BODY: body}

    def extract(self, context: Optional[Any] = None) -> str:
        context = as_extraction_context(context)
        sources = self.build_sources(context)
        if not any(sources.values()):
            return ''

        code, rule = evaluate_rules(
            self.rules,
            sources,
            self.min_length,
            self.max_length,
            self.false_positive_filter.is_false_positive,
        )
        if rule is not None:
            self.logger.debug(f"Verification code found by rule {rule.name}")
        return code
