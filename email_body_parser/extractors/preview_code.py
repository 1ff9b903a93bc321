# ============================================================================
# email_body_parser/extractors/preview_code.py
# ============================================================================
"""
Loose code extraction for message list previews.

Unlike VerificationCodeExtractor this accepts alphanumeric codes next to a
keyword and falls back to any bare 6-digit run, so it finds more codes and
more false positives. It is only consulted when no stored code exists.
"""

import logging
import re
from typing import Any, Optional

from ..converters import strip_html
from ..interfaces import CodeExtractor
from ..models import as_extraction_context
from .rules import normalize_digits


PREVIEW_KEYWORDS = (
    r'(?:验证码|校验码|激活码|one[-\s]?time\s+code|verification\s+code|security\s+code'
    r'|two[-\s]?factor|2fa|otp|login\s+code|code)'
)
_CONNECTOR = r'[^0-9A-Za-z]{0,20}(?:is(?:\s*[:：])?|[:：]|为|是)?[^0-9A-Za-z]{0,10}'
_NOT_FOLLOWED_BY_ALNUM = r'(?![0-9A-Za-z])'


class PreviewCodeExtractor(CodeExtractor):
    """Best-effort code finder with bare-digit fallbacks."""

    KEYWORD_DIGITS_RE = re.compile(
        PREVIEW_KEYWORDS + _CONNECTOR + r'([0-9]{4,8})' + _NOT_FOLLOWED_BY_ALNUM, re.IGNORECASE)
    KEYWORD_SEPARATED_RE = re.compile(
        PREVIEW_KEYWORDS + _CONNECTOR + r'((?:[0-9][ \t-]){3,7}[0-9])', re.IGNORECASE)
    KEYWORD_ALNUM_RE = re.compile(
        PREVIEW_KEYWORDS + r'[^0-9A-Za-z]{0,40}((?=[0-9A-Za-z]*[0-9])[0-9A-Za-z]{4,8})'
        + _NOT_FOLLOWED_BY_ALNUM, re.IGNORECASE)
    BARE_SIX_DIGITS_RE = re.compile(r'(?<![0-9])([0-9]{6})(?![0-9])')
    BARE_SEPARATED_RE = re.compile(r'([0-9](?:[ \t-][0-9]){5,7})')

    def __init__(self, logger: logging.Logger, min_length: int = 4, max_length: int = 8):
        self.logger = logger
        self.min_length = min_length
        self.max_length = max_length

    def extract(self, context: Optional[Any] = None) -> str:
        context = as_extraction_context(context)
        corpus = ' '.join(
            part for part in (context.subject, context.text, strip_html(context.html)) if part
        )
        return self.extract_from_text(corpus)

    def extract_from_text(self, text: str) -> str:
        if not text:
            return ''

        match = self.KEYWORD_DIGITS_RE.search(text)
        if match:
            return match.group(1)

        match = self.KEYWORD_SEPARATED_RE.search(text)
        if match:
            digits = normalize_digits(match.group(1), self.min_length, self.max_length)
            if digits:
                return digits

        match = self.KEYWORD_ALNUM_RE.search(text)
        if match:
            return match.group(1)

        match = self.BARE_SIX_DIGITS_RE.search(text)
        if match:
            self.logger.debug("Preview code taken from a bare 6-digit run")
            return match.group(1)

        match = self.BARE_SEPARATED_RE.search(text)
        if match:
            digits = normalize_digits(match.group(1), self.min_length, self.max_length)
            if digits:
                return digits

        return ''
