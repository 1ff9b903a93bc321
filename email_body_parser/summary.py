# ============================================================================
# email_body_parser/summary.py
# ============================================================================

import logging
import re
from typing import Optional

from .converters import HtmlToTextConverter
from .extractors.preview_code import PreviewCodeExtractor
from .extractors.verification_code import VerificationCodeExtractor
from .headers import split_headers_and_body
from .models import ExtractionContext, MessageSummary
from .parser import EmailBodyParser

_WHITESPACE_RE = re.compile(r'\s+')


class MessageSummarizer:
    """Parses a raw message and derives what the mailbox listing stores for it."""

    def __init__(
        self,
        logger: logging.Logger,
        body_parser: EmailBodyParser,
        code_extractor: VerificationCodeExtractor,
        preview_code_extractor: PreviewCodeExtractor,
        html_converter: HtmlToTextConverter,
        preview_chars: int = 120,
    ):
        self.logger = logger
        self.body_parser = body_parser
        self.code_extractor = code_extractor
        self.preview_code_extractor = preview_code_extractor
        self.html_converter = html_converter
        self.preview_chars = preview_chars

    def parse_body(self, raw: Optional[str]):
        return self.body_parser.parse(raw)

    def extract_code(self, context) -> str:
        return self.code_extractor.extract(context)

    def build_preview(self, text: str, html: str) -> str:
        base = text or self.html_converter.convert(html)
        return _WHITESPACE_RE.sub(' ', base or '').strip()[:self.preview_chars]

    def summarize(self, raw: Optional[str], subject: str = '',
                  include_preview_code: bool = False) -> MessageSummary:
        """Parse the body, build the preview and pull the verification code.

        When no subject is given the raw top-level Subject header is used.
        The loose preview extractor only runs if requested and the strict
        extractor found nothing.
        """
        raw = raw or ''
        body = self.body_parser.parse(raw)

        if not subject:
            headers, _ = split_headers_and_body(raw)
            subject = headers.get('subject', '')

        context = ExtractionContext(subject=subject, text=body.text, html=body.html)
        code = self.code_extractor.extract(context)
        if not code and include_preview_code:
            code = self.preview_code_extractor.extract(context)
            if code:
                self.logger.debug("Using preview extractor result")

        summary = MessageSummary(
            text=body.text,
            html=body.html,
            preview=self.build_preview(body.text, body.html),
            verification_code=code,
        )
        self.logger.info(
            f"Summarized message: text={len(summary.text)} chars, html={len(summary.html)} chars, "
            f"code={'yes' if summary.verification_code else 'no'}"
        )
        return summary
