# ============================================================================
# email_body_parser/__init__.py - Factory and DI setup
# ============================================================================

import logging
import sys
from typing import Any, Optional

from .config import BodyParserConfig, get_config
from .converters import HtmlToTextConverter, sniff_html, strip_html, text_to_html
from .decoders import CharsetNormalizer, TransferDecoder
from .eml_builder import build_minimal_eml
from .extractors.false_positive import FalsePositiveFilter
from .extractors.preview_code import PreviewCodeExtractor
from .extractors.verification_code import VerificationCodeExtractor
from .models import ExtractionContext, MessageSummary, ParsedBody, as_extraction_context
from .parser import EmailBodyParser
from .summary import MessageSummarizer

__all__ = [
    'create_body_parser',
    'parse_email_body', 'extract_verification_code', 'extract_preview_code',
    'summarize_message', 'build_minimal_eml',
    'EmailBodyParser', 'MessageSummarizer',
    'VerificationCodeExtractor', 'PreviewCodeExtractor', 'FalsePositiveFilter',
    'TransferDecoder', 'CharsetNormalizer', 'HtmlToTextConverter',
    'ParsedBody', 'ExtractionContext', 'MessageSummary', 'BodyParserConfig',
    'sniff_html', 'strip_html', 'text_to_html',
]


def _build_summarizer(logger: logging.Logger, cfg: BodyParserConfig) -> MessageSummarizer:
    transfer_decoder = TransferDecoder(logger)
    charset_normalizer = CharsetNormalizer(
        logger,
        detect_unknown_charset=cfg.DETECT_UNKNOWN_CHARSET,
        min_confidence=cfg.CHARDET_MIN_CONFIDENCE,
    )
    body_parser = EmailBodyParser(
        logger, transfer_decoder, charset_normalizer, max_depth=cfg.MAX_DEPTH
    )
    code_extractor = VerificationCodeExtractor(
        logger,
        FalsePositiveFilter(logger),
        min_length=cfg.MIN_CODE_LENGTH,
        max_length=cfg.MAX_CODE_LENGTH,
        subject_window=cfg.SUBJECT_WINDOW,
        body_window=cfg.BODY_WINDOW,
        loose_body_window=cfg.LOOSE_BODY_WINDOW,
    )
    preview_code_extractor = PreviewCodeExtractor(
        logger, min_length=cfg.MIN_CODE_LENGTH, max_length=cfg.MAX_CODE_LENGTH
    )
    return MessageSummarizer(
        logger,
        body_parser,
        code_extractor,
        preview_code_extractor,
        HtmlToTextConverter(logger),
        preview_chars=cfg.PREVIEW_CHARS,
    )


def create_body_parser(log_level: int = logging.INFO,
                       cfg: Optional[BodyParserConfig] = None) -> MessageSummarizer:
    """Factory function to create a fully configured MessageSummarizer."""
    # Setup logging
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logger = logging.getLogger(__name__)
    logger.setLevel(log_level)
    return _build_summarizer(logger, cfg or get_config())


_default_summarizer: Optional[MessageSummarizer] = None


def _get_default_summarizer() -> MessageSummarizer:
    global _default_summarizer
    if _default_summarizer is None:
        _default_summarizer = _build_summarizer(logging.getLogger(__name__), get_config())
    return _default_summarizer


def parse_email_body(raw: Optional[str]) -> ParsedBody:
    """Parse a raw message into its displayable ParsedBody(text, html)."""
    return _get_default_summarizer().parse_body(raw)


def extract_verification_code(context: Any = None, *, subject: str = '', text: str = '',
                              html: str = '') -> str:
    """Extract a 4-8 digit verification code; '' when none is found."""
    ctx = as_extraction_context(context, subject=subject, text=text, html=html)
    return _get_default_summarizer().extract_code(ctx)


def extract_preview_code(text: Optional[str]) -> str:
    """Loose code lookup used for list previews when no stored code exists."""
    return _get_default_summarizer().preview_code_extractor.extract_from_text(text or '')


def summarize_message(raw: Optional[str], subject: str = '',
                      include_preview_code: bool = False) -> MessageSummary:
    return _get_default_summarizer().summarize(raw, subject, include_preview_code)
