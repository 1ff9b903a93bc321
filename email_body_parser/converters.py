# ============================================================================
# email_body_parser/converters.py
# ============================================================================

import html
import logging
import re

import html2text


_SCRIPT_OPEN_RE = re.compile(r'<script\b[^>]*>', re.IGNORECASE)
_SCRIPT_CLOSE_RE = re.compile(r'</script\s*>', re.IGNORECASE)
_STYLE_OPEN_RE = re.compile(r'<style\b[^>]*>', re.IGNORECASE)
_STYLE_CLOSE_RE = re.compile(r'</style\s*>', re.IGNORECASE)
_TAG_RE = re.compile(r'<[^>]+>')
_WHITESPACE_RE = re.compile(r'\s+')
_OPEN_TAG_RE = re.compile(r'<\w+')
_CLOSE_TAG_RE = re.compile(r'</\w+>')


def _drop_blocks(text: str, open_re, close_re) -> str:
    """Replace each opening-tag..closing-tag block with a space.

    An opening tag with no closing tag after it ends the scan; the rest of
    the input is kept as is.
    """
    pieces = []
    pos = 0
    while True:
        opening = open_re.search(text, pos)
        if not opening:
            break
        closing = close_re.search(text, opening.end())
        if not closing:
            break
        pieces.append(text[pos:opening.start()])
        pieces.append(' ')
        pos = closing.end()
    pieces.append(text[pos:])
    return ''.join(pieces)


def sniff_html(raw: str) -> str:
    """Return the <html>...</html> (or <!doctype html>...</html>) span of raw, or ''."""
    if not raw:
        return ""
    lower = raw.lower()

    starts = [i for i in (lower.find('<html'), lower.find('<!doctype html')) if i != -1]
    if not starts:
        return ""
    start = min(starts)

    end = lower.rfind('</html>')
    if end == -1 or end < start:
        return ""
    return raw[start:end + len('</html>')]


def looks_like_markup(raw: str) -> bool:
    """True when raw contains at least one opening tag followed by a closing tag."""
    if not raw:
        return False
    opening = _OPEN_TAG_RE.search(raw)
    if not opening:
        return False
    gt = raw.find('>', opening.end())
    if gt == -1:
        return False
    return bool(_CLOSE_TAG_RE.search(raw, gt + 1))


def text_to_html(text: str) -> str:
    return f'<div style="white-space:pre-wrap">{html.escape(text or "")}</div>'


def strip_html(html_content: str) -> str:
    """Flatten HTML to a single-line plain-text approximation for searching."""
    if not html_content:
        return ""
    text = _drop_blocks(html_content, _SCRIPT_OPEN_RE, _SCRIPT_CLOSE_RE)
    text = _drop_blocks(text, _STYLE_OPEN_RE, _STYLE_CLOSE_RE)
    text = _TAG_RE.sub(' ', text)
    text = html.unescape(text)
    return _WHITESPACE_RE.sub(' ', text).strip()


class HtmlToTextConverter:
    """Converts HTML content to readable plain text."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def convert(self, html_content: str) -> str:
        """Convert HTML content to plain text using html2text."""
        if not html_content:
            return ""

        self.logger.debug(f"Converting HTML to text, input length: {len(html_content)}")
        h = html2text.HTML2Text()
        h.ignore_links = True
        h.ignore_images = True
        h.ignore_emphasis = True
        h.body_width = 0
        h.unicode_snob = True
        # html2text does not drop <script> bodies on its own
        cleaned = _drop_blocks(html_content, _SCRIPT_OPEN_RE, _SCRIPT_CLOSE_RE)
        return h.handle(cleaned).strip()
