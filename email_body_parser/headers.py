# ============================================================================
# email_body_parser/headers.py
# ============================================================================
"""
Header block handling for raw MIME entities.

The helpers here work on already-decoded text and never raise: malformed
header lines are skipped and missing parameters come back as empty strings.
"""

import re
from typing import Tuple

from .models import HeaderMap


_HEADER_LINE_RE = re.compile(r'^([^:]+):\s*(.*)$')
_BOUNDARY_RE = re.compile(r'boundary\s*=\s*"?([^";\r\n]+)"?', re.IGNORECASE)
_CHARSET_RE = re.compile(r'charset\s*=\s*"?([^";\r\n]+)', re.IGNORECASE)
_LINE_SPLIT_RE = re.compile(r'\r?\n')


def split_headers_and_body(raw: str) -> Tuple[HeaderMap, str]:
    """Split an entity at its first blank line into (headers, body)."""
    if not raw:
        return {}, ""

    idx = raw.find('\r\n\r\n')
    sep_len = 4
    if idx == -1:
        idx = raw.find('\n\n')
        sep_len = 2
    if idx == -1:
        return {}, raw

    return parse_headers(raw[:idx]), raw[idx + sep_len:]


def parse_headers(header_block: str) -> HeaderMap:
    """Parse a header block into a lower-cased name -> folded value map."""
    headers: HeaderMap = {}
    last_key = None

    for line in _LINE_SPLIT_RE.split(header_block or ""):
        if line[:1].isspace():
            # Folded continuation of the previous header
            if last_key is not None:
                headers[last_key] += ' ' + line.strip()
            continue

        match = _HEADER_LINE_RE.match(line)
        if not match:
            continue

        name = match.group(1).strip().lower()
        if not name or name in headers:
            # First occurrence wins; drop the duplicate and its continuations
            last_key = None
            continue

        headers[name] = match.group(2)
        last_key = name

    return headers


def get_boundary(content_type: str) -> str:
    if not content_type:
        return ""
    match = _BOUNDARY_RE.search(content_type)
    return match.group(1).strip() if match else ""


def get_charset(content_type: str) -> str:
    """Return the lower-cased charset parameter, or an empty string when undeclared."""
    if not content_type:
        return ""
    match = _CHARSET_RE.search(content_type)
    if not match:
        return ""
    return match.group(1).strip().strip("'").lower()
