# ============================================================================
# email_body_parser/multipart.py
# ============================================================================

import re
from typing import List


_LINE_SPLIT_RE = re.compile(r'\r?\n')


def split_multipart(body: str, boundary: str) -> List[str]:
    """Split a multipart body on its boundary into raw sub-part strings.

    Preamble lines before the first delimiter are discarded and anything after
    the closing ``--boundary--`` delimiter is ignored. A part is only emitted
    when a delimiter closes it, so a truncated trailing part is dropped, as
    are empty parts.
    Line endings in the returned parts are normalized to ``\\n``.
    """
    if not body or not boundary:
        return []

    delimiter = '--' + boundary
    end_delimiter = delimiter + '--'

    parts: List[str] = []
    current: List[str] = []
    in_part = False

    for raw_line in _LINE_SPLIT_RE.split(body):
        line = raw_line.strip()
        if line == delimiter:
            if in_part and current:
                parts.append('\n'.join(current))
            current = []
            in_part = True
            continue
        if line == end_delimiter:
            if in_part and current:
                parts.append('\n'.join(current))
            break
        if in_part:
            current.append(raw_line)

    return parts
