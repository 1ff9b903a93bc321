# ============================================================================
# email_body_parser/eml_builder.py
# ============================================================================
"""
Builds the minimal RFC 822 message stored for messages that arrive as
already-split fields (sender, recipient, subject, text, html) rather than as a
raw MIME stream. The output parses back through EmailBodyParser.
"""

import uuid
from email.utils import formatdate
from typing import Optional

CRLF = '\r\n'


def build_minimal_eml(
    sender: str,
    mailbox: str,
    subject: str,
    text: str = '',
    html: str = '',
    boundary: Optional[str] = None,
    date: Optional[str] = None,
) -> str:
    """Return a CRLF-delimited message: multipart/alternative when html is given, else text/plain."""
    date = date or formatdate(usegmt=True)
    head = [
        f"From: <{sender}>",
        f"To: <{mailbox}>",
        f"Subject: {subject}",
        f"Date: {date}",
        'MIME-Version: 1.0',
    ]

    if not html:
        lines = head + [
            'Content-Type: text/plain; charset="utf-8"',
            'Content-Transfer-Encoding: 8bit',
            '',
            text or '',
            '',
        ]
        return CRLF.join(lines)

    boundary = boundary or f"mf-{uuid.uuid4()}"
    lines = head + [
        f'Content-Type: multipart/alternative; boundary="{boundary}"',
        '',
        f"--{boundary}",
        'Content-Type: text/plain; charset="utf-8"',
        'Content-Transfer-Encoding: 8bit',
        '',
        text or '',
        f"--{boundary}",
        'Content-Type: text/html; charset="utf-8"',
        'Content-Transfer-Encoding: 8bit',
        '',
        html,
        f"--{boundary}--",
        '',
    ]
    return CRLF.join(lines)
