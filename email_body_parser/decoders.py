# ============================================================================
# email_body_parser/decoders.py
# ============================================================================
"""
Transfer-encoding and charset decoding for MIME leaf parts.

Payloads are handled as bytes end-to-end: the transfer decoder produces raw
bytes and the charset normalizer turns them into text exactly once. Every
step falls back to the pre-decode value instead of raising.
"""

import base64
import binascii
import codecs
import logging
import quopri
import re
from typing import Optional

import chardet

from .headers import get_charset
from .interfaces import ContentNormalizer


_WHITESPACE_RE = re.compile(r'\s+')


def text_to_bytes(text: str) -> bytes:
    """Recover the byte payload of text that was decoded upstream.

    Text made only of code points <= 0xFF is treated as bytes carried in a
    string (latin-1 view); anything else is re-encoded as UTF-8.
    """
    try:
        return text.encode('latin-1')
    except UnicodeEncodeError:
        return text.encode('utf-8', errors='replace')


class TransferDecoder:
    """Reverses Content-Transfer-Encoding (base64, quoted-printable, identity)."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def decode_bytes(self, body: str, transfer_encoding: str) -> Optional[bytes]:
        """Decode the body to bytes.

        Returns None when the body is identity-encoded or could not be decoded,
        in which case the caller keeps the original text.
        """
        encoding = (transfer_encoding or '').strip().lower()
        body = body or ''

        if encoding == 'base64':
            return self._decode_base64(body)
        if encoding == 'quoted-printable':
            return self._decode_quoted_printable(body)
        return None

    def decode_text(self, body: str, transfer_encoding: str) -> str:
        """Decode the body and read the result as UTF-8 (invalid sequences replaced)."""
        data = self.decode_bytes(body, transfer_encoding)
        if data is None:
            return body or ''
        return data.decode('utf-8', errors='replace')

    def _decode_base64(self, body: str) -> Optional[bytes]:
        cleaned = _WHITESPACE_RE.sub('', body)
        cleaned += '=' * (-len(cleaned) % 4)
        try:
            return base64.b64decode(cleaned, validate=True)
        except (binascii.Error, ValueError) as e:
            self.logger.debug(f"Base64 decode failed, keeping body as-is: {e}")
            return None

    def _decode_quoted_printable(self, body: str) -> Optional[bytes]:
        try:
            return quopri.decodestring(text_to_bytes(body))
        except (binascii.Error, ValueError) as e:
            self.logger.debug(f"Quoted-printable decode failed, keeping body as-is: {e}")
            return None


class CharsetNormalizer(ContentNormalizer):
    """Decodes payloads under the charset declared in Content-Type."""

    UTF8_CHARSETS = {'', 'utf-8', 'utf8', 'us-ascii'}

    # Labels that mail clients emit for what is really the wider encoding
    CHARSET_ALIASES = {
        'gb2312': 'gb18030',
        'gbk': 'gb18030',
        'x-gbk': 'gb18030',
        'iso-8859-1': 'cp1252',
        'iso8859-1': 'cp1252',
        'latin1': 'cp1252',
        'latin-1': 'cp1252',
        'ks_c_5601-1987': 'cp949',
        'x-sjis': 'shift_jis',
    }

    def __init__(self, logger: logging.Logger, detect_unknown_charset: bool = False,
                 min_confidence: float = 0.5):
        self.logger = logger
        self.detect_unknown_charset = detect_unknown_charset
        self.min_confidence = min_confidence

    def resolve_codec(self, charset: str) -> Optional[str]:
        """Map a declared charset label to a Python text codec name, or None."""
        name = self.CHARSET_ALIASES.get(charset, charset)
        try:
            info = codecs.lookup(name)
        except LookupError:
            return None
        # Reject bytes-to-bytes codecs such as base64_codec or hex_codec
        if not getattr(info, '_is_text_encoding', True):
            return None
        return info.name

    def normalize_bytes(self, data: bytes, content_type: str) -> str:
        charset = get_charset(content_type)
        if charset in self.UTF8_CHARSETS:
            return data.decode('utf-8', errors='replace')

        codec = self.resolve_codec(charset)
        if codec is None:
            self.logger.debug(f"Unknown charset '{charset}'")
            return self._decode_unknown(data)

        try:
            return data.decode(codec, errors='replace')
        except (LookupError, UnicodeError) as e:
            self.logger.debug(f"Decoding as {codec} failed, using UTF-8: {e}")
            return data.decode('utf-8', errors='replace')

    def normalize_text(self, text: str, content_type: str) -> str:
        charset = get_charset(content_type)
        if not text or charset in self.UTF8_CHARSETS:
            return text or ''

        codec = self.resolve_codec(charset)
        if codec is None:
            self.logger.debug(f"Unknown charset '{charset}', leaving text unchanged")
            return text

        try:
            return text.encode('latin-1').decode(codec, errors='replace')
        except (LookupError, UnicodeError):
            # Text already holds characters beyond a single byte; it was decoded upstream
            return text

    def _decode_unknown(self, data: bytes) -> str:
        if self.detect_unknown_charset and data:
            guess = chardet.detect(data)
            encoding = guess.get('encoding')
            confidence = guess.get('confidence') or 0.0
            if encoding and confidence >= self.min_confidence:
                try:
                    self.logger.debug(f"chardet guessed {encoding} ({confidence:.2f})")
                    return data.decode(encoding, errors='replace')
                except (LookupError, UnicodeError) as e:
                    self.logger.debug(f"chardet guess {encoding} unusable: {e}")
        return data.decode('utf-8', errors='replace')
