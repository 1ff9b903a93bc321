# ============================================================================
# email_body_parser/parser.py
# ============================================================================

from __future__ import annotations

import logging
from typing import Optional

from .converters import looks_like_markup, sniff_html, text_to_html
from .decoders import CharsetNormalizer, TransferDecoder
from .headers import get_boundary, split_headers_and_body
from .models import HeaderMap, MimeEntity, ParsedBody
from .multipart import split_multipart


class EmailBodyParser:
    """Resolves a raw RFC 822 / MIME message into a displayable text/html pair.

    Parts are visited depth-first, left-to-right; the first non-empty text and
    the first non-empty html found win. Nesting deeper than ``max_depth``
    contributes nothing, so adversarial input degrades to a partial result
    instead of an error.
    """

    def __init__(
        self,
        logger: logging.Logger,
        transfer_decoder: Optional[TransferDecoder] = None,
        charset_normalizer: Optional[CharsetNormalizer] = None,
        max_depth: int = 20,
    ) -> None:
        self.logger = logger
        self.transfer_decoder = transfer_decoder or TransferDecoder(logger)
        self.charset_normalizer = charset_normalizer or CharsetNormalizer(logger)
        self.max_depth = max_depth

    # ------------------------------------------------------------------
    def parse(self, raw: Optional[str], depth: int = 0) -> ParsedBody:
        """Parse a complete message (headers + blank line + body)."""
        if not raw:
            return ParsedBody()
        headers, body = split_headers_and_body(raw)
        return self.resolve_entity(headers, body, depth)

    # ------------------------------------------------------------------
    def resolve_entity(self, headers: HeaderMap, body: str, depth: int = 0) -> ParsedBody:
        if depth > self.max_depth:
            self.logger.warning(f"MIME nesting exceeds max depth {self.max_depth}, skipping entity")
            return ParsedBody()

        entity = MimeEntity(headers=headers or {}, body=body or "")
        if not entity.is_multipart:
            return self._resolve_leaf(entity)
        return self._resolve_multipart(entity, depth)

    # ------------------------------------------------------------------
    def decode_entity_body(self, entity: MimeEntity) -> str:
        """Transfer-decode then charset-decode a leaf entity's body."""
        if not entity.body:
            return ""
        data = self.transfer_decoder.decode_bytes(entity.body, entity.transfer_encoding)
        if data is None:
            return self.charset_normalizer.normalize_text(entity.body, entity.content_type)
        return self.charset_normalizer.normalize_bytes(data, entity.content_type)

    # ------------------------------------------------------------------
    def _resolve_leaf(self, entity: MimeEntity) -> ParsedBody:
        content_type = entity.content_type
        decoded = self.decode_entity_body(entity)

        if not content_type:
            guessed = sniff_html(decoded or entity.body)
            if guessed:
                self.logger.debug("Untyped entity sniffed as HTML")
                return ParsedBody(html=guessed)

        if 'text/html' in content_type:
            return ParsedBody(html=decoded)
        return ParsedBody(text=decoded)

    # ------------------------------------------------------------------
    def _resolve_multipart(self, entity: MimeEntity, depth: int) -> ParsedBody:
        result = ParsedBody()
        boundary = get_boundary(entity.raw_content_type)

        if boundary:
            parts = split_multipart(entity.body, boundary)
            self.logger.debug(f"Multipart at depth {depth}: {len(parts)} parts")
            for part in parts:
                part_result = self._resolve_part(part, depth)
                if part_result is None:
                    continue
                result = result.merge(part_result)
                if result.is_complete:
                    break
        else:
            self.logger.debug(f"Multipart at depth {depth} declares no boundary")

        if not result.html:
            html = sniff_html(entity.body)
            if not html and looks_like_markup(entity.body):
                html = entity.body
            if html:
                result = result.merge(ParsedBody(html=html))

        if not result.html and result.text:
            result = result.merge(ParsedBody(html=text_to_html(result.text)))

        return result

    # ------------------------------------------------------------------
    def _resolve_part(self, part: str, depth: int) -> Optional[ParsedBody]:
        headers, body = split_headers_and_body(part)
        content_type = headers.get('content-type', '').lower()

        if content_type.startswith('multipart/'):
            return self.resolve_entity(headers, body, depth + 1)
        if content_type.startswith('message/rfc822'):
            return self.parse(body, depth + 1)
        if 'rfc822-headers' in content_type:
            return None
        return self.resolve_entity(headers, body, depth + 1)
