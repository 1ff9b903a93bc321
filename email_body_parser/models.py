# ============================================================================
# email_body_parser/models.py
# ============================================================================

from dataclasses import dataclass, field, asdict
from typing import Dict, Any


HeaderMap = Dict[str, str]


@dataclass(frozen=True)
class MimeEntity:
    """One headers+body unit: a whole message or a single part of a multipart body."""
    headers: HeaderMap = field(default_factory=dict)
    body: str = ""

    @property
    def raw_content_type(self) -> str:
        return self.headers.get('content-type', '')

    @property
    def content_type(self) -> str:
        return self.raw_content_type.lower()

    @property
    def transfer_encoding(self) -> str:
        return self.headers.get('content-transfer-encoding', '').strip().lower()

    @property
    def is_multipart(self) -> bool:
        return self.content_type.startswith('multipart/')


@dataclass(frozen=True)
class ParsedBody:
    """Displayable body pair. Empty strings mean "not found"."""
    text: str = ""
    html: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.text and self.html)

    def merge(self, other: "ParsedBody") -> "ParsedBody":
        """First-found-wins merge: populated fields are never overwritten."""
        return ParsedBody(
            text=self.text or other.text,
            html=self.html or other.html,
        )


@dataclass(frozen=True)
class ExtractionContext:
    subject: str = ""
    text: str = ""
    html: str = ""


@dataclass(frozen=True)
class MessageSummary:
    text: str = ""
    html: str = ""
    preview: str = ""
    verification_code: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def as_extraction_context(value: Any = None, **overrides: Any) -> ExtractionContext:
    """Build an ExtractionContext from None, a mapping, or an existing context."""
    if isinstance(value, ExtractionContext):
        base = {'subject': value.subject, 'text': value.text, 'html': value.html}
    elif isinstance(value, dict):
        base = {key: value.get(key) for key in ('subject', 'text', 'html')}
    else:
        base = {}
    base.update({key: val for key, val in overrides.items() if val})
    return ExtractionContext(
        subject=str(base.get('subject') or ''),
        text=str(base.get('text') or ''),
        html=str(base.get('html') or ''),
    )
