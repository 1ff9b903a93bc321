# ============================================================================
# email_body_parser/interfaces.py
# ============================================================================

from abc import ABC, abstractmethod
from typing import Optional

from .models import ExtractionContext


class ContentNormalizer(ABC):
    """Interface for turning transfer-decoded payloads into text."""

    @abstractmethod
    def normalize_bytes(self, data: bytes, content_type: str) -> str:
        """Decode a transfer-decoded byte payload using the declared charset."""
        pass

    @abstractmethod
    def normalize_text(self, text: str, content_type: str) -> str:
        """Re-interpret identity-encoded text using the declared charset."""
        pass


class CodeExtractor(ABC):
    """Interface for verification code extraction strategies."""

    @abstractmethod
    def extract(self, context: Optional[ExtractionContext]) -> str:
        """Return the extracted code, or an empty string when none is found."""
        pass
