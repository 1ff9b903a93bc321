# ============================================================================
# email_body_parser/extractors/false_positive.py
# ============================================================================

import logging
import re


class FalsePositiveFilter:
    """Rejects digit runs that are more likely years, postal codes or street numbers.

    The year check is script-independent. The postal and street heuristics
    match ASCII Latin words only, so they never fire on CJK-only context.
    """

    YEAR_RANGE = (2000, 2099)
    ADDRESS_VOCABULARY = ('address', 'street', 'zip', 'postal')

    _WORD_THEN_ZIP_RE = re.compile(r'\b[a-z]{2,}\s+[0-9]{5}\b', re.IGNORECASE)

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def is_false_positive(self, digits: str, context: str = '') -> bool:
        if not digits:
            return True
        context = context or ''

        if self._is_year(digits):
            self.logger.debug(f"Rejected {digits}: looks like a year")
            return True

        if len(digits) == 5 and self._has_postal_context(context):
            self.logger.debug(f"Rejected {digits}: postal code context")
            return True

        if self._is_street_number(digits, context):
            self.logger.debug(f"Rejected {digits}: followed by a capitalized word")
            return True

        return False

    def _is_year(self, digits: str) -> bool:
        low, high = self.YEAR_RANGE
        return len(digits) == 4 and low <= int(digits) <= high

    def _has_postal_context(self, context: str) -> bool:
        lower = context.lower()
        if any(word in lower for word in self.ADDRESS_VOCABULARY):
            return True
        return bool(self._WORD_THEN_ZIP_RE.search(context))

    def _is_street_number(self, digits: str, context: str) -> bool:
        pattern = re.compile(r'\b' + re.escape(digits) + r'\s+[A-Z][a-z]+(?:,|\b)')
        return bool(pattern.search(context))
