"""
Centralized configuration for the email body parser.
All tunables live here and can be overridden through EBP_* environment variables.
"""

import os
from typing import Dict, Any


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class BodyParserConfig:
    """Configuration for body parsing and code extraction with environment variable override support"""

    def __init__(self):
        # MIME traversal
        self.MAX_DEPTH = int(os.getenv('EBP_MAX_DEPTH', 20))
        self.DETECT_UNKNOWN_CHARSET = _env_flag('EBP_DETECT_UNKNOWN_CHARSET', 'false')
        self.CHARDET_MIN_CONFIDENCE = float(os.getenv('EBP_CHARDET_MIN_CONFIDENCE', 0.5))

        # Verification code extraction
        self.MIN_CODE_LENGTH = int(os.getenv('EBP_MIN_CODE_LENGTH', 4))
        self.MAX_CODE_LENGTH = int(os.getenv('EBP_MAX_CODE_LENGTH', 8))
        self.SUBJECT_WINDOW = int(os.getenv('EBP_SUBJECT_WINDOW', 20))
        self.BODY_WINDOW = int(os.getenv('EBP_BODY_WINDOW', 30))
        self.LOOSE_BODY_WINDOW = int(os.getenv('EBP_LOOSE_BODY_WINDOW', 80))

        # Message summary
        self.PREVIEW_CHARS = int(os.getenv('EBP_PREVIEW_CHARS', 120))

        # Logging
        self.VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
        self.DEFAULT_LOG_LEVEL = os.getenv('EBP_DEFAULT_LOG_LEVEL', 'INFO').upper()

    def get_config_dict(self) -> Dict[str, Any]:
        """Get all configuration values as a dictionary"""
        return {
            'max_depth': self.MAX_DEPTH,
            'detect_unknown_charset': self.DETECT_UNKNOWN_CHARSET,
            'chardet_min_confidence': self.CHARDET_MIN_CONFIDENCE,

            'min_code_length': self.MIN_CODE_LENGTH,
            'max_code_length': self.MAX_CODE_LENGTH,
            'subject_window': self.SUBJECT_WINDOW,
            'body_window': self.BODY_WINDOW,
            'loose_body_window': self.LOOSE_BODY_WINDOW,

            'preview_chars': self.PREVIEW_CHARS,

            'valid_log_levels': self.VALID_LOG_LEVELS,
            'default_log_level': self.DEFAULT_LOG_LEVEL,
        }


# Create a singleton instance
config = BodyParserConfig()


def get_config() -> BodyParserConfig:
    """Return the shared configuration instance."""
    return config
