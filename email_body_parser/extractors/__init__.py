from .false_positive import FalsePositiveFilter
from .preview_code import PreviewCodeExtractor
from .rules import CodeRule, build_window_rules, evaluate_rules, normalize_digits
from .verification_code import VerificationCodeExtractor

__all__ = [
    'VerificationCodeExtractor', 'PreviewCodeExtractor',
    'FalsePositiveFilter',
    'CodeRule', 'build_window_rules', 'evaluate_rules', 'normalize_digits',
]
