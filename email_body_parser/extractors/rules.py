# ============================================================================
# email_body_parser/extractors/rules.py
# ============================================================================
"""
Rule table and evaluation loop for keyword-anchored code extraction.

A rule is data: which corpus it searches, the compiled pattern whose first
group captures the candidate, and whether candidates go through the
false-positive filter. New keywords or locales only touch the constants or
the rule list, never the loop.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple


SOURCE_SUBJECT = 'subject'
SOURCE_BODY = 'body'

KEYWORDS = [
    r'verification',
    r'one[-\s]?time',
    r'two[-\s]?factor',
    r'2fa',
    r'security',
    r'auth',
    r'login',
    r'confirm',
    r'code',
    r'otp',
    r'验证码',
    r'校验码',
    r'驗證碼',
    r'確認碼',
    r'認證碼',
    r'認証コード',
    r'인증코드',
    r'코드',
]

KEYWORD_PATTERN = '(?:' + '|'.join(KEYWORDS) + ')'

# NBSP, whitespace, hyphen, en/em dash, underscore, dot, middle dots, bullets, apostrophes
SEPARATOR_CLASS = "[\\u00a0\\s\\-\\u2013\\u2014_.\\u00b7\\u2022\\u2219\\u2027'\\u2018\\u2019]"

_NON_DIGIT_RE = re.compile(r'[^0-9]+')


@dataclass(frozen=True)
class CodeRule:
    name: str
    source: str
    pattern: re.Pattern
    check_false_positive: bool = False


def code_chunk_pattern(min_len: int, max_len: int) -> str:
    """Capture group for min_len..max_len digits with optional single separators between them."""
    return f"([0-9](?:{SEPARATOR_CLASS}?[0-9]){{{min_len - 1},{max_len - 1}}})"


def build_window_rules(name: str, source: str, window: int, min_len: int, max_len: int,
                       check_false_positive: bool = False) -> List[CodeRule]:
    """Keyword-then-digits and digits-then-keyword rules within `window` non-digit chars."""
    chunk = code_chunk_pattern(min_len, max_len)
    gap = f"[^\\n\\r0-9]{{0,{window}}}"
    forward = f"{KEYWORD_PATTERN}{gap}(?<![0-9]){chunk}(?![0-9])"
    backward = f"(?<![0-9]){chunk}(?![0-9]){gap}{KEYWORD_PATTERN}"
    return [
        CodeRule(f"{name}_keyword_first", source, re.compile(forward, re.IGNORECASE), check_false_positive),
        CodeRule(f"{name}_digits_first", source, re.compile(backward, re.IGNORECASE), check_false_positive),
    ]


def normalize_digits(candidate: str, min_len: int, max_len: int) -> str:
    """Strip everything but digits; return '' when the count falls outside [min_len, max_len]."""
    digits = _NON_DIGIT_RE.sub('', candidate or '')
    if min_len <= len(digits) <= max_len:
        return digits
    return ''


def evaluate_rules(
    rules: Iterable[CodeRule],
    sources: Dict[str, str],
    min_len: int,
    max_len: int,
    is_false_positive: Optional[Callable[[str, str], bool]] = None,
) -> Tuple[str, Optional[CodeRule]]:
    """Return (code, rule) for the first rule yielding an accepted candidate, else ('', None)."""
    for rule in rules:
        corpus = sources.get(rule.source, '')
        if not corpus:
            continue
        match = rule.pattern.search(corpus)
        if not match:
            continue
        code = normalize_digits(match.group(1), min_len, max_len)
        if not code:
            continue
        if rule.check_false_positive and is_false_positive and is_false_positive(code, corpus):
            continue
        return code, rule
    return '', None
