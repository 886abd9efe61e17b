"""
Title normalizer shared by every guess-matching and duplicate-detection path.
"""
from __future__ import annotations

import re

_LEADING_ARTICLE = re.compile(r"^(the|a|an)\s+")
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def _normalize_once(s: str) -> str:
    s = s.lower().strip()
    s = _LEADING_ARTICLE.sub("", s, count=1)
    s = _NON_ALNUM.sub("", s)
    s = _WHITESPACE.sub(" ", s)
    return s.strip()


def normalize_title(title: str) -> str:
    """Lowercase, drop one leading article, remove punctuation, collapse spaces.

    ASCII only: anything outside [a-z0-9 whitespace] left after lowercasing
    is removed, so accented letters disappear rather than being folded.

    The pass is repeated until the output stops changing. For ordinary
    titles that is a single pass; inputs like "The The Wire" or
    "The .The Wire" would otherwise normalize to a string that still starts
    with an article.
    """
    if not title or not isinstance(title, str):
        return ""
    s = _normalize_once(title)
    while True:
        again = _normalize_once(s)
        if again == s:
            return s
        s = again
