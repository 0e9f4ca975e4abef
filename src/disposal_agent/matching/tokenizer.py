"""
Text normalization and tokenization for item matching.
"""
import re
from typing import List

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "of", "in", "on", "for", "to", "with",
    "is", "it", "at", "by", "from", "that", "this", "my", "your",
})

# Applied in order; first matching suffix wins
_PLURAL_RULES = [
    (re.compile(r"ies$"), "y"),
    (re.compile(r"ves$"), "f"),
    (re.compile(r"ses$"), "s"),
    (re.compile(r"s$"), ""),
]

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Lowercase, turn punctuation into spaces and collapse whitespace.

    "Metal/Keys" → "metal keys", "  Glass   Jar " → "glass jar"
    """
    lowered = _NON_ALNUM.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", lowered).strip()


def depluralize(word: str) -> str:
    if len(word) <= 3:
        return word
    for pattern, replacement in _PLURAL_RULES:
        if pattern.search(word):
            return pattern.sub(replacement, word)
    return word


def tokenize(text: str) -> List[str]:
    """
    Split text into comparable word tokens.

    Stop words are removed and plurals folded:
    "a bag of chips" → ["bag", "chip"]
    """
    return [
        depluralize(word)
        for word in normalize(text).split(" ")
        if word and word not in STOP_WORDS
    ]
