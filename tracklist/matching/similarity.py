"""Edit-distance string similarity and the normalization used by all matchers."""

import re

import jellyfish

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lowercase, drop punctuation, collapse whitespace."""
    if not isinstance(text, str):
        raise TypeError(f"expected a string, got {type(text).__name__}")
    text = _NON_WORD.sub("", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Insertion/deletion/substitution distance, each with cost 1."""
    return jellyfish.levenshtein_distance(a, b)


def similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity in [0, 1]; 1.0 for two empty strings."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(a, b)) / longest


def contains(a: str, b: str) -> bool:
    """Either string is a substring of the other. Empty strings never count."""
    if not a or not b:
        return False
    return a in b or b in a


def containment_ratio(a: str, b: str) -> float:
    """Length of the shorter string over the longer one."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return min(len(a), len(b)) / longest
