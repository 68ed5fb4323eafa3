"""Writing-system checks used to reject transliterated false matches."""

import enum
import re

_LATIN = re.compile(r"[A-Za-z]")
_CJK = re.compile(
    "["
    "\u1100-\u11ff"  # Hangul Jamo
    "\u3040-\u309f"  # Hiragana
    "\u30a0-\u30ff"  # Katakana
    "\u3130-\u318f"  # Hangul Compatibility Jamo
    "\u3400-\u4dbf"  # CJK Extension A
    "\u4e00-\u9fff"  # CJK Unified Ideographs
    "\uac00-\ud7af"  # Hangul Syllables
    "]"
)


class Script(enum.Enum):
    LATIN = "latin"
    CJK = "cjk"
    MIXED = "mixed"


def classify_script(text: str) -> Script:
    """Classify ``text`` as mainly Latin, mainly CJK/Hangul, or mixed/neither."""
    has_latin = bool(_LATIN.search(text))
    has_cjk = bool(_CJK.search(text))
    if has_latin and not has_cjk:
        return Script.LATIN
    if has_cjk and not has_latin:
        return Script.CJK
    return Script.MIXED


def is_language_mismatch(a: str, b: str) -> bool:
    """True only when one side is Latin and the other CJK/Hangul."""
    scripts = {classify_script(a), classify_script(b)}
    return scripts == {Script.LATIN, Script.CJK}
