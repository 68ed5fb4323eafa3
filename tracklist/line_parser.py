"""Line grammar for song lists found in YouTube comments and descriptions.

Each line of a comment is tried against an ordered list of rules. The
first rule whose structure matches the line decides the result, so the
order of ``LineParser.rules`` matters: long ``H:MM:SS`` prefixes come
before ``M:SS`` prefixes, which come before numbered lists, time ranges
and finally the generic ``artist - title`` fallback.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .models import UNKNOWN_ARTIST, MusicTrack

logger = logging.getLogger(__name__)

DECORATIVE_GLYPHS = ("♥",)

# Time tokens
_TIME = r"\d{1,2}:\d{2}(?::\d{2})?"
TIME_RANGE_PATTERN = re.compile(rf"(?<![\d:]){_TIME}\s*[-–]\s*{_TIME}")
TIME_PATTERN = re.compile(rf"(?<![\d:]){_TIME}")
EMBEDDED_TIME_PATTERN = re.compile(r"\d+:\d+")
NUMBERED_PREFIX = re.compile(r"^\d+\.")

# Lines carrying these markers are channel boilerplate, not track entries
GENERIC_FALLBACK_EXCLUSIONS = ("감사합니다", "좋아요", "Spotify")

# Right-hand sides that read like an artist name
KNOWN_ARTIST_PATTERNS = [
    re.compile(r"^[A-Z][a-z]+$"),  # Drake
    re.compile(r"^[A-Z][a-z]+\s+[A-Z][a-z]+$"),  # Justin Bieber
    re.compile(r"^[A-Z][a-z]+\s+\d+$"),  # Maroon 5
    re.compile(r"^The\s+[A-Z][a-z\s]+$"),  # The Weeknd
    re.compile(r"^[A-Z]{2,}$"),  # ZAYN, BTS
    re.compile(r"^[A-Z][a-z]+\s+[A-Z]\.[A-Z]\.$"),  # initials
    re.compile(r"^[A-Z][a-z]+\s+[A-Z][a-z]+\s+[A-Z][a-z]+$"),
    re.compile(r"^DJ\s+[A-Z][a-z]+$"),  # DJ Khaled
    re.compile(r"^\d+\s+[A-Z][a-z]+$"),  # 070 Shake
]

FEATURE_MARKERS = ("feat.", "ft.")


def clean_field(text: str, glyphs: Sequence[str] = DECORATIVE_GLYPHS) -> str:
    """Strip decorative glyphs and surrounding whitespace."""
    text = text.strip()
    for glyph in glyphs:
        text = text.replace(glyph, "")
    return text.strip()


def extract_timestamp(line: str) -> Optional[str]:
    """Return the first time range or time token in ``line``."""
    for pattern in (TIME_RANGE_PATTERN, TIME_PATTERN):
        match = pattern.search(line)
        if match:
            return match.group(0)
    return None


def has_feature_credit(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in FEATURE_MARKERS)


def looks_like_artist(candidate: str, other_side: str = "") -> bool:
    """Heuristic check whether ``candidate`` reads like an artist name."""
    if any(pattern.match(candidate) for pattern in KNOWN_ARTIST_PATTERNS):
        return True

    words = [word for word in re.split(r"[\s&,]+", candidate) if word]
    if len(words) <= 3 and "," not in candidate:
        return True

    other_is_complex = has_feature_credit(other_side) or any(
        char in other_side for char in "()[]"
    )
    return other_is_complex and len(words) <= 2


def looks_like_artist_list(text: str) -> bool:
    """True for comma / ampersand joined credits such as ``A, B & C``."""
    if "," not in text:
        return False
    if "&" in text:
        return True
    parts = text.split(",")
    return len(parts) > 1 and all(len(part.strip()) > 2 for part in parts)


@dataclass(frozen=True)
class LineRule:
    """One grammar rule: a structural pattern plus a builder for the match."""

    name: str
    pattern: re.Pattern
    build: Callable[["LineParser", re.Match, str], Optional[MusicTrack]]
    guard: Optional[Callable[[str], bool]] = None

    def matches(self, line: str) -> Optional[re.Match]:
        match = self.pattern.match(line)
        if match is None:
            return None
        if self.guard is not None and not self.guard(line):
            return None
        return match


def _no_separator(line: str) -> bool:
    return " - " not in line and " _ " not in line


def _generic_fallback_allowed(line: str) -> bool:
    if any(marker in line for marker in GENERIC_FALLBACK_EXCLUSIONS):
        return False
    return bool(NUMBERED_PREFIX.match(line) or EMBEDDED_TIME_PATTERN.search(line))


def _artist_then_title(parser: "LineParser", match: re.Match, line: str) -> Optional[MusicTrack]:
    return parser.make_track(
        title=match.group(3), artist=match.group(2), line=line, time_stamp=match.group(1)
    )


def _title_then_artist(parser: "LineParser", match: re.Match, line: str) -> Optional[MusicTrack]:
    return parser.make_track(
        title=match.group(2), artist=match.group(3), line=line, time_stamp=match.group(1)
    )


def _title_only(parser: "LineParser", match: re.Match, line: str) -> Optional[MusicTrack]:
    return parser.make_track(
        title=match.group(2), artist=parser.unknown_artist, line=line, time_stamp=match.group(1)
    )


def _disambiguated(parser: "LineParser", match: re.Match, line: str) -> Optional[MusicTrack]:
    left = parser.clean(match.group(2))
    right = parser.clean(match.group(3))
    if parser.is_artist_title_order(left, right):
        return parser.make_track(title=right, artist=left, line=line, time_stamp=match.group(1))
    return parser.make_track(title=left, artist=right, line=line, time_stamp=match.group(1))


def _numbered(parser: "LineParser", match: re.Match, line: str) -> Optional[MusicTrack]:
    return parser.make_track(
        title=match.group(2), artist=match.group(1), line=line, time_stamp=extract_timestamp(line)
    )


def _time_range(parser: "LineParser", match: re.Match, line: str) -> Optional[MusicTrack]:
    title = re.sub(r"\s*\(feat\..*?\)", "", match.group(2), count=1, flags=re.IGNORECASE)
    return parser.make_track(
        title=title, artist=match.group(3), line=line, time_stamp=match.group(1)
    )


def _generic(parser: "LineParser", match: re.Match, line: str) -> Optional[MusicTrack]:
    time_stamp = extract_timestamp(line)
    artist, title = match.group(1), match.group(2)
    if time_stamp:
        # Time tokens are position markers, not part of the names
        artist = artist.replace(time_stamp, " ")
        title = title.replace(time_stamp, " ")
    artist = NUMBERED_PREFIX.sub("", artist.strip())
    return parser.make_track(title=title, artist=artist, line=line, time_stamp=time_stamp)


DEFAULT_RULES: List[LineRule] = [
    LineRule(
        "long_time_artist_dash_title",
        re.compile(r"^(\d{1,2}:\d{2}:\d{2})\s+(.+?)\s*-\s*(.+?)$"),
        _artist_then_title,
    ),
    LineRule(
        "long_time_title_underscore_artist",
        re.compile(r"^(\d{1,2}:\d{2}:\d{2})\s+(.+?)\s*_\s*(.+?)$"),
        _title_then_artist,
    ),
    LineRule(
        "long_time_title_only",
        re.compile(r"^(\d{1,2}:\d{2}:\d{2})\s+(.+?)(?:\s*♥\s*)?$"),
        _title_only,
        guard=_no_separator,
    ),
    LineRule(
        "time_title_dash_artist",
        re.compile(r"^(\d{1,2}:\d{2})\s+(.+?)\s*-\s*(.+?)$"),
        _disambiguated,
    ),
    LineRule(
        "time_title_underscore_artist",
        re.compile(r"^(\d{1,2}:\d{2})\s+(.+?)\s*_\s*(.+?)$"),
        _title_then_artist,
    ),
    LineRule(
        "time_title_only",
        re.compile(r"^(\d{1,2}:\d{2})\s+(.+?)(?:\s*♥\s*)?$"),
        _title_only,
        guard=_no_separator,
    ),
    LineRule(
        "numbered_artist_dash_title",
        re.compile(r"^\d+\.\s*(.+?)\s*-\s*(.+?)(?:\s+\d+:\d+|$)"),
        _numbered,
    ),
    LineRule(
        "time_range_title_dash_artist",
        re.compile(r"^(\d+:\d+(?::\d+)?[-–]\d+:\d+(?::\d+)?)\s+(.+?)-(.+?)$"),
        _time_range,
    ),
    LineRule(
        "generic_artist_dash_title",
        re.compile(r"^(.+?)\s*[-–]\s*(.+)$"),
        _generic,
        guard=_generic_fallback_allowed,
    ),
]


class LineParser:
    """Turns single lines of comment text into MusicTrack objects."""

    def __init__(
        self,
        config=None,
        rules: Optional[List[LineRule]] = None,
    ):
        parser_config = getattr(config, "parser", config)
        self.unknown_artist = getattr(parser_config, "unknown_artist", UNKNOWN_ARTIST)
        self.glyphs = tuple(getattr(parser_config, "decorative_glyphs", DECORATIVE_GLYPHS))
        self.rules = list(rules) if rules is not None else list(DEFAULT_RULES)

    def clean(self, text: str) -> str:
        return clean_field(text, self.glyphs)

    def make_track(
        self, title: str, artist: str, line: str, time_stamp: Optional[str] = None
    ) -> Optional[MusicTrack]:
        """Build a track, or None when cleanup leaves an empty field."""
        title = self.clean(title)
        artist = self.clean(artist)
        if not title or not artist:
            return None
        return MusicTrack(title=title, artist=artist, original_text=line, time_stamp=time_stamp)

    def is_artist_title_order(self, left: str, right: str) -> bool:
        """Decide whether ``left - right`` should be read as ``artist - title``.

        A feature credit on the left marks it as the title. A left side made
        of several comma/ampersand joined names is read as the artist unless
        the right side is such a list as well. Everything else keeps the
        ``title - artist`` default.

        ``looks_like_artist`` does not change the result here. A right side
        that fails it only gets the line logged as ambiguous at DEBUG.
        """
        if has_feature_credit(left):
            return False
        if looks_like_artist_list(left) and not looks_like_artist_list(right):
            return True
        if not looks_like_artist(right, left):
            logger.debug(f"Ambiguous order for '{left} - {right}', keeping title - artist")
        return False

    def parse_line(self, line: str) -> Optional[MusicTrack]:
        """Parse one line; returns None when no rule matches."""
        if not isinstance(line, str):
            raise TypeError(f"line must be a string, got {type(line).__name__}")

        clean_line = line.strip()
        if not clean_line:
            return None

        for rule in self.rules:
            match = rule.matches(clean_line)
            if match is None:
                continue
            track = rule.build(self, match, clean_line)
            logger.debug(f"Rule '{rule.name}' matched: {clean_line!r} -> {track}")
            return track

        return None

    def match_rule(self, line: str) -> Optional[str]:
        """Name of the rule that would handle ``line``."""
        clean_line = line.strip()
        for rule in self.rules:
            if rule.matches(clean_line) is not None:
                return rule.name
        return None


def parse_line(line: str) -> Optional[MusicTrack]:
    """Parse one line with the default rule set."""
    return LineParser().parse_line(line)
