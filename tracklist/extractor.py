"""Extraction of song lists from whole comments and descriptions."""

import logging
import re
from typing import Iterable, List, Optional, Sequence

from .line_parser import DECORATIVE_GLYPHS, LineParser, clean_field
from .models import UNKNOWN_ARTIST, MusicTrack

logger = logging.getLogger(__name__)

# Boilerplate phrases (thanks / like / subscribe / notification bell /
# "skip the interlude" / "it helps the channel a lot")
INVALID_TRACK_PATTERNS = [
    re.compile(r"감사합니다"),
    re.compile(r"좋아요"),
    re.compile(r"구독"),
    re.compile(r"알림"),
    re.compile(r"간주\s*점프"),
    re.compile(r"제작에\s*큰\s*힘"),
]

MUSIC_LIST_INDICATORS = [
    re.compile(r"\d+\.\s*.+\s*-\s*.+"),  # numbered list
    re.compile(r"\d+:\d+[-–]\d+:\d+"),  # time range
    re.compile(r".+\s*-\s*.+"),  # dash separated pair
    re.compile(r".+\s*_\s*.+"),  # underscore separated pair
]


class CommentMusicExtractor:
    """Runs the line parser over a block of text and post-processes the tracks."""

    def __init__(self, config=None, line_parser: Optional[LineParser] = None):
        parser_config = getattr(config, "parser", config)
        self.line_parser = line_parser or LineParser(config)
        self.unknown_artist = getattr(parser_config, "unknown_artist", UNKNOWN_ARTIST)
        self.glyphs = tuple(getattr(parser_config, "decorative_glyphs", DECORATIVE_GLYPHS))
        self.min_field_length = getattr(parser_config, "min_field_length", 2)

    def extract(self, text: str) -> List[MusicTrack]:
        """Parse every non-empty line of ``text``, keeping source order."""
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")

        tracks = []
        for line in text.splitlines():
            if not line.strip():
                continue
            track = self.line_parser.parse_line(line)
            if track is not None:
                tracks.append(track)

        logger.debug(f"Extracted {len(tracks)} tracks from {len(text.splitlines())} lines")
        return tracks

    def remove_duplicate_tracks(self, tracks: Iterable[MusicTrack]) -> List[MusicTrack]:
        """Drop repeated title/artist pairs, first occurrence wins."""
        seen = set()
        unique = []
        for track in tracks:
            key = f"{track.title.lower()}-{track.artist.lower()}"
            if key in seen:
                continue
            seen.add(key)
            unique.append(track)
        return unique

    def is_valid_music_track(self, track: MusicTrack) -> bool:
        if (
            not track.title
            or not track.artist
            or len(track.title) < self.min_field_length
            or len(track.artist) < self.min_field_length
        ):
            return False

        full_text = f"{track.title} {track.artist}"
        return not any(pattern.search(full_text) for pattern in INVALID_TRACK_PATTERNS)

    def format_music_tracks(self, tracks: Iterable[MusicTrack]) -> List[str]:
        """Render valid tracks as ``artist - title`` (title alone for unknown artists)."""
        lines = []
        for track in tracks:
            if not self.is_valid_music_track(track):
                continue
            title = clean_field(track.title, self.glyphs)
            artist = clean_field(track.artist, self.glyphs)
            if artist == self.unknown_artist:
                lines.append(title)
            else:
                lines.append(f"{artist} - {title}")
        return lines

    def contains_music_list(self, text: str) -> bool:
        """Cheap pre-check used before running the full extractor."""
        return any(pattern.search(text) for pattern in MUSIC_LIST_INDICATORS)


def parse_music_from_comment(text: str) -> List[MusicTrack]:
    return CommentMusicExtractor().extract(text)


def remove_duplicate_tracks(tracks: Sequence[MusicTrack]) -> List[MusicTrack]:
    return CommentMusicExtractor().remove_duplicate_tracks(tracks)


def is_valid_music_track(track: MusicTrack) -> bool:
    return CommentMusicExtractor().is_valid_music_track(track)


def format_music_tracks(tracks: Sequence[MusicTrack]) -> List[str]:
    return CommentMusicExtractor().format_music_tracks(tracks)


def contains_music_list(text: str) -> bool:
    return CommentMusicExtractor().contains_music_list(text)
