"""
Tracklist

Pulls the song list out of a YouTube video's pinned comment, description
or comments and matches each song against a music catalog.
"""

__version__ = "1.0.0"
__author__ = "Tracklist Team"

from typing import List, Sequence

from .config import TracklistConfig, load_config
from .extractor import CommentMusicExtractor
from .line_parser import LineParser
from .locator import MusicListLocator
from .matcher import TrackMatcher, analyze_results
from .matching.selector import find_best_match
from .models import MatchResult, MusicSearchResult, MusicTrack, TextBlock


def extract_tracks(text: str) -> List[MusicTrack]:
    """Parse every recognisable track line in ``text``."""
    return CommentMusicExtractor().extract(text)


def format_for_display(tracks: Sequence[MusicTrack]) -> List[str]:
    """``artist - title`` lines; the title alone when the artist is unknown."""
    return CommentMusicExtractor().format_music_tracks(tracks)


__all__ = [
    "CommentMusicExtractor",
    "LineParser",
    "MatchResult",
    "MusicListLocator",
    "MusicSearchResult",
    "MusicTrack",
    "TextBlock",
    "TrackMatcher",
    "TracklistConfig",
    "analyze_results",
    "extract_tracks",
    "find_best_match",
    "format_for_display",
    "load_config",
]
