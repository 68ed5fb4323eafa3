"""Shared dataclasses for parsed tracks and search outcomes."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from .utils import parse_timestamp

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .catalog.base import CatalogCandidate

UNKNOWN_ARTIST = "Unknown Artist"

# Values for MusicSearchResult.source / TextBlock.source
SOURCE_PINNED_COMMENT = "pinned_comment"
SOURCE_VIDEO_DESCRIPTION = "video_description"
SOURCE_REGULAR_COMMENTS = "regular_comments"
SOURCE_NOT_FOUND = "not_found"


@dataclass(frozen=True)
class MusicTrack:
    """A song reference parsed from one line of text."""

    title: str
    artist: str
    original_text: str
    time_stamp: Optional[str] = None

    @property
    def has_known_artist(self) -> bool:
        return self.artist != UNKNOWN_ARTIST

    @property
    def start_seconds(self) -> Optional[int]:
        """Offset of the track in the video, if a timestamp was found."""
        if self.time_stamp is None:
            return None
        return parse_timestamp(self.time_stamp)

    @property
    def label(self) -> str:
        return f"{self.title} - {self.artist}"


@dataclass(frozen=True)
class TextBlock:
    """One plain-text comment or description supplied by a text source."""

    text: str
    source: str
    comment_id: Optional[str] = None
    is_pinned: bool = False


@dataclass
class MusicSearchResult:
    """Outcome of locating a music list for a video."""

    tracks: List[MusicTrack] = field(default_factory=list)
    source: str = SOURCE_NOT_FOUND
    source_content: Optional[str] = None
    total_found: int = 0

    @property
    def found(self) -> bool:
        return self.source != SOURCE_NOT_FOUND and bool(self.tracks)


@dataclass
class MatchResult:
    """Outcome of selecting a catalog candidate for one track."""

    track: MusicTrack
    candidate: Optional["CatalogCandidate"] = None
    tier: Optional[int] = None
    tier_name: str = ""
    candidates_considered: int = 0
    error: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.candidate is not None

    @property
    def is_exact(self) -> bool:
        return self.candidate is not None and self.candidate.is_exact
