"""Tiered selection of the single best catalog candidate for a track.

Selection does not simply sort by confidence. Tiers are tried in order,
strictest first; within a tier candidates are tried in the order given
and the first one satisfying the tier predicate wins. From tier 2 on,
candidates whose title or artist is written in a different script than
the query (Latin vs CJK/Hangul) are skipped, so a same-script partial
match beats a transliterated look-alike.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..catalog.base import CatalogCandidate
from ..models import MatchResult, MusicTrack
from .language import is_language_mismatch
from .scorer import MatchScorer, is_unknown_artist
from .similarity import contains, normalize, similarity

logger = logging.getLogger(__name__)

FEATURING_MARKER = re.compile(r"\b(?:feat|featuring|ft|with)\b")

FALLBACK_TIER_NAME = "first_candidate_fallback"


@dataclass(frozen=True)
class MatchContext:
    """Normalized query/candidate strings and their precomputed relations."""

    candidate: CatalogCandidate
    query_title: str
    query_artist: str
    title: str
    artist: str
    title_exact: bool
    artist_exact: bool
    title_contained: bool
    artist_contained: bool
    title_similarity: float
    artist_similarity: float
    script_mismatch: bool

    @classmethod
    def build(
        cls, query_title: str, query_artist: str, candidate: CatalogCandidate
    ) -> "MatchContext":
        q_title = normalize(query_title)
        q_artist = normalize(query_artist)
        c_title = normalize(candidate.title)
        c_artist = normalize(candidate.artist)
        return cls(
            candidate=candidate,
            query_title=q_title,
            query_artist=q_artist,
            title=c_title,
            artist=c_artist,
            title_exact=q_title == c_title,
            artist_exact=q_artist == c_artist,
            title_contained=contains(q_title, c_title),
            artist_contained=contains(q_artist, c_artist),
            title_similarity=similarity(q_title, c_title),
            artist_similarity=similarity(q_artist, c_artist),
            script_mismatch=(
                is_language_mismatch(query_title, candidate.title)
                or is_language_mismatch(query_artist, candidate.artist)
            ),
        )


@dataclass(frozen=True)
class Tier:
    number: int
    name: str
    predicate: Callable[[MatchContext], bool]
    skip_script_mismatch: bool = False

    def accepts(self, ctx: MatchContext) -> bool:
        if self.skip_script_mismatch and ctx.script_mismatch:
            return False
        return self.predicate(ctx)


def _loose_artist(ctx: MatchContext) -> bool:
    if ctx.artist_similarity >= 0.5:
        return True
    return ctx.artist_contained and max(len(ctx.query_artist), len(ctx.artist)) >= 2


def _featuring_credit(ctx: MatchContext) -> bool:
    """The queried "artist" is a featured credit inside the catalog title."""
    if not ctx.query_title or not ctx.query_artist:
        return False
    return (
        ctx.query_title in ctx.title
        and ctx.query_artist in ctx.title
        and FEATURING_MARKER.search(ctx.title) is not None
    )


def unknown_artist_tiers(high: float = 0.8, low: float = 0.6) -> List[Tier]:
    return [
        Tier(1, "exact_title", lambda c: c.title_exact),
        Tier(2, "title_containment", lambda c: c.title_contained),
        Tier(3, "title_similarity_high", lambda c: c.title_similarity >= high),
        Tier(4, "title_similarity_low", lambda c: c.title_similarity >= low),
    ]


ARTIST_TIERS: List[Tier] = [
    Tier(1, "exact_title_and_artist", lambda c: c.title_exact and c.artist_exact),
    Tier(
        2,
        "exact_title_artist_containment",
        lambda c: c.title_exact and c.artist_contained,
        skip_script_mismatch=True,
    ),
    Tier(
        3,
        "exact_artist_title_containment",
        lambda c: c.artist_exact and c.title_contained,
        skip_script_mismatch=True,
    ),
    Tier(
        4,
        "title_containment_loose_artist",
        lambda c: c.title_contained and _loose_artist(c),
        skip_script_mismatch=True,
    ),
    Tier(
        5,
        "similar_title_and_artist",
        lambda c: c.title_similarity >= 0.8 and c.artist_similarity >= 0.7,
        skip_script_mismatch=True,
    ),
    Tier(
        6,
        "exact_title_similar_artist",
        lambda c: c.title_exact and c.artist_similarity >= 0.6,
        skip_script_mismatch=True,
    ),
    Tier(
        7,
        "exact_artist_similar_title",
        lambda c: c.artist_exact and c.title_similarity >= 0.7,
        skip_script_mismatch=True,
    ),
    Tier(
        8,
        "title_containment_weak_artist",
        lambda c: c.title_contained and (c.artist_similarity >= 0.4 or c.artist_contained),
        skip_script_mismatch=True,
    ),
    Tier(9, "featuring_credit", _featuring_credit, skip_script_mismatch=True),
]


class CandidateSelector:
    """Picks one candidate (or none) using the ordered tier lists above."""

    def __init__(self, config=None):
        matching_config = getattr(config, "matching", config)
        self.unknown_tiers = unknown_artist_tiers(
            high=getattr(matching_config, "unknown_title_high_similarity", 0.8),
            low=getattr(matching_config, "unknown_title_low_similarity", 0.6),
        )
        self.artist_tiers = list(ARTIST_TIERS)
        self.fallback_to_first = getattr(matching_config, "unknown_fallback_to_first", True)

    def select(
        self,
        query_title: str,
        query_artist: str,
        candidates: Sequence[CatalogCandidate],
        track: Optional[MusicTrack] = None,
    ) -> MatchResult:
        """Run the tiers and report which one decided."""
        if track is None:
            track = MusicTrack(
                title=query_title,
                artist=query_artist,
                original_text=f"{query_title} - {query_artist}",
            )
        result = MatchResult(track=track, candidates_considered=len(candidates))
        if not candidates:
            logger.info(f"No candidates for '{query_title}' by '{query_artist}'")
            return result

        unknown = is_unknown_artist(query_artist)
        tiers = self.unknown_tiers if unknown else self.artist_tiers
        contexts = [MatchContext.build(query_title, query_artist, c) for c in candidates]

        for tier in tiers:
            for ctx in contexts:
                if tier.accepts(ctx):
                    logger.debug(
                        f"Tier {tier.number} ({tier.name}) picked '{ctx.candidate.title}' by "
                        f"'{ctx.candidate.artist}' for '{query_title}' by '{query_artist}'"
                    )
                    result.candidate = ctx.candidate
                    result.tier = tier.number
                    result.tier_name = tier.name
                    return result

        if unknown and self.fallback_to_first:
            result.candidate = candidates[0]
            result.tier = len(self.unknown_tiers) + 1
            result.tier_name = FALLBACK_TIER_NAME
            logger.debug(
                f"Falling back to first candidate '{candidates[0].title}' for '{query_title}'"
            )
            return result

        logger.info(
            f"No tier matched '{query_title}' by '{query_artist}' "
            f"among {len(candidates)} candidates"
        )
        return result

    def select_best(
        self,
        query_title: str,
        query_artist: str,
        candidates: Sequence[CatalogCandidate],
    ) -> Optional[CatalogCandidate]:
        return self.select(query_title, query_artist, candidates).candidate


def find_best_match(
    track: MusicTrack, candidates: Sequence[CatalogCandidate]
) -> Optional[CatalogCandidate]:
    """Score ``candidates`` against ``track`` and return the selected one."""
    scored = [MatchScorer().annotate(track.title, track.artist, c) for c in candidates]
    return CandidateSelector().select(track.title, track.artist, scored, track=track).candidate
