"""Confidence scoring of one catalog candidate against a parsed track."""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List

from ..catalog.base import CatalogCandidate
from ..models import UNKNOWN_ARTIST
from .similarity import containment_ratio, contains, normalize, similarity

logger = logging.getLogger(__name__)


def is_unknown_artist(artist: str) -> bool:
    """Sentinel check; any artist mentioning "unknown" counts."""
    return artist == UNKNOWN_ARTIST or "unknown" in artist.lower()


@dataclass(frozen=True)
class MatchScore:
    is_exact: bool
    confidence: float


class MatchScorer:
    """Computes ``is_exact`` and ``confidence`` for a (query, candidate) pair."""

    def score(
        self,
        query_title: str,
        query_artist: str,
        candidate_title: str,
        candidate_artist: str,
    ) -> MatchScore:
        title = normalize(query_title)
        result_title = normalize(candidate_title)

        if is_unknown_artist(query_artist):
            return self._score_title_only(title, result_title)

        artist = normalize(query_artist)
        result_artist = normalize(candidate_artist)

        title_exact = title == result_title
        artist_exact = artist == result_artist
        title_contained = contains(title, result_title)
        artist_contained = contains(artist, result_artist)

        is_exact = (
            (title_exact and artist_exact)
            or (title_exact and artist_contained)
            or (title_contained and artist_exact)
        )

        title_sim = similarity(title, result_title)
        artist_sim = similarity(artist, result_artist)
        if title_contained:
            title_sim = max(title_sim, 0.9)
        if artist_contained:
            artist_sim = max(artist_sim, 0.95)

        weighted = title_sim * 0.6 + artist_sim * 0.4

        if (
            (title_exact and artist_exact)
            or (title_exact and artist_sim >= 0.9)
            or (artist_exact and title_sim >= 0.9)
        ):
            confidence = 1.0
        elif title_sim >= 0.8 and artist_sim >= 0.8:
            confidence = min(weighted + 0.1, 1.0)
        elif title_sim >= 0.9:
            confidence = title_sim * 0.7 + artist_sim * 0.3
        elif artist_sim >= 0.9:
            confidence = title_sim * 0.5 + artist_sim * 0.5
        else:
            confidence = weighted

        return MatchScore(is_exact=is_exact, confidence=_clamp(confidence))

    def _score_title_only(self, title: str, result_title: str) -> MatchScore:
        title_exact = title == result_title
        title_contained = contains(title, result_title)

        if title_exact:
            confidence = 0.95
        elif title_contained:
            confidence = max(0.8, containment_ratio(title, result_title) * 0.9)
        else:
            title_sim = similarity(title, result_title)
            confidence = title_sim * 0.9 if title_sim >= 0.8 else title_sim * 0.7

        return MatchScore(is_exact=title_exact or title_contained, confidence=_clamp(confidence))

    def annotate(self, query_title: str, query_artist: str, candidate: CatalogCandidate) -> CatalogCandidate:
        """Return a copy of ``candidate`` with ``is_exact``/``confidence`` filled in."""
        result = self.score(query_title, query_artist, candidate.title, candidate.artist)
        return replace(candidate, is_exact=result.is_exact, confidence=result.confidence)

    def annotate_all(
        self, query_title: str, query_artist: str, candidates: Iterable[CatalogCandidate]
    ) -> List[CatalogCandidate]:
        """Score every candidate and sort exact matches first, then by confidence."""
        scored = [self.annotate(query_title, query_artist, c) for c in candidates]
        # sort() is stable, so provider order breaks ties
        scored.sort(key=lambda c: (not c.is_exact, -c.confidence))
        return scored


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))
