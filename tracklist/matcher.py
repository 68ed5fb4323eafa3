"""Batch matching of parsed tracks against a music catalog."""

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Sequence

from tqdm import tqdm

from .catalog.base import CatalogProvider
from .models import MatchResult, MusicTrack
from .matching.query import AliasTable, build_search_query
from .matching.scorer import MatchScorer
from .matching.selector import CandidateSelector

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class TrackMatcher:
    """Searches the catalog for each track and picks one candidate per track.

    Tracks are searched one at a time with ``request_delay_seconds`` between
    searches. A failed search is recorded on that track's result and the
    batch carries on.
    """

    def __init__(
        self,
        catalog: CatalogProvider,
        scorer: Optional[MatchScorer] = None,
        selector: Optional[CandidateSelector] = None,
        config=None,
        aliases: Optional[AliasTable] = None,
    ):
        self.catalog = catalog
        self.scorer = scorer or MatchScorer()
        self.selector = selector or CandidateSelector(config)
        self.config = config

        scraping_config = getattr(config, "scraping", None)
        self.request_delay = getattr(scraping_config, "request_delay_seconds", 0.3)
        ui_config = getattr(config, "ui", None)
        self.show_progress_bar = getattr(ui_config, "show_progress_bar", False)

        if aliases is None:
            alias_file = getattr(getattr(config, "matching", None), "alias_file", None)
            aliases = AliasTable.from_yaml(alias_file) if alias_file else AliasTable()
        self.aliases = aliases

    async def match_track(self, track: MusicTrack) -> MatchResult:
        query = build_search_query(track.title, track.artist, self.aliases)
        candidates = await self.catalog.search(query)
        scored = self.scorer.annotate_all(track.title, track.artist, candidates)
        return self.selector.select(track.title, track.artist, scored, track=track)

    async def match_tracks(
        self,
        tracks: Sequence[MusicTrack],
        progress: Optional[ProgressCallback] = None,
    ) -> List[MatchResult]:
        """Match every track in order; results line up with ``tracks``."""
        total = len(tracks)
        results: List[MatchResult] = []
        bar = tqdm(total=total, desc="Matching tracks", unit="track") if self.show_progress_bar else None

        try:
            for index, track in enumerate(tracks):
                if index > 0 and self.request_delay > 0:
                    await asyncio.sleep(self.request_delay)

                try:
                    result = await self.match_track(track)
                except Exception as e:
                    logger.warning(f"Search failed for '{track.label}': {e}")
                    result = MatchResult(track=track, error=str(e))
                results.append(result)

                if progress is not None:
                    progress(index + 1, total, track.label)
                if bar is not None:
                    bar.update(1)
        finally:
            if bar is not None:
                bar.close()

        summary = analyze_results(results)
        logger.info(
            f"Matched {summary['exact'] + summary['partial']}/{summary['total']} tracks "
            f"({summary['exact']} exact, {summary['failed']} failed)"
        )
        return results


def analyze_results(results: Sequence[MatchResult]) -> Dict:
    """Count exact, partial and unmatched results."""
    total = len(results)
    exact = sum(1 for r in results if r.is_exact)
    partial = sum(1 for r in results if r.matched and not r.is_exact)
    failed = sum(1 for r in results if r.error is not None)
    no_match = total - exact - partial
    return {
        "total": total,
        "exact": exact,
        "partial": partial,
        "no_match": no_match,
        "failed": failed,
        "match_rate": (exact + partial) / total if total else 0.0,
    }
