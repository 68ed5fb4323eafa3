"""Finds the text block holding a video's music list.

Sources are tried in priority order: pinned comments, then the video
description, then regular comments. The first block that looks like a
list and yields tracks wins. Casual regular comments often contain one
or two "song - artist" mentions, so that tier only accepts a block with
more than ``min_regular_comment_tracks`` tracks.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Iterable, List, Optional

from .extractor import CommentMusicExtractor
from .models import (
    SOURCE_PINNED_COMMENT,
    SOURCE_REGULAR_COMMENTS,
    SOURCE_VIDEO_DESCRIPTION,
    MusicSearchResult,
    TextBlock,
)
from .sources.base import TextSource
from .utils import truncate

logger = logging.getLogger(__name__)

SOURCE_PRIORITY = (SOURCE_PINNED_COMMENT, SOURCE_VIDEO_DESCRIPTION, SOURCE_REGULAR_COMMENTS)


class MusicListLocator:
    def __init__(
        self,
        text_source: TextSource,
        extractor: Optional[CommentMusicExtractor] = None,
        config=None,
    ):
        self.text_source = text_source
        self.extractor = extractor or CommentMusicExtractor(config)
        locator_config = getattr(config, "locator", None)
        self.min_regular_comment_tracks = getattr(locator_config, "min_regular_comment_tracks", 3)

    def _min_tracks(self, source: str) -> int:
        if source == SOURCE_REGULAR_COMMENTS:
            return self.min_regular_comment_tracks
        return 0

    def _fetcher(self, source: str) -> Callable[[str], Awaitable[List[TextBlock]]]:
        async def description(video_id: str) -> List[TextBlock]:
            block = await self.text_source.fetch_description(video_id)
            return [block] if block is not None else []

        return {
            SOURCE_PINNED_COMMENT: self.text_source.fetch_pinned_comments,
            SOURCE_VIDEO_DESCRIPTION: description,
            SOURCE_REGULAR_COMMENTS: self.text_source.fetch_comments,
        }[source]

    async def _fetch_tier(self, source: str, video_id: str) -> List[TextBlock]:
        try:
            return list(await self._fetcher(source)(video_id))
        except Exception as e:
            logger.warning(f"Could not fetch {source} for {video_id}: {e}")
            return []

    def search_blocks(self, blocks: Iterable[TextBlock]) -> MusicSearchResult:
        """First block holding a music list, honouring each tier's track minimum."""
        for block in blocks:
            if not self.extractor.contains_music_list(block.text):
                continue
            tracks = self.extractor.extract(block.text)
            if len(tracks) > self._min_tracks(block.source):
                logger.info(f"Found {len(tracks)} tracks in {block.source}")
                return MusicSearchResult(
                    tracks=tracks,
                    source=block.source,
                    source_content=block.text,
                    total_found=len(tracks),
                )
            if tracks:
                logger.debug(
                    f"Skipping {block.source} block with only {len(tracks)} tracks: "
                    f"{truncate(block.text)}"
                )
        return MusicSearchResult()

    async def search_music_list(self, video_id: str) -> MusicSearchResult:
        """Walk the sources in priority order, stopping at the first list found."""
        for source in SOURCE_PRIORITY:
            blocks = await self._fetch_tier(source, video_id)
            result = self.search_blocks(blocks)
            if result.found:
                return result
            logger.debug(f"No music list in {source} for {video_id}")

        logger.info(f"No music list found for {video_id}")
        return MusicSearchResult()

    async def search_all_sources(self, video_id: str) -> Dict[str, MusicSearchResult]:
        """Search every tier concurrently and report each outcome separately."""
        tiers = await asyncio.gather(*(self._fetch_tier(s, video_id) for s in SOURCE_PRIORITY))
        return {
            source: self.search_blocks(blocks) for source, blocks in zip(SOURCE_PRIORITY, tiers)
        }
