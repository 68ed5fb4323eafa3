"""Unit tests for the source-priority music list search."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tests.fixtures.test_data import (
    SAMPLE_BOILERPLATE_COMMENT,
    SAMPLE_CASUAL_COMMENT,
    SAMPLE_DESCRIPTION,
    SAMPLE_PINNED_COMMENT,
    SAMPLE_REGULAR_COMMENT,
)
from tracklist.locator import MusicListLocator
from tracklist.models import (
    SOURCE_NOT_FOUND,
    SOURCE_PINNED_COMMENT,
    SOURCE_REGULAR_COMMENTS,
    SOURCE_VIDEO_DESCRIPTION,
    TextBlock,
)
from tracklist.sources.base import TextSource


class FakeTextSource(TextSource):
    """In-memory source; a tier set to an exception raises it when fetched."""

    def __init__(self, pinned=(), description=None, comments=()):
        super().__init__()
        self.pinned = pinned
        self.description = description
        self.comments = comments
        self.calls = []

    async def fetch_pinned_comments(self, video_id):
        self.calls.append(SOURCE_PINNED_COMMENT)
        if isinstance(self.pinned, Exception):
            raise self.pinned
        return [TextBlock(text=t, source=SOURCE_PINNED_COMMENT, is_pinned=True) for t in self.pinned]

    async def fetch_description(self, video_id):
        self.calls.append(SOURCE_VIDEO_DESCRIPTION)
        if isinstance(self.description, Exception):
            raise self.description
        if self.description is None:
            return None
        return TextBlock(text=self.description, source=SOURCE_VIDEO_DESCRIPTION)

    async def fetch_comments(self, video_id):
        self.calls.append(SOURCE_REGULAR_COMMENTS)
        if isinstance(self.comments, Exception):
            raise self.comments
        return [TextBlock(text=t, source=SOURCE_REGULAR_COMMENTS) for t in self.comments]


class TestSearchMusicList:
    """Test cases for MusicListLocator.search_music_list."""

    @pytest.mark.asyncio
    async def test_pinned_comment_wins(self):
        source = FakeTextSource(
            pinned=[SAMPLE_PINNED_COMMENT],
            description=SAMPLE_DESCRIPTION,
            comments=[SAMPLE_REGULAR_COMMENT],
        )

        result = await MusicListLocator(source).search_music_list("video123")

        assert result.found
        assert result.source == SOURCE_PINNED_COMMENT
        assert result.total_found == 3
        assert result.source_content == SAMPLE_PINNED_COMMENT
        assert source.calls == [SOURCE_PINNED_COMMENT]

    @pytest.mark.asyncio
    async def test_description_used_when_pinned_has_no_list(self):
        source = FakeTextSource(
            pinned=[SAMPLE_BOILERPLATE_COMMENT], description=SAMPLE_DESCRIPTION
        )

        result = await MusicListLocator(source).search_music_list("video123")

        assert result.source == SOURCE_VIDEO_DESCRIPTION
        assert len(result.tracks) == 4

    @pytest.mark.asyncio
    async def test_regular_comments_need_more_than_three_tracks(self):
        source = FakeTextSource(comments=[SAMPLE_CASUAL_COMMENT, SAMPLE_REGULAR_COMMENT])

        result = await MusicListLocator(source).search_music_list("video123")

        assert result.source == SOURCE_REGULAR_COMMENTS
        assert result.source_content == SAMPLE_REGULAR_COMMENT
        assert result.total_found == 4

    @pytest.mark.asyncio
    async def test_short_regular_comment_rejected(self):
        source = FakeTextSource(comments=[SAMPLE_CASUAL_COMMENT])

        result = await MusicListLocator(source).search_music_list("video123")

        assert not result.found
        assert result.source == SOURCE_NOT_FOUND
        assert result.tracks == []

    @pytest.mark.asyncio
    async def test_short_pinned_comment_accepted(self):
        source = FakeTextSource(pinned=[SAMPLE_CASUAL_COMMENT])

        result = await MusicListLocator(source).search_music_list("video123")

        assert result.source == SOURCE_PINNED_COMMENT
        assert result.total_found == 2

    @pytest.mark.asyncio
    async def test_failing_tier_treated_as_empty(self):
        source = FakeTextSource(
            pinned=RuntimeError("comments disabled"),
            description=RuntimeError("quota exceeded"),
            comments=[SAMPLE_REGULAR_COMMENT],
        )

        result = await MusicListLocator(source).search_music_list("video123")

        assert result.source == SOURCE_REGULAR_COMMENTS
        assert source.calls == [
            SOURCE_PINNED_COMMENT,
            SOURCE_VIDEO_DESCRIPTION,
            SOURCE_REGULAR_COMMENTS,
        ]

    @pytest.mark.asyncio
    async def test_nothing_found(self):
        result = await MusicListLocator(FakeTextSource()).search_music_list("video123")

        assert not result.found
        assert result.total_found == 0


class TestSearchAllSources:
    @pytest.mark.asyncio
    async def test_reports_every_tier(self):
        source = FakeTextSource(
            pinned=[SAMPLE_PINNED_COMMENT],
            description=RuntimeError("boom"),
            comments=[SAMPLE_REGULAR_COMMENT],
        )

        results = await MusicListLocator(source).search_all_sources("video123")

        assert results[SOURCE_PINNED_COMMENT].total_found == 3
        assert not results[SOURCE_VIDEO_DESCRIPTION].found
        assert results[SOURCE_REGULAR_COMMENTS].total_found == 4


class TestSearchBlocks:
    def test_skips_blocks_without_list(self):
        locator = MusicListLocator(FakeTextSource())
        blocks = [
            TextBlock(text="great video!", source=SOURCE_REGULAR_COMMENTS),
            TextBlock(text=SAMPLE_DESCRIPTION, source=SOURCE_VIDEO_DESCRIPTION),
        ]

        result = locator.search_blocks(blocks)

        assert result.source == SOURCE_VIDEO_DESCRIPTION
