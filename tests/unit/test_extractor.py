"""Unit tests for extractor.py."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tests.fixtures.test_data import (
    SAMPLE_BOILERPLATE_COMMENT,
    SAMPLE_DESCRIPTION,
    SAMPLE_PINNED_COMMENT,
)
from tracklist import extract_tracks, format_for_display
from tracklist.extractor import (
    CommentMusicExtractor,
    contains_music_list,
    remove_duplicate_tracks,
)
from tracklist.models import UNKNOWN_ARTIST, MusicTrack


def _track(title, artist, line="x"):
    return MusicTrack(title=title, artist=artist, original_text=line)


class TestExtract:
    """Test cases for CommentMusicExtractor.extract."""

    @pytest.fixture
    def extractor(self):
        return CommentMusicExtractor()

    def test_extract_keeps_source_order(self, extractor):
        tracks = extractor.extract(SAMPLE_PINNED_COMMENT)

        assert [t.title for t in tracks] == ["Here With Me", "Sleep Well", "From The Start"]
        assert [t.artist for t in tracks] == ["d4vd", "d4vd", "Laufey"]

    def test_extract_mixed_description(self, extractor):
        tracks = extractor.extract(SAMPLE_DESCRIPTION)

        assert len(tracks) == 4
        assert tracks[0].title == "Until I Found You"
        assert tracks[0].artist == UNKNOWN_ARTIST
        assert tracks[2].artist == "ZAYN"
        assert tracks[3].title == "Best Part"

    def test_boilerplate_comment_yields_nothing(self, extractor):
        assert extractor.extract(SAMPLE_BOILERPLATE_COMMENT) == []
        assert not extractor.contains_music_list(SAMPLE_BOILERPLATE_COMMENT)

    def test_blank_text(self, extractor):
        assert extractor.extract("\n\n   \n") == []

    def test_non_string_raises(self, extractor):
        with pytest.raises(TypeError):
            extractor.extract(42)

    def test_top_level_extract_tracks(self):
        assert len(extract_tracks(SAMPLE_PINNED_COMMENT)) == 3


class TestRemoveDuplicates:
    def test_case_insensitive_first_wins(self):
        first = _track("Sleep Well", "d4vd", "first")
        tracks = [first, _track("sleep well", "D4VD", "second"), _track("Here With Me", "d4vd")]

        unique = remove_duplicate_tracks(tracks)

        assert len(unique) == 2
        assert unique[0] is first

    def test_idempotent(self):
        tracks = [_track("A Song", "Band"), _track("a song", "band"), _track("Other", "Band")]

        once = remove_duplicate_tracks(tracks)

        assert remove_duplicate_tracks(once) == once


class TestValidityAndFormatting:
    @pytest.fixture
    def extractor(self):
        return CommentMusicExtractor()

    def test_short_fields_invalid(self, extractor):
        assert not extractor.is_valid_music_track(_track("A", "Band"))
        assert not extractor.is_valid_music_track(_track("Song", "B"))
        assert extractor.is_valid_music_track(_track("Song", "IU"))

    def test_boilerplate_invalid(self, extractor):
        assert not extractor.is_valid_music_track(_track("구독 부탁드려요", "채널"))
        assert not extractor.is_valid_music_track(_track("간주 점프", "안내"))

    def test_format_omits_unknown_artist(self):
        lines = format_for_display(
            [
                _track("Until I Found You", UNKNOWN_ARTIST),
                _track("Sleep Well", "d4vd"),
                _track("좋아요 눌러주세요", "채널"),
            ]
        )

        assert lines == ["Until I Found You", "d4vd - Sleep Well"]

    def test_format_strips_glyphs(self, extractor):
        assert extractor.format_music_tracks([_track("Love ♥", "IU")]) == ["IU - Love"]


class TestContainsMusicList:
    @pytest.mark.parametrize(
        "text",
        [
            "1. d4vd - Sleep Well",
            "0:00-3:15 Peaches",
            "Sleep Well - d4vd",
            "Sleep Well _ d4vd",
        ],
    )
    def test_detects_list_shapes(self, text):
        assert contains_music_list(text)

    def test_plain_sentence(self):
        assert not contains_music_list("what a great playlist")
