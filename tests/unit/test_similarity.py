"""Unit tests for string similarity and script detection."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tracklist.matching.language import Script, classify_script, is_language_mismatch
from tracklist.matching.similarity import (
    contains,
    containment_ratio,
    levenshtein_distance,
    normalize,
    similarity,
)


class TestNormalize:
    def test_lowercases_and_strips_punctuation(self):
        assert normalize("  Hello, World!  ") == "hello world"

    def test_collapses_whitespace(self):
        assert normalize("Sleep\t  Well\n") == "sleep well"

    def test_keeps_hangul(self):
        assert normalize("강남스타일!") == "강남스타일"

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            normalize(None)


class TestLevenshtein:
    def test_classic_example(self):
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_empty_side(self):
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("abc", "") == 3

    def test_symmetric(self):
        assert levenshtein_distance("sunday", "saturday") == levenshtein_distance(
            "saturday", "sunday"
        )


class TestSimilarity:
    def test_identical(self):
        assert similarity("sleep well", "sleep well") == 1.0

    def test_both_empty(self):
        assert similarity("", "") == 1.0

    def test_one_empty(self):
        assert similarity("", "abc") == 0.0

    def test_ratio(self):
        assert similarity("kitten", "sitting") == pytest.approx(4 / 7)

    def test_uses_jellyfish_distance(self):
        with patch(
            "tracklist.matching.similarity.jellyfish.levenshtein_distance", return_value=1
        ) as mock_distance:
            assert similarity("d4vd", "dave") == 0.75

        mock_distance.assert_called_once_with("d4vd", "dave")

    def test_bounded_and_symmetric(self):
        for a, b in [("abc", "xyz"), ("d4vd", "david"), ("강남", "강남스타일")]:
            value = similarity(a, b)
            assert 0.0 <= value <= 1.0
            assert value == similarity(b, a)


class TestContainment:
    def test_either_direction(self):
        assert contains("sleep well", "sleep well sped up")
        assert contains("sleep well sped up", "sleep well")

    def test_empty_never_contained(self):
        assert not contains("", "anything")
        assert not contains("anything", "")

    def test_ratio(self):
        assert containment_ratio("ab", "abcd") == 0.5


class TestLanguage:
    @pytest.mark.parametrize(
        "text,script",
        [
            ("Gangnam Style", Script.LATIN),
            ("강남스타일", Script.CJK),
            ("夜に駆ける", Script.CJK),
            ("강남 Style", Script.MIXED),
            ("1234", Script.MIXED),
        ],
    )
    def test_classify(self, text, script):
        assert classify_script(text) == script

    def test_latin_vs_hangul_mismatch_both_directions(self):
        assert is_language_mismatch("Gangnam Style", "강남스타일")
        assert is_language_mismatch("강남스타일", "Gangnam Style")

    def test_same_script_or_mixed_not_flagged(self):
        assert not is_language_mismatch("Gangnam Style", "Gangnam Style (Remix)")
        assert not is_language_mismatch("강남스타일", "강남 Style")
        assert not is_language_mismatch("1234", "강남스타일")
