"""Fuzzy matching of parsed tracks against catalog search results."""

from .language import Script, classify_script, is_language_mismatch
from .query import AliasEntry, AliasTable, build_search_query, clean_search_query
from .scorer import MatchScore, MatchScorer, is_unknown_artist
from .selector import CandidateSelector, MatchContext, Tier, find_best_match
from .similarity import levenshtein_distance, normalize, similarity

__all__ = [
    "AliasEntry",
    "AliasTable",
    "CandidateSelector",
    "MatchContext",
    "MatchScore",
    "MatchScorer",
    "Script",
    "Tier",
    "build_search_query",
    "classify_script",
    "clean_search_query",
    "find_best_match",
    "is_language_mismatch",
    "is_unknown_artist",
    "levenshtein_distance",
    "normalize",
    "similarity",
]
