"""Search-query construction for catalog lookups."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from .scorer import is_unknown_artist
from .similarity import normalize

logger = logging.getLogger(__name__)

# Credits and symbols that hurt catalog search more than they help
QUERY_CLEANUPS = [
    (re.compile(r"\(feat\.[^)]*\)", re.IGNORECASE), ""),
    (re.compile(r"\(ft\.[^)]*\)", re.IGNORECASE), ""),
    (re.compile(r"\bfeat\.[^,\-]*", re.IGNORECASE), ""),
    (re.compile(r"\bft\.[^,\-]*", re.IGNORECASE), ""),
    (re.compile(r"\$ave"), "Save"),
    (re.compile(r"[^\w\s\-']"), ""),
    (re.compile(r"\s+"), " "),
]


def clean_search_query(text: str) -> str:
    """Strip feature credits and special characters from a title or artist."""
    for pattern, replacement in QUERY_CLEANUPS:
        text = pattern.sub(replacement, text)
    return text.strip()


@dataclass(frozen=True)
class AliasEntry:
    title: str
    query: str
    artist: Optional[str] = None


class AliasTable:
    """Known-song overrides: parsed (title, artist) -> catalog query.

    Entries are matched on normalized strings. An entry without an artist
    applies to any artist.
    """

    def __init__(self, entries: Optional[List[AliasEntry]] = None):
        self._by_pair: Dict[Tuple[str, str], str] = {}
        self._by_title: Dict[str, str] = {}
        for entry in entries or []:
            self.add(entry)

    def __len__(self) -> int:
        return len(self._by_pair) + len(self._by_title)

    def add(self, entry: AliasEntry) -> None:
        title = normalize(entry.title)
        if entry.artist:
            self._by_pair[(title, normalize(entry.artist))] = entry.query
        else:
            self._by_title[title] = entry.query

    def lookup(self, title: str, artist: str) -> Optional[str]:
        key_title = normalize(title)
        query = self._by_pair.get((key_title, normalize(artist)))
        if query is None:
            query = self._by_title.get(key_title)
        return query

    @classmethod
    def from_yaml(cls, path: str) -> "AliasTable":
        """Load entries from a YAML list of ``{title, artist?, query}`` mappings."""
        if not Path(path).exists():
            raise ValueError(f"Alias file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or []
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in alias file {path}: {e}")

        if not isinstance(data, list):
            raise ValueError(f"Alias file must contain a list, got {type(data).__name__}")

        entries = []
        for item in data:
            if not isinstance(item, dict) or not item.get("title") or not item.get("query"):
                logger.warning(f"Skipping malformed alias entry in {path}: {item!r}")
                continue
            entries.append(
                AliasEntry(title=str(item["title"]), query=str(item["query"]), artist=item.get("artist"))
            )
        logger.info(f"Loaded {len(entries)} alias entries from {path}")
        return cls(entries)


def build_search_query(title: str, artist: str, aliases: Optional[AliasTable] = None) -> str:
    """Query text for a track: alias override, else cleaned title plus artist."""
    if aliases is not None:
        alias = aliases.lookup(title, artist)
        if alias:
            logger.debug(f"Using alias query '{alias}' for '{title}'")
            return alias

    query = clean_search_query(title)
    if not is_unknown_artist(artist):
        query = f"{query} {clean_search_query(artist)}".strip()
    return query or title.strip()
