"""Base interface for music catalog providers."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

PLACEHOLDER = "Unknown"


@dataclass
class CatalogCandidate:
    """Standardized search result across all catalog providers.

    ``is_exact`` and ``confidence`` are filled in by the match scorer, never
    taken from the provider response.
    """

    id: str
    title: str
    artist: str
    album: Optional[str] = None
    artwork: Optional[str] = None

    is_exact: bool = False
    confidence: float = 0.0

    provider: str = ""
    search_query: str = ""
    metadata: Dict = field(default_factory=dict)


class CatalogProvider(ABC):
    """Abstract base class for all catalog providers."""

    def __init__(self, config=None):
        self.config = config
        self.provider_name = self.__class__.__name__.replace("CatalogProvider", "").lower()
        self.logger = logging.getLogger(f"{__name__}.{self.provider_name}")

        # Provider statistics
        self.total_searches = 0
        self.successful_searches = 0
        self.total_results = 0

    @abstractmethod
    async def search(self, query: str) -> List[CatalogCandidate]:
        """Free-text search; returns zero or more candidates."""
        pass

    async def aclose(self) -> None:
        """Release network resources held by the provider."""

    def get_statistics(self) -> Dict:
        """Get provider statistics."""
        success_rate = (
            self.successful_searches / self.total_searches if self.total_searches > 0 else 0.0
        )
        return {
            "provider": self.provider_name,
            "total_searches": self.total_searches,
            "successful_searches": self.successful_searches,
            "success_rate": success_rate,
            "total_results": self.total_results,
        }

    def update_statistics(self, search_successful: bool, result_count: int) -> None:
        self.total_searches += 1
        if search_successful:
            self.successful_searches += 1
            self.total_results += result_count

    def normalize_result(self, raw_result: Dict[str, Any], query: str) -> Optional[CatalogCandidate]:
        """Convert a flattened provider record into a CatalogCandidate.

        Missing title/artist/album fall back to ``"Unknown"``; a record without
        an id cannot be added to anything and is dropped.
        """
        candidate_id = raw_result.get("id")
        if candidate_id in (None, ""):
            self.logger.debug(f"Dropping {self.provider_name} result without id: {raw_result}")
            return None

        return CatalogCandidate(
            id=str(candidate_id),
            title=_text_or_placeholder(raw_result.get("title")),
            artist=_text_or_placeholder(raw_result.get("artist")),
            album=_text_or_placeholder(raw_result.get("album")),
            artwork=raw_result.get("artwork") or None,
            provider=self.provider_name,
            search_query=query,
            metadata=raw_result.get("metadata", {}),
        )

    def normalize_results(self, raw_results: Iterable[Dict[str, Any]], query: str) -> List[CatalogCandidate]:
        candidates = []
        for raw in raw_results:
            if not isinstance(raw, dict):
                self.logger.debug(f"Skipping non-dict {self.provider_name} result: {raw!r}")
                continue
            candidate = self.normalize_result(raw, query)
            if candidate is not None:
                candidates.append(candidate)
        return candidates


def _text_or_placeholder(value: Any) -> str:
    if value is None:
        return PLACEHOLDER
    text = str(value).strip()
    return text or PLACEHOLDER
