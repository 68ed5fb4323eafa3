"""Catalog provider backed by the public iTunes Search API."""

import logging
from typing import Dict, List, Optional

import httpx

from ..config import DataSourceConfig, ScrapingConfig
from .base import CatalogCandidate, CatalogProvider

logger = logging.getLogger(__name__)


class ITunesCatalogProvider(CatalogProvider):
    """Song search against the Apple catalog (no authentication needed)."""

    def __init__(
        self,
        scraping_config: Optional[ScrapingConfig] = None,
        data_sources: Optional[DataSourceConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__()
        self.scraping_config = scraping_config or ScrapingConfig()
        self.data_sources = data_sources or DataSourceConfig()
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.scraping_config.timeout_seconds, connect=10.0),
            headers={"User-Agent": self.scraping_config.user_agent},
        )

    async def search(self, query: str) -> List[CatalogCandidate]:
        params = {
            "term": query,
            "entity": "song",
            "media": "music",
            "limit": self.scraping_config.max_results_per_search,
            "country": self.data_sources.itunes_country,
        }
        try:
            response = await self.http_client.get(self.data_sources.itunes_search_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError):
            self.update_statistics(False, 0)
            raise

        raw_results = payload.get("results", []) if isinstance(payload, dict) else []
        candidates = self.normalize_results(
            (self._flatten(item) for item in raw_results if isinstance(item, dict)), query
        )
        self.update_statistics(True, len(candidates))
        self.logger.debug(f"iTunes returned {len(candidates)} songs for '{query}'")
        return candidates

    def _flatten(self, item: Dict) -> Dict:
        return {
            "id": item.get("trackId"),
            "title": item.get("trackName"),
            "artist": item.get("artistName"),
            "album": item.get("collectionName"),
            "artwork": self._artwork_url(item.get("artworkUrl100")),
            "metadata": {
                "track_view_url": item.get("trackViewUrl"),
                "duration_ms": item.get("trackTimeMillis"),
                "genre": item.get("primaryGenreName"),
            },
        }

    def _artwork_url(self, url: Optional[str]) -> Optional[str]:
        if not url:
            return None
        size = self.data_sources.artwork_size
        return url.replace("100x100", f"{size}x{size}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()
