"""Catalog provider searching music videos through the YouTube Data API."""

import logging
from typing import Dict, List, Optional

import httpx

from ..config import DataSourceConfig, ScrapingConfig
from ..matching.similarity import normalize
from .base import CatalogCandidate, CatalogProvider

logger = logging.getLogger(__name__)

MUSIC_KEYWORDS = ("music", "official", "audio", "lyrics", "video", "mv")
EXCLUDED_KEYWORDS = ("live", "concert", "interview", "reaction", "cover", "tutorial")

# YouTube's "Music" video category
MUSIC_CATEGORY_ID = "10"


def is_music_video(video_title: str, channel_title: str, query: str) -> bool:
    """Keep music uploads that mention the query; drop live/cover/reaction videos."""
    title = video_title.lower()
    channel = channel_title.lower()

    if any(keyword in title for keyword in EXCLUDED_KEYWORDS):
        return False

    has_music = any(keyword in title or keyword in channel for keyword in MUSIC_KEYWORDS)

    searchable = normalize(f"{video_title} {channel_title}")
    words = normalize(query).split()
    mentions_query = bool(words) and all(word in searchable for word in words)

    return has_music or mentions_query


class YouTubeMusicCatalogProvider(CatalogProvider):
    """Treats music-category YouTube videos as catalog entries."""

    def __init__(
        self,
        scraping_config: Optional[ScrapingConfig] = None,
        data_sources: Optional[DataSourceConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__()
        self.scraping_config = scraping_config or ScrapingConfig()
        self.data_sources = data_sources or DataSourceConfig()
        if not self.data_sources.youtube_api_key:
            raise RuntimeError("data_sources.youtube_api_key is required for YouTube searches")
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            base_url=self.data_sources.youtube_api_url,
            timeout=httpx.Timeout(self.scraping_config.timeout_seconds, connect=10.0),
            headers={"User-Agent": self.scraping_config.user_agent},
        )

    async def search(self, query: str) -> List[CatalogCandidate]:
        params = {
            "part": "snippet",
            "type": "video",
            "videoCategoryId": MUSIC_CATEGORY_ID,
            "maxResults": self.scraping_config.max_results_per_search,
            "q": query,
            "key": self.data_sources.youtube_api_key,
        }
        try:
            response = await self.http_client.get("/search", params=params)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError):
            self.update_statistics(False, 0)
            raise

        items = payload.get("items", []) if isinstance(payload, dict) else []
        flattened = []
        for item in items:
            if not isinstance(item, dict):
                continue
            record = self._flatten(item)
            if not is_music_video(record["title"] or "", record["artist"] or "", query):
                self.logger.debug(f"Skipping non-music video '{record['title']}'")
                continue
            flattened.append(record)

        candidates = self.normalize_results(flattened, query)
        self.update_statistics(True, len(candidates))
        return candidates

    def _flatten(self, item: Dict) -> Dict:
        snippet = item.get("snippet") or {}
        id_info = item.get("id")
        video_id = id_info.get("videoId") if isinstance(id_info, dict) else id_info
        thumbnails = snippet.get("thumbnails") or {}
        thumbnail = thumbnails.get("high") or thumbnails.get("default") or {}
        return {
            "id": video_id,
            "title": snippet.get("title"),
            "artist": snippet.get("channelTitle"),
            "album": None,
            "artwork": thumbnail.get("url"),
            "metadata": {
                "url": f"https://music.youtube.com/watch?v={video_id}" if video_id else None,
                "channel_id": snippet.get("channelId"),
            },
        }

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()
