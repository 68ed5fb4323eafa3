"""YouTube Data API v3 client and the text source built on it."""

import logging
from collections import OrderedDict
from typing import Dict, List, Optional

import httpx
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from ..config import DataSourceConfig, ScrapingConfig
from ..models import (
    SOURCE_PINNED_COMMENT,
    SOURCE_REGULAR_COMMENTS,
    SOURCE_VIDEO_DESCRIPTION,
    TextBlock,
)
from .base import TextSource

logger = logging.getLogger(__name__)

# The API caps commentThreads pages at 100 items
MAX_PAGE_SIZE = 100


def _is_retryable(exc: BaseException) -> bool:
    """Transport failures and 429/5xx responses are retried; other 4xx are final."""
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return False


class YouTubeApiClient:
    """Thin async wrapper over the ``commentThreads`` and ``videos`` endpoints."""

    def __init__(
        self,
        scraping_config: Optional[ScrapingConfig] = None,
        data_sources: Optional[DataSourceConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.scraping_config = scraping_config or ScrapingConfig()
        self.data_sources = data_sources or DataSourceConfig()
        if not self.data_sources.youtube_api_key:
            raise RuntimeError("data_sources.youtube_api_key is required for the YouTube Data API")

        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            base_url=self.data_sources.youtube_api_url,
            timeout=httpx.Timeout(
                connect=10.0,
                read=self.scraping_config.timeout_seconds,
                write=10.0,
                pool=5.0,
            ),
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            headers={"User-Agent": self.scraping_config.user_agent},
        )

    @retry(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _get(self, endpoint: str, params: Dict) -> Dict:
        params = dict(params, key=self.data_sources.youtube_api_key)
        response = await self.http_client.get(endpoint, params=params)
        response.raise_for_status()
        return response.json()

    async def get_comment_threads(
        self,
        video_id: str,
        max_results: int = 20,
        order: str = "relevance",
        page_token: Optional[str] = None,
    ) -> Dict:
        params = {
            "part": "snippet",
            "videoId": video_id,
            "maxResults": min(max_results, MAX_PAGE_SIZE),
            "order": order,
            "textFormat": "plainText",
        }
        if page_token:
            params["pageToken"] = page_token
        return await self._get("/commentThreads", params)

    async def get_video(self, video_id: str) -> Optional[Dict]:
        """Video resource with its snippet, or None for an unknown id."""
        payload = await self._get("/videos", {"part": "snippet", "id": video_id})
        items = payload.get("items") or []
        return items[0] if items else None

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()


def _comment_text(thread: Dict) -> str:
    snippet = thread.get("snippet", {}).get("topLevelComment", {}).get("snippet", {})
    return snippet.get("textOriginal") or snippet.get("textDisplay") or ""


def _comment_author_channel(thread: Dict) -> Optional[str]:
    snippet = thread.get("snippet", {}).get("topLevelComment", {}).get("snippet", {})
    author = snippet.get("authorChannelId") or {}
    return author.get("value") if isinstance(author, dict) else author


class YouTubeDataTextSource(TextSource):
    """Text source reading comments and descriptions through the Data API.

    The API does not flag pinned comments. A comment written by the video's
    own channel within the first ``pinned_comment_scan_limit`` relevance
    results is treated as pinned.
    """

    max_cached_videos = 1

    def __init__(self, client: YouTubeApiClient, config=None):
        super().__init__(config)
        self.client = client
        self._videos: "OrderedDict[str, Optional[Dict]]" = OrderedDict()

    async def _video(self, video_id: str) -> Optional[Dict]:
        if video_id in self._videos:
            self._videos.move_to_end(video_id)
            return self._videos[video_id]
        video = await self.client.get_video(video_id)
        self._videos[video_id] = video
        while len(self._videos) > self.max_cached_videos:
            self._videos.popitem(last=False)
        return video

    async def fetch_pinned_comments(self, video_id: str) -> List[TextBlock]:
        payload = await self.client.get_comment_threads(
            video_id, max_results=self.pinned_limit, order="relevance"
        )
        threads = payload.get("items") or []
        if not threads:
            return []

        owner = threads[0].get("snippet", {}).get("channelId")
        if not owner:
            video = await self._video(video_id)
            owner = (video or {}).get("snippet", {}).get("channelId")

        pinned = [
            TextBlock(
                text=_comment_text(thread),
                source=SOURCE_PINNED_COMMENT,
                comment_id=thread.get("id"),
                is_pinned=True,
            )
            for thread in threads
            if owner and _comment_author_channel(thread) == owner
        ]
        self.logger.debug(f"Found {len(pinned)} uploader comments on {video_id}")
        return pinned

    async def fetch_description(self, video_id: str) -> Optional[TextBlock]:
        video = await self._video(video_id)
        if not video:
            self.logger.info(f"Video {video_id} not found")
            return None
        description = video.get("snippet", {}).get("description") or ""
        if not description.strip():
            return None
        return TextBlock(text=description, source=SOURCE_VIDEO_DESCRIPTION)

    async def fetch_comments(self, video_id: str) -> List[TextBlock]:
        payload = await self.client.get_comment_threads(
            video_id, max_results=self.comment_limit, order=self.comment_order
        )
        return [
            TextBlock(text=_comment_text(thread), source=SOURCE_REGULAR_COMMENTS, comment_id=thread.get("id"))
            for thread in payload.get("items") or []
            if _comment_text(thread).strip()
        ]

    async def aclose(self) -> None:
        await self.client.aclose()
