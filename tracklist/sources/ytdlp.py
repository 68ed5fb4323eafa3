"""Text source that scrapes comments with yt-dlp instead of the Data API."""

import asyncio
import logging
from collections import OrderedDict
from typing import Dict, List, Optional

import yt_dlp

from ..models import (
    SOURCE_PINNED_COMMENT,
    SOURCE_REGULAR_COMMENTS,
    SOURCE_VIDEO_DESCRIPTION,
    TextBlock,
)
from .base import TextSource

logger = logging.getLogger(__name__)


class YtDlpTextSource(TextSource):
    """Needs no API key; one yt-dlp extraction per video feeds all three tiers."""

    # info dicts carry every comment, so only the latest videos stay cached
    max_cached_videos = 1

    def __init__(self, config=None):
        super().__init__(config)
        scraping_config = getattr(config, "scraping", None)
        sort = "top" if self.comment_order == "relevance" else "new"
        self.yt_dlp_opts = {
            "quiet": True,
            "no_warnings": True,
            "skip_download": True,
            "getcomments": True,
            "socket_timeout": getattr(scraping_config, "timeout_seconds", 30),
            "extractor_args": {
                "youtube": {
                    "max_comments": [str(self.comment_limit)],
                    "comment_sort": [sort],
                }
            },
        }
        self._extractions: "OrderedDict[str, asyncio.Future[Dict]]" = OrderedDict()

    def _execute_extraction(self, video_id: str) -> Dict:
        url = f"https://www.youtube.com/watch?v={video_id}"
        with yt_dlp.YoutubeDL(self.yt_dlp_opts) as ydl:
            info = ydl.extract_info(url, download=False)
            return info or {}

    async def _info(self, video_id: str) -> Dict:
        # Concurrent tier lookups share one extraction
        future = self._extractions.get(video_id)
        if future is not None:
            self._extractions.move_to_end(video_id)
        else:
            loop = asyncio.get_running_loop()
            future = loop.run_in_executor(None, self._execute_extraction, video_id)
            self._extractions[video_id] = future
            while len(self._extractions) > self.max_cached_videos:
                self._extractions.popitem(last=False)
        try:
            return await future
        except Exception:
            if self._extractions.get(video_id) is future:
                del self._extractions[video_id]
            raise

    async def fetch_pinned_comments(self, video_id: str) -> List[TextBlock]:
        info = await self._info(video_id)
        comments = info.get("comments") or []
        return [
            TextBlock(
                text=comment.get("text") or "",
                source=SOURCE_PINNED_COMMENT,
                comment_id=comment.get("id"),
                is_pinned=True,
            )
            for comment in comments[: self.pinned_limit]
            if comment.get("is_pinned")
        ]

    async def fetch_description(self, video_id: str) -> Optional[TextBlock]:
        info = await self._info(video_id)
        description = info.get("description") or ""
        if not description.strip():
            return None
        return TextBlock(text=description, source=SOURCE_VIDEO_DESCRIPTION)

    async def fetch_comments(self, video_id: str) -> List[TextBlock]:
        info = await self._info(video_id)
        blocks = []
        for comment in (info.get("comments") or [])[: self.comment_limit]:
            # replies carry a parent id other than "root"
            if comment.get("parent", "root") != "root":
                continue
            text = comment.get("text") or ""
            if text.strip():
                blocks.append(
                    TextBlock(text=text, source=SOURCE_REGULAR_COMMENTS, comment_id=comment.get("id"))
                )
        return blocks

    async def aclose(self) -> None:
        self._extractions.clear()
