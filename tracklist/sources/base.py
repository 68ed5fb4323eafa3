"""Base interface for providers of raw comment and description text."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import TextBlock

logger = logging.getLogger(__name__)


class TextSource(ABC):
    """Supplies the plain-text blocks a music list may be hidden in."""

    def __init__(self, config=None):
        self.config = config
        locator_config = getattr(config, "locator", None)
        self.pinned_limit = getattr(locator_config, "pinned_comment_scan_limit", 10)
        self.comment_limit = getattr(locator_config, "regular_comment_scan_limit", 50)
        self.comment_order = getattr(locator_config, "comment_order", "relevance")
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    async def fetch_pinned_comments(self, video_id: str) -> List[TextBlock]:
        """Comments the uploader pinned (or authored), most relevant first."""

    @abstractmethod
    async def fetch_description(self, video_id: str) -> Optional[TextBlock]:
        """The video description, or None if the video has none."""

    @abstractmethod
    async def fetch_comments(self, video_id: str) -> List[TextBlock]:
        """Regular top-level comments in the configured order."""

    async def fetch_candidate_texts(self, video_id: str) -> List[TextBlock]:
        """All blocks in priority order: pinned, description, then comments."""
        blocks = list(await self.fetch_pinned_comments(video_id))
        description = await self.fetch_description(video_id)
        if description is not None:
            blocks.append(description)
        blocks.extend(await self.fetch_comments(video_id))
        return blocks

    async def aclose(self) -> None:
        """Release network resources held by the source."""
