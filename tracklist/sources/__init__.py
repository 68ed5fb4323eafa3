"""Providers of comment and description text for a video."""

from .base import TextSource
from .youtube import YouTubeApiClient, YouTubeDataTextSource
from .ytdlp import YtDlpTextSource


def create_text_source(config) -> TextSource:
    """Build the source named by ``config.data_sources.text_source``."""
    name = config.data_sources.text_source
    if name == "youtube_api":
        client = YouTubeApiClient(config.scraping, config.data_sources)
        return YouTubeDataTextSource(client, config)
    if name == "yt_dlp":
        return YtDlpTextSource(config)
    raise ValueError(f"Unknown text source: {name}")


__all__ = [
    "TextSource",
    "YouTubeApiClient",
    "YouTubeDataTextSource",
    "YtDlpTextSource",
    "create_text_source",
]
