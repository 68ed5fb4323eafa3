"""Music catalog providers."""

from .base import CatalogCandidate, CatalogProvider
from .itunes import ITunesCatalogProvider
from .youtube_music import YouTubeMusicCatalogProvider, is_music_video


def create_catalog_provider(config) -> CatalogProvider:
    """Build the provider named by ``config.data_sources.catalog_provider``."""
    name = config.data_sources.catalog_provider
    if name == "itunes":
        return ITunesCatalogProvider(config.scraping, config.data_sources)
    if name == "youtube_music":
        return YouTubeMusicCatalogProvider(config.scraping, config.data_sources)
    raise ValueError(f"Unknown catalog provider: {name}")


__all__ = [
    "CatalogCandidate",
    "CatalogProvider",
    "ITunesCatalogProvider",
    "YouTubeMusicCatalogProvider",
    "create_catalog_provider",
    "is_music_video",
]
