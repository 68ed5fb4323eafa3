"""Configuration models using simple dataclasses."""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type
from urllib.parse import urlparse

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ParserConfig:
    """Line parser and extractor settings."""

    unknown_artist: str = "Unknown Artist"
    decorative_glyphs: List[str] = field(default_factory=lambda: ["♥"])
    min_field_length: int = 2


@dataclass
class MatchingConfig:
    """Catalog matching thresholds."""

    unknown_title_high_similarity: float = 0.8
    unknown_title_low_similarity: float = 0.6
    unknown_fallback_to_first: bool = True
    alias_file: Optional[str] = None


@dataclass
class LocatorConfig:
    """Source priority search settings."""

    pinned_comment_scan_limit: int = 10
    regular_comment_scan_limit: int = 50
    min_regular_comment_tracks: int = 3
    comment_order: str = "relevance"


@dataclass
class ScrapingConfig:
    """HTTP behaviour for text sources and catalog searches."""

    timeout_seconds: int = 30
    max_retries: int = 3
    request_delay_seconds: float = 0.3
    max_results_per_search: int = 10
    user_agent: str = "TracklistMatcher/1.0 (+https://github.com/tracklist/tracklist)"


@dataclass
class DataSourceConfig:
    """External data source configuration."""

    youtube_api_key: str = ""
    youtube_api_url: str = "https://www.googleapis.com/youtube/v3"
    itunes_search_url: str = "https://itunes.apple.com/search"
    itunes_country: str = "US"
    catalog_provider: str = "itunes"
    text_source: str = "youtube_api"
    artwork_size: int = 300


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file_path: str = "tracklist.log"
    max_file_size_mb: int = 10
    backup_count: int = 3
    console_output: bool = True


@dataclass
class UIConfig:
    """User interface configuration."""

    show_progress_bar: bool = False


@dataclass
class TracklistConfig:
    """Main configuration model."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    locator: LocatorConfig = field(default_factory=LocatorConfig)
    scraping: ScrapingConfig = field(default_factory=ScrapingConfig)
    data_sources: DataSourceConfig = field(default_factory=DataSourceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _filter_fields(data: Dict[str, Any], cls: Type[Any]) -> Dict[str, Any]:
    """Return only keys present on the dataclass to avoid TypeErrors."""
    valid_fields = cls.__dataclass_fields__.keys()
    return {k: v for k, v in data.items() if k in valid_fields}


def validate_config(cfg: TracklistConfig) -> None:
    """Validate bounds and URLs, raising ValueError on the first problem."""
    if not cfg.parser.unknown_artist.strip():
        raise ValueError("parser.unknown_artist cannot be empty")
    if not (1 <= cfg.parser.min_field_length <= 10):
        raise ValueError("parser.min_field_length must be between 1 and 10")

    # Thresholds are similarity ratios
    if not (0.0 <= cfg.matching.unknown_title_low_similarity <= 1.0):
        raise ValueError("matching.unknown_title_low_similarity must be between 0 and 1")
    if not (0.0 <= cfg.matching.unknown_title_high_similarity <= 1.0):
        raise ValueError("matching.unknown_title_high_similarity must be between 0 and 1")
    if cfg.matching.unknown_title_low_similarity > cfg.matching.unknown_title_high_similarity:
        raise ValueError(
            "matching.unknown_title_low_similarity cannot exceed unknown_title_high_similarity"
        )

    if not (1 <= cfg.locator.pinned_comment_scan_limit <= 100):
        raise ValueError("locator.pinned_comment_scan_limit must be between 1 and 100")
    if not (1 <= cfg.locator.regular_comment_scan_limit <= 100):
        raise ValueError("locator.regular_comment_scan_limit must be between 1 and 100")
    if cfg.locator.min_regular_comment_tracks < 0:
        raise ValueError("locator.min_regular_comment_tracks cannot be negative")
    if cfg.locator.comment_order not in ("relevance", "time"):
        raise ValueError("locator.comment_order must be 'relevance' or 'time'")

    if not (1 <= cfg.scraping.timeout_seconds <= 300):
        raise ValueError("scraping.timeout_seconds must be between 1 and 300")
    if not (0 <= cfg.scraping.max_retries <= 10):
        raise ValueError("scraping.max_retries must be between 0 and 10")
    if not (0.0 <= cfg.scraping.request_delay_seconds <= 10.0):
        raise ValueError("scraping.request_delay_seconds must be between 0 and 10")
    if not (1 <= cfg.scraping.max_results_per_search <= 50):
        raise ValueError("scraping.max_results_per_search must be between 1 and 50")

    if cfg.data_sources.catalog_provider not in ("itunes", "youtube_music"):
        raise ValueError("data_sources.catalog_provider must be 'itunes' or 'youtube_music'")
    if cfg.data_sources.text_source not in ("youtube_api", "yt_dlp"):
        raise ValueError("data_sources.text_source must be 'youtube_api' or 'yt_dlp'")
    if not (30 <= cfg.data_sources.artwork_size <= 3000):
        raise ValueError("data_sources.artwork_size must be between 30 and 3000")

    def validate_url(url: str, name: str):
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"{name} must be a valid HTTP/HTTPS URL")
        if not parsed.netloc:
            raise ValueError(f"{name} must have a valid hostname")

    validate_url(cfg.data_sources.youtube_api_url, "youtube_api_url")
    validate_url(cfg.data_sources.itunes_search_url, "itunes_search_url")

    if not (1 <= cfg.logging.max_file_size_mb <= 1000):
        raise ValueError("max_file_size_mb must be between 1 and 1000 MB")
    if not (0 <= cfg.logging.backup_count <= 100):
        raise ValueError("backup_count must be between 0 and 100")

    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if cfg.logging.level.upper() not in valid_levels:
        raise ValueError(f"logging.level must be one of: {valid_levels}")


def load_config(config_path: Optional[str] = None) -> TracklistConfig:
    """Load configuration from YAML file or return defaults."""
    if config_path and Path(config_path).exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)

            # Handle None/empty/non-dict configs
            if config_data is None:
                logger.warning(f"Configuration file {config_path} is empty, using defaults")
                config_data = {}
            elif not isinstance(config_data, dict):
                raise ValueError(
                    f"Configuration file must contain a dictionary, got {type(config_data).__name__}"
                )

        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}")
        except (IOError, OSError) as e:
            raise ValueError(f"Cannot read configuration file {config_path}: {e}")

        try:
            cfg = TracklistConfig(
                parser=ParserConfig(**_filter_fields(config_data.get("parser", {}), ParserConfig)),
                matching=MatchingConfig(
                    **_filter_fields(config_data.get("matching", {}), MatchingConfig)
                ),
                locator=LocatorConfig(
                    **_filter_fields(config_data.get("locator", {}), LocatorConfig)
                ),
                scraping=ScrapingConfig(
                    **_filter_fields(config_data.get("scraping", {}), ScrapingConfig)
                ),
                data_sources=DataSourceConfig(
                    **_filter_fields(config_data.get("data_sources", {}), DataSourceConfig)
                ),
                logging=LoggingConfig(
                    **_filter_fields(config_data.get("logging", {}), LoggingConfig)
                ),
                ui=UIConfig(**_filter_fields(config_data.get("ui", {}), UIConfig)),
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Invalid configuration values in {config_path}: {e}")

        validate_config(cfg)
        return cfg
    cfg = TracklistConfig()
    validate_config(cfg)
    return cfg


def save_config_template(output_path: str = "config_template.yaml") -> None:
    """Save a template configuration file."""
    config = TracklistConfig()
    config_dict = asdict(config)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(config_dict, f, default_flow_style=False, indent=2, allow_unicode=True)

    logger.info(f"Configuration template saved to: {output_path}")
