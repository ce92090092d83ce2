"""Environment-based settings and scoring configuration."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".lead-radar"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Runtime configuration loaded from environment variables."""

    def __init__(self):
        # Source credentials. Missing values disable the source, they are not errors.
        self.linkedin_access_token = os.getenv("LINKEDIN_ACCESS_TOKEN", "")
        self.twitter_bearer_token = os.getenv("TWITTER_BEARER_TOKEN", "")

        self.hn_api_base = os.getenv(
            "HN_API_BASE_URL", "https://hacker-news.firebaseio.com/v0"
        )

        # Text generation
        self.openai_api_key = os.getenv("OPENAI_API_KEY", "")
        self.openai_model = os.getenv("OPENAI_MODEL", "gpt-4")

        # Storage
        self.db_path = os.getenv(
            "LEAD_RADAR_DB_PATH",
            str(DEFAULT_DATA_DIR / "signals.db"),
        )
        self.dedupe = _env_bool("LEAD_RADAR_DEDUPE", False)

        # Transport
        self.http_timeout = float(os.getenv("LEAD_RADAR_HTTP_TIMEOUT", "30"))

        # Scheduling
        self.scan_interval_seconds = int(os.getenv("LEAD_RADAR_SCAN_INTERVAL", "900"))
        self.nightly_hour = int(os.getenv("LEAD_RADAR_NIGHTLY_HOUR", "2"))


_settings = None


def _get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Re-read the environment. Used by the CLI after loading options."""
    global _settings
    _settings = Settings()
    return _settings


class _SettingsProxy:
    """Lazy proxy so settings aren't loaded until first access."""

    def __getattr__(self, name):
        return getattr(_get_settings(), name)


settings = _SettingsProxy()


@dataclass
class ScoringConfig:
    """Thresholds and multipliers used by the lead scoring engine."""

    # Opportunity tier thresholds
    hot_threshold: int = 150
    warm_threshold: int = 100
    qualified_threshold: int = 50

    # (minimum engagement, multiplier), checked top-down, first bracket wins
    engagement_brackets: List[Tuple[int, float]] = field(default_factory=lambda: [
        (100, 1.5),
        (50, 1.3),
        (10, 1.1),
    ])

    # Platform multipliers keyed by Platform value
    platform_multipliers: Dict[str, float] = field(default_factory=lambda: {
        "LinkedIn": 1.4,  # B2B focused
        "Twitter": 1.2,  # High engagement
        "HackerNews": 1.3,  # Technical audience
    })

    # Urgency points and cut-offs
    urgent_term_points: int = 3
    time_term_points: int = 2
    high_urgency_threshold: int = 5
    medium_urgency_threshold: int = 3

    def engagement_multiplier(self, engagement: int) -> float:
        """Pick the single highest bracket the engagement exceeds."""
        for minimum, multiplier in self.engagement_brackets:
            if engagement > minimum:
                return multiplier
        return 1.0

    def platform_multiplier(self, platform: str) -> float:
        return self.platform_multipliers.get(platform, 1.0)
