"""Source adapters for signal ingestion."""

from .base import BaseSourceAdapter, SocialSourceAdapter
from .reddit import RedditAdapter
from .hackernews import HackerNewsAdapter
from .linkedin import LinkedInAdapter
from .twitter import TwitterAdapter

# Adapter registry for CLI/orchestrator
ADAPTERS = {
    "reddit": RedditAdapter,
    "hackernews": HackerNewsAdapter,
    "linkedin": LinkedInAdapter,
    "twitter": TwitterAdapter,
}

# Sources that need no credentials
QUICK_SOURCES = ["reddit", "hackernews"]
ALL_SOURCES = list(ADAPTERS)


def get_adapter(source: str, **kwargs) -> BaseSourceAdapter:
    """Get an adapter instance by source name."""
    if source not in ADAPTERS:
        raise ValueError(f"Unknown source: {source}. Available: {list(ADAPTERS.keys())}")
    return ADAPTERS[source](**kwargs)


__all__ = [
    "BaseSourceAdapter",
    "SocialSourceAdapter",
    "RedditAdapter",
    "HackerNewsAdapter",
    "LinkedInAdapter",
    "TwitterAdapter",
    "ADAPTERS",
    "QUICK_SOURCES",
    "ALL_SOURCES",
    "get_adapter",
]
