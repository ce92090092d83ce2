"""Reddit adapter - hot listings of AI hardware subreddits."""

import logging
from typing import Optional, Dict, Any, Iterator, Sequence, List

from .base import BaseSourceAdapter, parse_timestamp
from ..core.models import Signal, Platform
from ..core.relevance import RelevanceScorer, EngagementThresholds, engagement_priority
from ..core.terms import SUBREDDITS, FORUM_KEYWORDS, FORUM_PAIN_POINTS
from ..errors import FetchFailure

logger = logging.getLogger(__name__)


class RedditAdapter(BaseSourceAdapter):
    """Scan subreddit hot listings through Reddit's public JSON API.

    No credentials required. ``terms`` overrides the subreddit list.
    """

    source_name = "reddit"
    platform = Platform.REDDIT
    base_url = "https://www.reddit.com"
    listing_limit = 25

    thresholds = EngagementThresholds(
        high_score=100,
        high_comments=50,
        highest_score=500,
        highest_comments=200,
    )

    def __init__(self, subreddits: Optional[List[str]] = None, **kwargs):
        super().__init__(**kwargs)
        self.subreddits = list(subreddits or SUBREDDITS)
        self.scorer = RelevanceScorer(FORUM_KEYWORDS, FORUM_PAIN_POINTS)

    def _scan(self, terms: Optional[Sequence[str]]) -> Iterator[Signal]:
        for i, subreddit in enumerate(terms or self.subreddits):
            if i:
                self._pause()
            try:
                children = self._get_items(
                    f"{self.base_url}/r/{subreddit}/hot.json",
                    lambda listing: (listing.get("data") or {}).get("children") or [],
                    params={"limit": self.listing_limit},
                )
            except FetchFailure as e:
                logger.warning(f"Error scanning subreddit r/{subreddit}: {e}")
                continue

            for child in children:
                signal = self._analyze(child, subreddit)
                if signal:
                    yield signal

    def _normalize(self, raw: Dict[str, Any], *context) -> Optional[Signal]:
        # Listing children wrap the post in "data"
        raw = raw.get("data") or {}
        subreddit = context[0] if context else raw.get("subreddit")
        title = raw.get("title") or ""
        body = raw.get("selftext") or ""

        match = self.scorer.analyze(title, body)
        if match is None:
            return None

        score = int(raw.get("score") or 0)
        comments = int(raw.get("num_comments") or 0)
        permalink = raw.get("permalink") or raw.get("url") or ""
        if permalink.startswith("/"):
            permalink = f"https://reddit.com{permalink}"

        return Signal(
            platform=self.platform,
            title=title,
            content=body or title,
            url=permalink,
            author=raw.get("author") or "",
            engagement_score=score,
            comment_count=comments,
            priority=engagement_priority(score, comments, match.pain_count, self.thresholds),
            keywords=tuple(match.keywords),
            source_subgroup=subreddit,
            created_at=parse_timestamp(raw.get("created_utc")),
            external_id=raw.get("id") or raw.get("name"),
        )
