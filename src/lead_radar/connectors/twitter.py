"""Twitter/X adapter - recent search over API v2."""

import logging
from typing import Optional, Dict, Any, Iterator, Sequence, List

from .base import SocialSourceAdapter, parse_timestamp, truncate_title
from ..core.config import settings
from ..core.models import Signal, Platform
from ..core.relevance import RelevanceScorer, SocialThresholds, social_priority
from ..core.terms import TWITTER_KEYWORDS, TWITTER_PAIN_POINTS, TWITTER_SEARCH_QUERIES, FLAGSHIP_PROJECT
from ..errors import FetchFailure

logger = logging.getLogger(__name__)

API_BASE = "https://api.twitter.com/2"
FLAGSHIP_BOOST = 0.3


class TwitterAdapter(SocialSourceAdapter):
    """Scan recent tweets with an app bearer token.

    Needs TWITTER_BEARER_TOKEN. Retweets and non-English tweets are excluded
    in the query itself.
    """

    source_name = "twitter"
    platform = Platform.TWITTER
    credential_name = "TWITTER_BEARER_TOKEN"
    request_delay = 1.0
    max_queries = 4
    page_size = 20

    thresholds = SocialThresholds(
        min_relevance=0.2,
        high_engagement=20,
        highest_engagement=100,
    )

    def __init__(self, token: Optional[str] = None, queries: Optional[List[str]] = None, **kwargs):
        super().__init__(
            token=token if token is not None else settings.twitter_bearer_token,
            scorer=RelevanceScorer(
                TWITTER_KEYWORDS,
                TWITTER_PAIN_POINTS,
                boost_terms={FLAGSHIP_PROJECT: FLAGSHIP_BOOST},
            ),
            **kwargs,
        )
        self.queries = list(queries or TWITTER_SEARCH_QUERIES)

    def _search(self, query: str) -> List[Dict[str, Any]]:
        data = self._get_json(
            f"{API_BASE}/tweets/search/recent",
            params={
                "query": f"{query} -is:retweet lang:en",
                "max_results": self.page_size,
                "tweet.fields": "created_at,author_id,public_metrics,context_annotations",
                "user.fields": "username,name,verified",
                "expansions": "author_id",
            },
            headers=self._auth_headers(),
        )
        try:
            users = {u.get("id"): u for u in (data.get("includes") or {}).get("users") or []}
            tweets = []
            for tweet in data.get("data") or []:
                tweets.append(dict(tweet, author=users.get(tweet.get("author_id"))))
        except (AttributeError, TypeError, ValueError) as e:
            raise FetchFailure(self.source_name, f"unexpected search payload for {query!r}: {e}", cause=e) from e
        return tweets

    def _scan(self, terms: Optional[Sequence[str]]) -> Iterator[Signal]:
        for i, query in enumerate(list(terms or self.queries)[:self.max_queries]):
            if i:
                self._pause()
            try:
                tweets = self._search(query)
            except FetchFailure as e:
                logger.warning(f'Error searching Twitter for "{query}": {e}')
                continue

            for tweet in tweets:
                signal = self._analyze(tweet)
                if signal:
                    yield signal

    def _normalize(self, raw: Dict[str, Any], *context) -> Optional[Signal]:
        content = raw.get("text") or ""
        if not content:
            return None

        match = self.scorer.analyze(content)
        if match is None or match.relevance < self.thresholds.min_relevance:
            return None

        author = raw.get("author") or {}
        username = author.get("username") or self.platform.anonymous_author
        metrics = raw.get("public_metrics") or {}
        likes = int(metrics.get("like_count") or 0)
        replies = int(metrics.get("reply_count") or 0)
        retweets = int(metrics.get("retweet_count") or 0)

        return Signal(
            platform=self.platform,
            title=truncate_title(content),
            content=content,
            url=f"https://twitter.com/{username}/status/{raw.get('id')}",
            author=username,
            engagement_score=likes,
            comment_count=replies,
            priority=social_priority(
                match.relevance,
                likes + replies + retweets,
                match.pain_count,
                self.thresholds,
                verified=bool(author.get("verified")),
            ),
            keywords=tuple(match.keywords[:self.max_keywords]),
            created_at=parse_timestamp(raw.get("created_at")),
            external_id=raw.get("id"),
        )
