"""LinkedIn adapter - UGC posts matched against B2B search terms."""

import logging
from typing import Optional, Dict, Any, Iterator, Sequence, List

from .base import SocialSourceAdapter, parse_timestamp, truncate_title
from ..core.config import settings
from ..core.models import Signal, Platform
from ..core.relevance import RelevanceScorer, SocialThresholds, social_priority
from ..core.terms import LINKEDIN_KEYWORDS, LINKEDIN_PAIN_POINTS, LINKEDIN_SEARCH_TERMS
from ..errors import FetchFailure

logger = logging.getLogger(__name__)

API_BASE = "https://api.linkedin.com/v2"
SHARE_CONTENT = "com.linkedin.ugc.ShareContent"
POST_URL = "https://www.linkedin.com/feed/update/{id}"
FEED_URL = "https://www.linkedin.com/feed/"


def extract_content(post: Dict[str, Any]) -> Optional[str]:
    """Share commentary text, or the article title/description."""
    share = (post.get("specificContent") or {}).get(SHARE_CONTENT) or {}
    text = (share.get("shareCommentary") or {}).get("text")
    if text:
        return text

    if share.get("shareMediaCategory") == "ARTICLE":
        media = (share.get("media") or [{}])[0]
        title = (media.get("title") or {}).get("text")
        if title:
            description = (media.get("description") or {}).get("text")
            return f"{title} - {description}" if description else title
    return None


def extract_author(post: Dict[str, Any]) -> str:
    author_urn = post.get("author") or ""
    if "person:" in author_urn:
        return author_urn.split("person:", 1)[1]
    return ""


class LinkedInAdapter(SocialSourceAdapter):
    """Scan UGC posts with an OAuth access token.

    Needs LINKEDIN_ACCESS_TOKEN. ``terms`` overrides the search terms; only
    the first ``max_queries`` are used per scan to stay within rate limits.
    """

    source_name = "linkedin"
    platform = Platform.LINKEDIN
    credential_name = "LINKEDIN_ACCESS_TOKEN"
    request_delay = 2.0
    max_queries = 3
    page_size = 20

    thresholds = SocialThresholds(
        min_relevance=0.3,
        high_engagement=10,
        highest_engagement=50,
    )

    def __init__(self, token: Optional[str] = None, search_terms: Optional[List[str]] = None, **kwargs):
        super().__init__(
            token=token if token is not None else settings.linkedin_access_token,
            scorer=RelevanceScorer(LINKEDIN_KEYWORDS, LINKEDIN_PAIN_POINTS),
            **kwargs,
        )
        self.search_terms = list(search_terms or LINKEDIN_SEARCH_TERMS)

    def _person_id(self) -> str:
        try:
            profile = self._get_json(f"{API_BASE}/people/~", headers=self._auth_headers())
        except FetchFailure as e:
            logger.warning(f"Error getting LinkedIn profile: {e}")
            return "unknown"
        if not isinstance(profile, dict):
            logger.warning("Unexpected LinkedIn profile payload")
            return "unknown"
        return profile.get("id") or "unknown"

    def _scan(self, terms: Optional[Sequence[str]]) -> Iterator[Signal]:
        person_id = self._person_id()
        headers = self._auth_headers()
        headers["X-Restli-Protocol-Version"] = "2.0.0"
        # Every term hits the same author feed, so a post can come back more than once
        seen = set()

        for i, term in enumerate(list(terms or self.search_terms)[:self.max_queries]):
            if i:
                self._pause()
            try:
                posts = self._get_items(
                    f"{API_BASE}/ugcPosts",
                    lambda data: data.get("elements") or [],
                    params={
                        "q": "authors",
                        "authors": f"List((person:{person_id}))",
                        "count": self.page_size,
                    },
                    headers=headers,
                )
            except FetchFailure as e:
                logger.warning(f'Error searching LinkedIn for "{term}": {e}')
                continue

            for post in posts:
                signal = self._analyze(post)
                if signal is None:
                    continue
                key = signal.dedup_key
                if key:
                    if key in seen:
                        continue
                    seen.add(key)
                yield signal

    def _normalize(self, raw: Dict[str, Any], *context) -> Optional[Signal]:
        content = extract_content(raw)
        if not content:
            return None

        match = self.scorer.analyze(content)
        if match is None or match.relevance < self.thresholds.min_relevance:
            return None

        counts = (raw.get("socialDetail") or {}).get("totalSocialActivityCounts") or {}
        likes = int(counts.get("numLikes") or 0)
        comments = int(counts.get("numComments") or 0)
        post_id = raw.get("id")

        return Signal(
            platform=self.platform,
            title=truncate_title(content),
            content=content,
            url=POST_URL.format(id=post_id) if post_id else FEED_URL,
            author=extract_author(raw),
            engagement_score=likes,
            comment_count=comments,
            priority=social_priority(match.relevance, likes + comments, match.pain_count, self.thresholds),
            keywords=tuple(match.keywords[:self.max_keywords]),
            created_at=parse_timestamp((raw.get("created") or {}).get("time")),
            external_id=str(post_id) if post_id else None,
        )
