"""Hacker News adapter - top stories from the Firebase API."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Dict, Any, Iterator, Sequence, List

from .base import BaseSourceAdapter, parse_timestamp
from ..core.config import settings
from ..core.models import Signal, Platform
from ..core.relevance import RelevanceScorer, EngagementThresholds, engagement_priority
from ..core.terms import FORUM_KEYWORDS, FORUM_PAIN_POINTS
from ..errors import FetchFailure

logger = logging.getLogger(__name__)

ITEM_URL = "https://news.ycombinator.com/item?id={id}"


class HackerNewsAdapter(BaseSourceAdapter):
    """Scan the current top stories.

    Story details are fetched in small concurrent batches with a short pause
    between batches. ``terms`` overrides the target keyword list.
    """

    source_name = "hackernews"
    platform = Platform.HACKERNEWS
    request_delay = 0.1
    story_limit = 50
    batch_size = 5

    thresholds = EngagementThresholds(
        high_score=100,
        high_comments=30,
        highest_score=300,
        highest_comments=100,
    )

    def __init__(self, api_base: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_base = (api_base or settings.hn_api_base).rstrip("/")
        self.scorer = RelevanceScorer(FORUM_KEYWORDS, FORUM_PAIN_POINTS)
        self._local = threading.local()

    def _scan(self, terms: Optional[Sequence[str]]) -> Iterator[Signal]:
        scorer = RelevanceScorer(terms, FORUM_PAIN_POINTS) if terms else self.scorer

        try:
            story_ids = self._get_items(f"{self.api_base}/topstories.json", lambda ids: ids or [])
        except FetchFailure as e:
            logger.warning(f"HackerNews scan failed: {e}")
            return

        story_ids = story_ids[:self.story_limit]
        with ThreadPoolExecutor(max_workers=self.batch_size) as executor:
            for start in range(0, len(story_ids), self.batch_size):
                if start:
                    self._pause()
                batch = story_ids[start:start + self.batch_size]
                for story in executor.map(self._fetch_story, batch):
                    if story is None:
                        continue
                    signal = self._analyze(story, scorer)
                    if signal:
                        yield signal

    def _worker_session(self):
        """Session owned by the calling worker thread."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = self.session_factory()
        return session

    def _fetch_story(self, story_id) -> Optional[Dict[str, Any]]:
        try:
            story = self._get_json(f"{self.api_base}/item/{story_id}.json", session=self._worker_session())
        except FetchFailure as e:
            logger.warning(f"Error fetching story {story_id}: {e}")
            return None

        if not isinstance(story, dict):
            if story is not None:
                logger.warning(f"Skipping story {story_id}: unexpected payload")
            return None
        if story.get("deleted") or story.get("type") != "story":
            return None
        return story

    def _normalize(self, raw: Dict[str, Any], *context) -> Optional[Signal]:
        title = raw.get("title") or ""
        text = raw.get("text") or ""

        scorer = context[0] if context else self.scorer
        match = scorer.analyze(title, text)
        if match is None:
            return None

        score = int(raw.get("score") or 0)
        comments = int(raw.get("descendants") or 0)
        story_id = raw.get("id")

        return Signal(
            platform=self.platform,
            title=title,
            content=text or title,
            url=raw.get("url") or ITEM_URL.format(id=story_id),
            author=raw.get("by") or "",
            engagement_score=score,
            comment_count=comments,
            priority=engagement_priority(score, comments, match.pain_count, self.thresholds),
            keywords=tuple(match.keywords),
            created_at=parse_timestamp(raw.get("time")),
            external_id=str(story_id) if story_id is not None else None,
        )
