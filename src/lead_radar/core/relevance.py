"""Ingestion-time relevance filter and priority tiers."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .models import Priority

KEYWORD_WEIGHT = 0.1
PAIN_POINT_WEIGHT = 0.2
MAX_RELEVANCE = 1.0

# Pain-point counts that escalate on their own, whatever the engagement
PAIN_HIGH_COUNT = 2
PAIN_HIGHEST_COUNT = 4


def match_terms(text: str, terms: Sequence[str]) -> List[str]:
    """Case-insensitive substring match, in table order, without repeats."""
    if not text:
        return []
    text_lower = text.lower()
    matched: List[str] = []
    for term in terms:
        if term.lower() in text_lower and term not in matched:
            matched.append(term)
    return matched


@dataclass(frozen=True)
class EngagementThresholds:
    """Per-source score/comment thresholds for the forum-style sources."""

    high_score: int
    high_comments: int
    highest_score: int
    highest_comments: int


@dataclass(frozen=True)
class SocialThresholds:
    """Per-source relevance/engagement thresholds for the social sources."""

    min_relevance: float
    high_engagement: int
    highest_engagement: int
    high_relevance: float = 0.5
    highest_relevance: float = 0.7


@dataclass
class RelevanceMatch:
    """Keyword and pain-point hits for one raw item."""

    keywords: List[str] = field(default_factory=list)
    pain_points: List[str] = field(default_factory=list)
    bonus: float = 0.0

    @property
    def pain_count(self) -> int:
        return len(self.pain_points)

    @property
    def relevance(self) -> float:
        """Weighted hit fraction, capped at 1.0."""
        score = (
            len(self.keywords) * KEYWORD_WEIGHT
            + len(self.pain_points) * PAIN_POINT_WEIGHT
            + self.bonus
        )
        return min(round(score, 4), MAX_RELEVANCE)


def pain_priority(pain_count: int) -> Priority:
    if pain_count > PAIN_HIGHEST_COUNT:
        return Priority.HIGHEST
    if pain_count > PAIN_HIGH_COUNT:
        return Priority.HIGH
    return Priority.MEDIUM


def engagement_priority(
    score: int,
    comments: int,
    pain_count: int,
    thresholds: EngagementThresholds,
) -> Priority:
    """Priority for forum and news-aggregator items."""
    priority = Priority.MEDIUM
    if score > thresholds.high_score or comments > thresholds.high_comments:
        priority = Priority.HIGH
    if score > thresholds.highest_score or comments > thresholds.highest_comments:
        priority = Priority.HIGHEST
    return priority.escalate(pain_priority(pain_count))


def social_priority(
    relevance: float,
    engagement: int,
    pain_count: int,
    thresholds: SocialThresholds,
    verified: bool = False,
) -> Priority:
    """Priority for the social sources, driven by the relevance fraction."""
    if relevance > thresholds.highest_relevance or engagement > thresholds.highest_engagement or verified:
        priority = Priority.HIGHEST
    elif relevance > thresholds.high_relevance or engagement > thresholds.high_engagement:
        priority = Priority.HIGH
    else:
        priority = Priority.MEDIUM
    return priority.escalate(pain_priority(pain_count))


class RelevanceScorer:
    """Matches raw text against a source's target keywords and pain points."""

    def __init__(
        self,
        keywords: Sequence[str],
        pain_points: Sequence[str],
        boost_terms: Optional[dict] = None,
    ):
        self.keywords = list(keywords)
        self.pain_points = list(pain_points)
        # term -> extra relevance added when present
        self.boost_terms = boost_terms or {}

    def analyze(self, *parts: Optional[str]) -> Optional[RelevanceMatch]:
        """Match the concatenated text. Returns None when no keyword matches."""
        text = " ".join(p for p in parts if p)
        keywords = match_terms(text, self.keywords)
        if not keywords:
            return None

        text_lower = text.lower()
        bonus = sum(
            boost for term, boost in self.boost_terms.items()
            if term.lower() in text_lower
        )
        return RelevanceMatch(
            keywords=keywords,
            pain_points=match_terms(text, self.pain_points),
            bonus=bonus,
        )
