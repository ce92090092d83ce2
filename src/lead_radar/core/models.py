"""Canonical signal record shared by every source adapter."""

from dataclasses import dataclass, field, replace, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Dict, Any


class Platform(Enum):
    """Sources a signal can come from."""

    REDDIT = "Reddit"  # forum
    HACKERNEWS = "HackerNews"  # technical news aggregator
    LINKEDIN = "LinkedIn"  # B2B social network
    TWITTER = "Twitter"  # high-engagement social network

    @property
    def anonymous_author(self) -> str:
        """Marker used when a post has no resolvable author."""
        return {
            Platform.REDDIT: "[deleted]",
            Platform.HACKERNEWS: "anonymous",
            Platform.LINKEDIN: "LinkedIn User",
            Platform.TWITTER: "TwitterUser",
        }[self]


class Priority(Enum):
    """Coarse ingestion-time priority tier."""

    MEDIUM = "medium"
    HIGH = "high"
    HIGHEST = "highest"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def escalate(self, other: "Priority") -> "Priority":
        """Return the higher of the two tiers. Priority never goes down."""
        return other if other.rank > self.rank else self

    @property
    def is_high(self) -> bool:
        return self in (Priority.HIGH, Priority.HIGHEST)


_PRIORITY_RANK = {Priority.MEDIUM: 0, Priority.HIGH: 1, Priority.HIGHEST: 2}


class SignalStatus(Enum):
    """Outreach status set by user action after ingestion."""

    NEW = "new"
    CONTACTED = "contacted"
    RESPONDED = "responded"


@dataclass(frozen=True)
class Signal:
    """A normalized mention of the target product/competitor space.

    Content fields are immutable. Storage assigns ``id`` on insert and the
    outreach ``status`` is changed through the storage layer, never by
    mutating a loaded instance.
    """

    platform: Platform
    title: str
    content: str
    url: str = ""
    author: str = ""
    engagement_score: int = 0
    comment_count: int = 0
    priority: Priority = Priority.MEDIUM
    keywords: Tuple[str, ...] = ()
    source_subgroup: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    external_id: Optional[str] = None

    id: Optional[int] = None
    status: SignalStatus = SignalStatus.NEW
    ingested_at: Optional[datetime] = None

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        title = (self.title or "").strip()
        content = (self.content or "").strip() or title
        if not content:
            raise ValueError("Signal requires a title or content")
        object.__setattr__(self, "title", title or content[:100])
        object.__setattr__(self, "content", content)
        object.__setattr__(self, "author", self.author or self.platform.anonymous_author)
        object.__setattr__(self, "engagement_score", max(0, int(self.engagement_score or 0)))
        object.__setattr__(self, "comment_count", max(0, int(self.comment_count or 0)))
        object.__setattr__(self, "keywords", tuple(dict.fromkeys(self.keywords)))

    @property
    def engagement(self) -> int:
        """Upvotes/likes plus comments."""
        return self.engagement_score + self.comment_count

    @property
    def keywords_text(self) -> str:
        return ", ".join(self.keywords)

    @property
    def dedup_key(self) -> Optional[Tuple[str, str]]:
        if not self.external_id:
            return None
        return (self.platform.value, self.external_id)

    def with_id(self, signal_id: int) -> "Signal":
        return replace(self, id=signal_id)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["platform"] = self.platform.value
        data["priority"] = self.priority.value
        data["status"] = self.status.value
        data["keywords"] = list(self.keywords)
        data["created_at"] = self.created_at.isoformat()
        data["ingested_at"] = self.ingested_at.isoformat() if self.ingested_at else None
        return data
