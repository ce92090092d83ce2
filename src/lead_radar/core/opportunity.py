"""Opportunity tiers derived from a lead score."""

from dataclasses import dataclass, asdict
from typing import Dict, Optional

from .config import ScoringConfig


@dataclass(frozen=True)
class Opportunity:
    """A sales-priority bucket with its recommended follow-up."""

    type: str
    action: str
    priority: str
    timeline: str
    approach: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


HOT_LEAD = Opportunity(
    type="Hot Lead",
    action="Immediate Outreach",
    priority="Highest",
    timeline="Within 24 hours",
    approach="Direct technical discussion",
)

WARM_LEAD = Opportunity(
    type="Warm Lead",
    action="Engage with Value",
    priority="High",
    timeline="Within 48 hours",
    approach="Educational content + soft pitch",
)

QUALIFIED_PROSPECT = Opportunity(
    type="Qualified Prospect",
    action="Nurture Campaign",
    priority="Medium",
    timeline="Within 1 week",
    approach="Content marketing + follow",
)

COLD_PROSPECT = Opportunity(
    type="Cold Prospect",
    action="Monitor",
    priority="Low",
    timeline="Monitor for changes",
    approach="Add to nurture sequence",
)


class OpportunityClassifier:
    """Pure lookup from lead score to opportunity tier."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def classify(self, score: int) -> Opportunity:
        if score >= self.config.hot_threshold:
            return HOT_LEAD
        if score >= self.config.warm_threshold:
            return WARM_LEAD
        if score >= self.config.qualified_threshold:
            return QUALIFIED_PROSPECT
        return COLD_PROSPECT


def classify_opportunity(score: int) -> Opportunity:
    """Classify with the default thresholds."""
    return OpportunityClassifier().classify(score)
