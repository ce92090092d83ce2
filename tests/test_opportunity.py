"""Tests for opportunity tiers."""

import pytest

from lead_radar.core.config import ScoringConfig
from lead_radar.core.opportunity import (
    OpportunityClassifier,
    classify_opportunity,
    HOT_LEAD,
    WARM_LEAD,
    QUALIFIED_PROSPECT,
    COLD_PROSPECT,
)


class TestOpportunityClassifier:
    """Tests for OpportunityClassifier."""

    @pytest.mark.parametrize("score,expected", [
        (500, HOT_LEAD),
        (150, HOT_LEAD),
        (149, WARM_LEAD),
        (100, WARM_LEAD),
        (99, QUALIFIED_PROSPECT),
        (50, QUALIFIED_PROSPECT),
        (49, COLD_PROSPECT),
        (0, COLD_PROSPECT),
    ])
    def test_tier_boundaries(self, score, expected):
        """Thresholds are inclusive lower bounds."""
        assert classify_opportunity(score) == expected

    def test_hot_lead_fields(self):
        """Hot leads get immediate outreach."""
        assert HOT_LEAD.to_dict() == {
            "type": "Hot Lead",
            "action": "Immediate Outreach",
            "priority": "Highest",
            "timeline": "Within 24 hours",
            "approach": "Direct technical discussion",
        }

    def test_custom_thresholds(self):
        """Thresholds come from the scoring config."""
        classifier = OpportunityClassifier(ScoringConfig(hot_threshold=300, warm_threshold=200))
        assert classifier.classify(250).type == "Warm Lead"
        assert classifier.classify(300).type == "Hot Lead"
