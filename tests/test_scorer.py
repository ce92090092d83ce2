"""Tests for the lead scoring engine."""

import pytest

from lead_radar.core.config import ScoringConfig
from lead_radar.core.models import Platform
from lead_radar.core.scorer import (
    LeadScoringEngine,
    LeadScoreMemo,
    Persona,
    Urgency,
    match_rule_group,
    mentions_flagship,
)
from lead_radar.core.terms import LEAD_RULES, TermCategory

from helpers import make_signal, EXAMPLE_CONTENT


class TestLeadScoringEngine:
    """Tests for LeadScoringEngine scoring."""

    def setup_method(self):
        """Set up test fixtures."""
        self.engine = LeadScoringEngine()

    def score(self, content, **kwargs):
        return self.engine.score_signal(make_signal(content=content, **kwargs))

    def test_example_is_hot_lead(self):
        """A competitor comparison with budget pain from a VP is a hot lead."""
        signal = make_signal(content=EXAMPLE_CONTENT)
        result = self.engine.score_signal(signal)

        assert result.base_score == 325
        assert result.total_score == 325
        assert self.engine.score_lead(signal).opportunity.type == "Hot Lead"

    def test_example_matches(self):
        """The example matches one rule per expected phrase."""
        result = self.score(EXAMPLE_CONTENT)
        phrases = sorted(m.term.phrase for m in result.matches)
        assert phrases == sorted([
            "tinygrad", "vs", "performance", "too expensive", "budget",
            "switching", "vp", "startup",
        ])

    def test_empty_content_scores_zero(self):
        """Content with no rules scores zero."""
        result = self.score("Just a photo of my cat")
        assert result.total_score == 0
        assert result.summary == "No lead signals detected"

    def test_comparison_needs_flagship(self):
        """Comparison and performance bonuses only apply alongside tinygrad."""
        assert self.score("pytorch vs jax performance benchmark").total_score == 0
        assert self.score("tinygrad vs jax performance benchmark").total_score == 190

    def test_one_bonus_per_group(self):
        """Several comparison phrases still add a single bonus."""
        assert self.score("tinygrad vs pytorch, a comparison").total_score == 150

    def test_nested_terms_count_once(self):
        """A shorter term inside a longer matched term isn't counted again."""
        assert self.score("far too expensive").total_score == 25
        assert self.score("looking at alternatives").total_score == 30
        assert self.score("an alternative, or other alternatives").total_score == 60

    def test_decision_maker_in_author(self):
        """Decision-maker titles count when they appear in the author."""
        assert self.score("we use tinygrad", author="cto_jane").total_score == 135

    def test_decision_maker_counted_once(self):
        """A title in both author and content is counted once."""
        assert self.score("our cto likes tinygrad", author="cto").total_score == 135

    def test_engagement_multiplier_brackets(self):
        """Only the highest bracket the engagement exceeds applies."""
        config = ScoringConfig()
        assert config.engagement_multiplier(10) == 1.0
        assert config.engagement_multiplier(11) == 1.1
        assert config.engagement_multiplier(51) == 1.3
        assert config.engagement_multiplier(101) == 1.5

    def test_multipliers_compound(self):
        """Engagement and platform multipliers multiply the base."""
        result = self.score(EXAMPLE_CONTENT, platform=Platform.TWITTER, engagement_score=15, comment_count=5)
        assert result.engagement_multiplier == 1.1
        assert result.platform_multiplier == 1.2
        assert result.total_score == 429

    def test_platform_multipliers(self):
        config = ScoringConfig()
        assert config.platform_multiplier("LinkedIn") == 1.4
        assert config.platform_multiplier("HackerNews") == 1.3
        assert config.platform_multiplier("Reddit") == 1.0

    def test_adding_terms_never_lowers_score(self):
        """More matching language never reduces the score."""
        base = self.score("tinygrad").total_score
        more = self.score("tinygrad budget for our enterprise").total_score
        assert more > base

    def test_score_is_deterministic(self):
        """Scoring the same signal twice gives the same result."""
        signal = make_signal(content=EXAMPLE_CONTENT)
        assert self.engine.score_signal(signal) == LeadScoringEngine().score_signal(signal)

    def test_score_breakdown(self):
        """The breakdown lists matches, multipliers and an explanation."""
        breakdown = self.engine.score_breakdown(make_signal(content=EXAMPLE_CONTENT))
        assert breakdown["lead_score"] == 325
        assert breakdown["base_score"] == 325
        assert breakdown["category_scores"]["financial_pain"] == 50
        assert {"phrase": "vp", "weight": 35, "category": "decision_maker", "field": "content"} in breakdown["matches"]
        assert breakdown["explanation"].startswith("Lead Score: 325")

    def test_mentions_flagship(self):
        assert mentions_flagship(make_signal(title="TinyGrad news", content="new release"))
        assert not mentions_flagship(make_signal(content="pytorch only"))


class TestMatchRuleGroup:
    """Tests for overlap handling within a rule group."""

    def test_returns_table_order(self):
        terms = [t for t in LEAD_RULES if t.category == TermCategory.FINANCIAL_PAIN]
        hits = match_rule_group("budget is too expensive", terms)
        assert [t.phrase for t in hits] == ["too expensive", "budget"]

    def test_empty_text(self):
        assert match_rule_group("", LEAD_RULES) == []


class TestPersonaAndUrgency:
    """Tests for persona and urgency detection."""

    def setup_method(self):
        """Set up test fixtures."""
        self.engine = LeadScoringEngine()

    @pytest.mark.parametrize("content,author,persona", [
        ("training with pytorch", "ml_engineer", Persona.ML_ENGINEER),
        ("training with pytorch", "data_scientist", Persona.DATA_SCIENTIST),
        ("pytorch research results", "bob", Persona.DATA_SCIENTIST),
        ("pytorch is fine", "bob", Persona.TECHNICAL_CONTRIBUTOR),
        ("pytorch is fine", "vp_bob", Persona.TECHNICAL_CONTRIBUTOR),
        ("hello there", "vp_bob", Persona.DECISION_MAKER),
        ("vendor procurement question", "bob", Persona.PROCUREMENT),
        ("my startup needs chips", "bob", Persona.FOUNDER),
        ("hello world", "bob", Persona.ENTHUSIAST),
    ])
    def test_identify_persona(self, content, author, persona):
        """First matching persona rule wins."""
        signal = make_signal(content=content, author=author)
        assert self.engine.identify_persona(signal) == persona

    @pytest.mark.parametrize("content,urgency", [
        ("urgent, help needed", Urgency.HIGH),
        ("hit a deadline", Urgency.MEDIUM),
        ("this week by friday", Urgency.MEDIUM),
        ("sometime this week", Urgency.LOW),
        ("no rush", Urgency.LOW),
    ])
    def test_detect_urgency(self, content, urgency):
        """Urgent terms add 3 points, time terms 2."""
        assert self.engine.detect_urgency(make_signal(content=content)) == urgency

    def test_competitor_mentions(self):
        """Each competitor counts at most once."""
        counts = self.engine.competitor_mentions(make_signal(content="NVIDIA vs AMD, nvidia again"))
        assert counts["nvidia"] == 1
        assert counts["amd"] == 1
        assert counts["cerebras"] == 0


class TestLeadScoreMemo:
    """Tests for LeadScoreMemo."""

    def test_ignores_unsaved_signals(self):
        """Signals without ids aren't memoized."""
        memo = LeadScoreMemo()
        memo.set(None, 100)
        memo.set(1, 200)
        assert len(memo) == 1
        assert memo.get(1) == 200

    def test_rescoring_replaces(self):
        memo = LeadScoreMemo()
        memo.set(1, 100)
        memo.set(1, 120)
        assert memo.scores() == [120]

    def test_top_competitors(self):
        memo = LeadScoreMemo()
        memo.record_competitors({"nvidia": 1, "amd": 0})
        memo.record_competitors({"nvidia": 1, "intel": 1})
        assert memo.top_competitors() == [("nvidia", 2), ("intel", 1)]

    def test_score_lead_records_memo(self):
        engine = LeadScoringEngine()
        memo = LeadScoreMemo()
        engine.score_lead(make_signal(id=7, content="tinygrad"), memo=memo)
        assert memo.get(7) == 100
