"""Sales intelligence: per-signal reports, bulk ranking and analytics."""

import logging
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Iterable

from ..errors import GenerationFailure
from .models import Signal
from .scorer import LeadScoringEngine, LeadScoreMemo, ScoredLead
from .terms import (
    FLAGSHIP_PROJECT,
    POSITIVE_TERMS,
    NEGATIVE_TERMS,
    COMPARISON_PHRASES,
    TECHNICAL_DISCUSSION_TERMS,
    BUSINESS_TERMS,
)

logger = logging.getLogger(__name__)

STRATEGY_PROMPT = """Generate a personalized sales outreach strategy for this lead:

Signal: "{content}"
Author: {author}
Platform: {platform}
Lead Score: {score}
Persona: {persona}
Urgency: {urgency}
Opportunity Type: {opportunity}

Create a JSON response with:
1. Subject line for initial outreach
2. Opening message (2-3 sentences)
3. Value proposition specific to their pain point
4. Call to action
5. Follow-up strategy
6. Technical talking points

Focus on Tenstorrent's open-source approach and how it solves their specific problem."""


@dataclass
class SentimentCounts:
    positive: int = 0
    negative: int = 0
    neutral: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"positive": self.positive, "negative": self.negative, "neutral": self.neutral}


@dataclass
class ProjectMentionReport:
    """Mentions of the competing open-source project among stored signals."""

    project: str
    mentions: List[Signal] = field(default_factory=list)
    sentiment: SentimentCounts = field(default_factory=SentimentCounts)
    comparisons: List[Signal] = field(default_factory=list)
    technical_discussions: List[Signal] = field(default_factory=list)
    business_opportunities: List[Signal] = field(default_factory=list)

    @property
    def total_mentions(self) -> int:
        return len(self.mentions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project": self.project,
            "total_mentions": self.total_mentions,
            "sentiment": self.sentiment.to_dict(),
            "competitor_comparisons": [s.id for s in self.comparisons],
            "technical_discussions": [s.id for s in self.technical_discussions],
            "business_opportunities": [s.id for s in self.business_opportunities],
        }


def _count_terms(text: str, terms: Iterable[str]) -> int:
    return sum(1 for term in terms if term in text)


def classify_sentiment(content: str) -> str:
    """Word-list sentiment: positive, negative or neutral."""
    text = content.lower()
    pos = _count_terms(text, POSITIVE_TERMS)
    neg = _count_terms(text, NEGATIVE_TERMS)
    if pos > neg:
        return "positive"
    if neg > pos:
        return "negative"
    return "neutral"


class SalesIntelligence:
    """Combines the scoring engine, the memo and a text generator."""

    def __init__(
        self,
        engine: Optional[LeadScoringEngine] = None,
        generator=None,
        memo: Optional[LeadScoreMemo] = None,
    ):
        self.engine = engine or LeadScoringEngine()
        self.generator = generator
        self.memo = memo if memo is not None else LeadScoreMemo()

    def score(self, signal: Signal) -> ScoredLead:
        """Score one signal and record it in the memo."""
        lead = self.engine.score_lead(signal, memo=self.memo)
        self.memo.record_competitors(self.engine.competitor_mentions(signal))
        return lead

    def outreach_strategy(self, lead: ScoredLead) -> Dict[str, Any]:
        """Opportunity fields, plus generated strategy text when available."""
        strategy: Dict[str, Any] = lead.opportunity.to_dict()
        if self.generator is None:
            return strategy

        signal = lead.signal
        prompt = STRATEGY_PROMPT.format(
            content=signal.content,
            author=signal.author,
            platform=signal.platform.value,
            score=lead.lead_score,
            persona=lead.persona.value,
            urgency=lead.urgency.value,
            opportunity=lead.opportunity.type,
        )
        try:
            ai_strategy = self.generator.generate(prompt, signal.content)
        except GenerationFailure as e:
            logger.warning(f"Outreach strategy generation failed for signal {signal.id}: {e}")
            return strategy

        strategy.update({
            "ai_strategy": ai_strategy,
            "urgency": lead.urgency.value,
            "persona": lead.persona.value,
        })
        return strategy

    def report(self, signal: Signal) -> Dict[str, Any]:
        """Full per-signal report."""
        lead = self.score(signal)
        return {
            "signal_id": signal.id,
            "lead_score": lead.lead_score,
            "persona": lead.persona.value,
            "urgency": lead.urgency.value,
            "competitor_mention_counts": self.engine.competitor_mentions(signal),
            "strategy": self.outreach_strategy(lead),
        }

    def score_all(self, signals: Iterable[Signal]) -> Dict[str, Any]:
        """Score every signal; partition into hot/warm, each sorted by score."""
        leads = [self.score(signal) for signal in signals]
        leads.sort(key=lambda lead: lead.lead_score, reverse=True)

        hot_threshold = self.engine.config.hot_threshold
        warm_threshold = self.engine.config.warm_threshold
        return {
            "total": len(leads),
            "hot": [lead for lead in leads if lead.lead_score >= hot_threshold],
            "warm": [
                lead for lead in leads
                if warm_threshold <= lead.lead_score < hot_threshold
            ],
            "all": leads,
        }

    def analytics(self) -> Dict[str, Any]:
        """Aggregate figures over every signal scored in this process."""
        scores = self.memo.scores()
        total = len(scores)
        hot_threshold = self.engine.config.hot_threshold
        warm_threshold = self.engine.config.warm_threshold
        hot = sum(1 for s in scores if s >= hot_threshold)
        warm = sum(1 for s in scores if warm_threshold <= s < hot_threshold)

        return {
            "total_leads": total,
            "hot_leads": hot,
            "warm_leads": warm,
            "conversion_rate": round((hot + warm) / total * 100, 1) if total else 0.0,
            "top_competitors": self.memo.top_competitors(5),
            "average_lead_score": round(sum(scores) / total) if total else 0,
        }

    def monitor_project(
        self,
        signals: Iterable[Signal],
        project: str = FLAGSHIP_PROJECT,
    ) -> ProjectMentionReport:
        """Analyze stored mentions of the competing project."""
        project_lower = project.lower()
        report = ProjectMentionReport(project=project)

        for signal in signals:
            content = signal.content.lower()
            if project_lower not in content:
                continue

            report.mentions.append(signal)
            sentiment = classify_sentiment(content)
            setattr(report.sentiment, sentiment, getattr(report.sentiment, sentiment) + 1)

            if any(phrase in content for phrase in COMPARISON_PHRASES):
                report.comparisons.append(signal)
            if any(term in content for term in TECHNICAL_DISCUSSION_TERMS):
                report.technical_discussions.append(signal)
            if any(term in content for term in BUSINESS_TERMS):
                report.business_opportunities.append(signal)

        logger.debug(f"{report.total_mentions} {project} mentions in stored signals")
        return report
