"""Signal model, relevance tiers and lead scoring."""

from .models import Signal, Platform, Priority, SignalStatus
from .terms import Term, TermCategory, LEAD_RULES, URGENCY_RULES
from .relevance import RelevanceScorer, RelevanceMatch, engagement_priority, social_priority
from .scorer import LeadScoringEngine, LeadScore, LeadScoreMemo, ScoredLead, Persona, Urgency
from .opportunity import Opportunity, OpportunityClassifier, classify_opportunity
from .intelligence import SalesIntelligence, ProjectMentionReport
from .config import ScoringConfig, Settings, settings

__all__ = [
    "Signal",
    "Platform",
    "Priority",
    "SignalStatus",
    "Term",
    "TermCategory",
    "LEAD_RULES",
    "URGENCY_RULES",
    "RelevanceScorer",
    "RelevanceMatch",
    "engagement_priority",
    "social_priority",
    "LeadScoringEngine",
    "LeadScore",
    "LeadScoreMemo",
    "ScoredLead",
    "Persona",
    "Urgency",
    "Opportunity",
    "OpportunityClassifier",
    "classify_opportunity",
    "SalesIntelligence",
    "ProjectMentionReport",
    "ScoringConfig",
    "Settings",
    "settings",
]
