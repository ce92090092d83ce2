"""Lead scoring engine - ranks stored signals by sales potential."""

import math
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional, Tuple, Sequence, Iterator

from .config import ScoringConfig
from .models import Signal
from .opportunity import Opportunity, OpportunityClassifier
from .terms import (
    Term,
    TermCategory,
    LEAD_RULES,
    URGENCY_RULES,
    FLAGSHIP_PROJECT,
    TECH_FRAMEWORK_TERMS,
    ENGINEER_TERMS,
    SCIENTIST_AUTHOR_TERMS,
    RESEARCH_CONTENT_TERMS,
    EXECUTIVE_AUTHOR_TERMS,
    PROCUREMENT_TERMS,
    FOUNDER_TERMS,
    COMPETITORS,
)


class Persona(Enum):
    """Likely role of a signal's author."""

    ML_ENGINEER = "ML Engineer"
    DATA_SCIENTIST = "Data Scientist"
    TECHNICAL_CONTRIBUTOR = "Technical Individual Contributor"
    DECISION_MAKER = "Technical Decision Maker"
    PROCUREMENT = "Procurement/Finance"
    FOUNDER = "Startup Founder/Executive"
    ENTHUSIAST = "Technical Enthusiast"


class Urgency(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass
class TermMatch:
    """A matched scoring rule."""

    term: Term
    field: str = "content"  # content or author


@dataclass
class LeadScore:
    """Result of scoring one signal."""

    total_score: int
    base_score: int = 0
    matches: List[TermMatch] = field(default_factory=list)
    engagement_multiplier: float = 1.0
    platform_multiplier: float = 1.0

    @property
    def category_scores(self) -> Dict[TermCategory, int]:
        scores: Dict[TermCategory, int] = {}
        for match in self.matches:
            cat = match.term.category
            scores[cat] = scores.get(cat, 0) + match.term.weight
        return scores

    @property
    def summary(self) -> str:
        """Get a human-readable summary of the top rules."""
        if not self.matches:
            return "No lead signals detected"

        parts = []
        for match in sorted(self.matches, key=lambda m: m.term.weight, reverse=True)[:3]:
            parts.append(f'"{match.term.phrase}" (+{match.term.weight})')

        return ", ".join(parts)


@dataclass
class ScoredLead:
    """A signal with its derived, non-persisted scoring fields."""

    signal: Signal
    lead_score: int
    persona: Persona
    urgency: Urgency
    opportunity: Opportunity

    def to_dict(self, content_chars: Optional[int] = None) -> Dict:
        content = self.signal.content
        if content_chars is not None and len(content) > content_chars:
            content = content[:content_chars] + "..."
        return {
            "id": self.signal.id,
            "title": self.signal.title,
            "author": self.signal.author,
            "platform": self.signal.platform.value,
            "url": self.signal.url,
            "priority": self.signal.priority.value,
            "content": content,
            "lead_score": self.lead_score,
            "persona": self.persona.value,
            "urgency": self.urgency.value,
            "opportunity": self.opportunity.type,
        }


class LeadScoreMemo:
    """Lead scores keyed by signal id for the life of the process."""

    def __init__(self):
        self._scores: Dict[int, int] = {}
        self._competitor_mentions: Dict[str, int] = {}
        self._lock = threading.Lock()

    def set(self, signal_id: Optional[int], score: int):
        if signal_id is None:
            return
        with self._lock:
            self._scores[signal_id] = score

    def get(self, signal_id: int) -> Optional[int]:
        with self._lock:
            return self._scores.get(signal_id)

    def scores(self) -> List[int]:
        with self._lock:
            return list(self._scores.values())

    def record_competitors(self, counts: Dict[str, int]):
        with self._lock:
            for name, count in counts.items():
                if count:
                    self._competitor_mentions[name] = self._competitor_mentions.get(name, 0) + count

    def top_competitors(self, limit: int = 5) -> List[Tuple[str, int]]:
        with self._lock:
            items = list(self._competitor_mentions.items())
        return sorted(items, key=lambda x: x[1], reverse=True)[:limit]

    def clear(self):
        with self._lock:
            self._scores.clear()
            self._competitor_mentions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._scores)


def _spans(text: str, phrase: str) -> Iterator[Tuple[int, int]]:
    start = text.find(phrase)
    while start != -1:
        yield (start, start + len(phrase))
        start = text.find(phrase, start + 1)


def match_rule_group(text: str, terms: Sequence[Term]) -> List[Term]:
    """Distinct matching terms of one rule group, in table order.

    A term only counts if at least one occurrence is not nested inside an
    occurrence of a longer matched term from the same group.
    """
    if not text:
        return []

    covered: List[Tuple[int, int]] = []
    matched = set()
    for term in sorted(terms, key=lambda t: len(t.phrase), reverse=True):
        phrase = term.phrase.lower()
        occurrences = list(_spans(text, phrase))
        if not occurrences:
            continue
        free = [
            (s, e) for s, e in occurrences
            if not any(cs <= s and e <= ce and (ce - cs) > (e - s) for cs, ce in covered)
        ]
        if free:
            matched.add(term.phrase)
        covered.extend(occurrences)

    return [t for t in terms if t.phrase in matched]


def _contains_any(text: str, terms: Sequence[str]) -> bool:
    return any(term in text for term in terms)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class LeadScoringEngine:
    """Scores signals with additive weighted rules and two multipliers."""

    def __init__(
        self,
        rules: Optional[List[Term]] = None,
        config: Optional[ScoringConfig] = None,
        classifier: Optional[OpportunityClassifier] = None,
    ):
        self.rules = rules or LEAD_RULES
        self.config = config or ScoringConfig()
        self.classifier = classifier or OpportunityClassifier(self.config)
        self._groups: Dict[TermCategory, List[Term]] = {}
        for rule in self.rules:
            self._groups.setdefault(rule.category, []).append(rule)

    def _group(self, category: TermCategory) -> List[Term]:
        return self._groups.get(category, [])

    def score_signal(self, signal: Signal) -> LeadScore:
        """Score one signal. Pure function of the signal's fields."""
        content = signal.content.lower()
        author = (signal.author or "").lower()
        matches: List[TermMatch] = []

        project_terms = self._group(TermCategory.COMPETITOR_PROJECT)
        project_hits = match_rule_group(content, project_terms)
        if project_hits:
            matches.extend(TermMatch(t) for t in project_hits)
            for category in (TermCategory.COMPARISON, TermCategory.PERFORMANCE):
                # One bonus per group however many of its phrases appear
                hits = match_rule_group(content, self._group(category))
                if hits:
                    matches.append(TermMatch(hits[0]))

        for category in (
            TermCategory.FINANCIAL_PAIN,
            TermCategory.ALTERNATIVE,
            TermCategory.ENTERPRISE,
        ):
            matches.extend(TermMatch(t) for t in match_rule_group(content, self._group(category)))

        titles = self._group(TermCategory.DECISION_MAKER)
        content_titles = match_rule_group(content, titles)
        author_titles = match_rule_group(author, titles)
        seen = set()
        for term in titles:
            if term.phrase in seen:
                continue
            if term in content_titles:
                matches.append(TermMatch(term, "content"))
                seen.add(term.phrase)
            elif term in author_titles:
                matches.append(TermMatch(term, "author"))
                seen.add(term.phrase)

        base = sum(m.term.weight for m in matches)
        engagement_mult = self.config.engagement_multiplier(signal.engagement)
        platform_mult = self.config.platform_multiplier(signal.platform.value)
        total = max(0, _round_half_up(base * engagement_mult * platform_mult))

        return LeadScore(
            total_score=total,
            base_score=base,
            matches=matches,
            engagement_multiplier=engagement_mult,
            platform_multiplier=platform_mult,
        )

    def identify_persona(self, signal: Signal) -> Persona:
        """First matching rule wins, evaluated in a fixed order."""
        content = signal.content.lower()
        author = (signal.author or "").lower()

        if _contains_any(content, TECH_FRAMEWORK_TERMS):
            if _contains_any(author, ENGINEER_TERMS):
                return Persona.ML_ENGINEER
            if _contains_any(author, SCIENTIST_AUTHOR_TERMS) or _contains_any(content, RESEARCH_CONTENT_TERMS):
                return Persona.DATA_SCIENTIST
            return Persona.TECHNICAL_CONTRIBUTOR

        if _contains_any(author, EXECUTIVE_AUTHOR_TERMS):
            return Persona.DECISION_MAKER

        if _contains_any(content, PROCUREMENT_TERMS):
            return Persona.PROCUREMENT

        if _contains_any(content, FOUNDER_TERMS):
            return Persona.FOUNDER

        return Persona.ENTHUSIAST

    def urgency_points(self, signal: Signal) -> int:
        content = signal.content.lower()
        points = 0
        for term in URGENCY_RULES:
            if term.phrase in content:
                if term.category == TermCategory.URGENT:
                    points += self.config.urgent_term_points
                else:
                    points += self.config.time_term_points
        return points

    def detect_urgency(self, signal: Signal) -> Urgency:
        points = self.urgency_points(signal)
        if points >= self.config.high_urgency_threshold:
            return Urgency.HIGH
        if points >= self.config.medium_urgency_threshold:
            return Urgency.MEDIUM
        return Urgency.LOW

    def competitor_mentions(self, signal: Signal) -> Dict[str, int]:
        """1 for each tracked competitor present in the content, else 0."""
        content = signal.content.lower()
        return {name: int(name in content) for name in COMPETITORS}

    def score_lead(self, signal: Signal, memo: Optional[LeadScoreMemo] = None) -> ScoredLead:
        """Score, persona, urgency and opportunity tier for one signal."""
        result = self.score_signal(signal)
        if memo is not None:
            memo.set(signal.id, result.total_score)
        return ScoredLead(
            signal=signal,
            lead_score=result.total_score,
            persona=self.identify_persona(signal),
            urgency=self.detect_urgency(signal),
            opportunity=self.classifier.classify(result.total_score),
        )

    def score_breakdown(self, signal: Signal) -> Dict:
        """Base score, matched rules and multipliers for one signal."""
        result = self.score_signal(signal)
        return {
            "lead_score": result.total_score,
            "base_score": result.base_score,
            "engagement_multiplier": result.engagement_multiplier,
            "platform_multiplier": result.platform_multiplier,
            "matches": [
                {
                    "phrase": m.term.phrase,
                    "weight": m.term.weight,
                    "category": m.term.category.value,
                    "field": m.field,
                }
                for m in result.matches
            ],
            "category_scores": {k.value: v for k, v in result.category_scores.items()},
            "explanation": self.explain_score(result),
        }

    def explain_score(self, result: LeadScore) -> str:
        """Get a detailed explanation of a scoring result."""
        lines = [
            f"Lead Score: {result.total_score}",
            f"Base: {result.base_score} x engagement {result.engagement_multiplier}"
            f" x platform {result.platform_multiplier}",
            "",
            "Matched Rules:",
        ]

        if not result.matches:
            lines.append("  (none)")
        else:
            for match in sorted(result.matches, key=lambda m: m.term.weight, reverse=True):
                where = " (author)" if match.field == "author" else ""
                lines.append(
                    f"  +{match.term.weight}: \"{match.term.phrase}\"{where} "
                    f"[{match.term.category.value}]"
                )

        if result.category_scores:
            lines.extend(["", "Category Breakdown:"])
            for cat, score in sorted(
                result.category_scores.items(),
                key=lambda x: x[1],
                reverse=True
            ):
                lines.append(f"  {cat.value}: +{score}")

        return "\n".join(lines)


def mentions_flagship(signal: Signal) -> bool:
    text = f"{signal.title} {signal.content} {signal.keywords_text}".lower()
    return FLAGSHIP_PROJECT in text
