"""Conversational intent router over the signal pipeline."""

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, List, Any, Tuple, Callable

from ..core.intelligence import SalesIntelligence
from ..core.models import Signal
from ..core.scorer import ScoredLead, mentions_flagship
from ..core.terms import FLAGSHIP_PROJECT, DECISION_MAKER_FILTER, BUDGET_FILTER, ALTERNATIVE_FILTER
from ..errors import GenerationFailure, HandlerFailure

logger = logging.getLogger(__name__)


class Intent(Enum):
    """Capabilities a chat message can be routed to."""

    LINKEDIN_SIGNALS = "linkedin_signals"
    LINKEDIN_SEARCH = "linkedin_search"
    TWITTER_SIGNALS = "twitter_signals"
    TWITTER_SEARCH = "twitter_search"
    TINYGRAD_SEARCH = "tinygrad_search"
    TINYGRAD_ANALYSIS = "tinygrad_analysis"
    SCORE_LEADS = "score_leads"
    HIGH_PRIORITY = "high_priority"
    DECISION_MAKERS = "decision_makers"
    BUDGET_LEADS = "budget_leads"
    ALTERNATIVES = "alternatives"
    SHOW_SIGNALS = "show_signals"
    ANALYTICS = "analytics"
    SCAN_PLATFORMS = "scan_platforms"
    GENERAL_QUERY = "general_query"


# Order is precedence: the first intent with a keyword in the message wins
INTENT_TABLE: List[Tuple[Intent, List[str]]] = [
    (Intent.LINKEDIN_SIGNALS, ["linkedin", "linkedin signals", "linkedin posts", "linkedin leads", "show me linkedin"]),
    (Intent.LINKEDIN_SEARCH, ["search linkedin", "find linkedin", "linkedin mentions"]),
    (Intent.TWITTER_SIGNALS, ["twitter", "x signals", "twitter posts", "twitter mentions", "show me twitter", "x posts"]),
    (Intent.TWITTER_SEARCH, ["search twitter", "find twitter", "twitter mentions", "x mentions"]),
    (Intent.TINYGRAD_SEARCH, ["tinygrad", "find tinygrad", "tinygrad mentions", "search tinygrad", "tinygrad signals"]),
    (Intent.TINYGRAD_ANALYSIS, ["tinygrad analysis", "analyze tinygrad", "tinygrad sentiment", "tinygrad trends"]),
    (Intent.SCORE_LEADS, ["score leads", "lead scoring", "ai scoring", "rank leads", "prioritize leads"]),
    (Intent.HIGH_PRIORITY, ["high priority", "hot leads", "urgent leads", "highest priority", "important leads"]),
    (Intent.DECISION_MAKERS, ["decision makers", "ctos", "vps", "directors", "managers", "executives"]),
    (Intent.BUDGET_LEADS, ["budget", "cost conscious", "cheap", "affordable", "budget constraints", "expensive"]),
    (Intent.ALTERNATIVES, ["alternatives", "nvidia alternatives", "gpu alternatives", "competitors", "options"]),
    (Intent.SHOW_SIGNALS, ["show signals", "all signals", "recent signals", "latest signals", "signals"]),
    (Intent.ANALYTICS, ["analytics", "stats", "statistics", "performance", "metrics"]),
    (Intent.SCAN_PLATFORMS, ["scan", "search platforms", "find leads", "scrape", "get signals"]),
]

ERROR_TEXT = (
    "I apologize, but I encountered an error while processing your request. "
    "Please try again or rephrase your question."
)

HELP_TEXT = (
    "I'm here to help you find leads and analyze signals! Try asking me to:\n\n"
    "• 'Show me LinkedIn signals'\n"
    "• 'Find tinygrad mentions'\n"
    "• 'Score all leads'\n"
    "• 'Find decision makers'\n"
    "• 'Show budget-conscious leads'\n\n"
    "What would you like me to help you with?"
)

GENERAL_PROMPT = """You are an AI Sales Assistant for Tenstorrent, a company that makes open-source AI hardware alternatives to NVIDIA.

User asked: "{message}"

Provide a helpful response that:
1. Acknowledges their question
2. Suggests specific actions I can take (like searching LinkedIn, scoring leads, finding tinygrad mentions)
3. Keeps it conversational and sales-focused
4. Mentions Tenstorrent's value proposition when relevant

Keep it concise and actionable."""


def detect_intent(message: str) -> Intent:
    """First table entry whose keyword list has a substring in the message."""
    message_lower = (message or "").lower()
    for intent, keywords in INTENT_TABLE:
        if any(keyword in message_lower for keyword in keywords):
            return intent
    return Intent.GENERAL_QUERY


@dataclass
class ChatReply:
    """Reply text plus a reply type and optional structured payload."""

    text: str
    type: str
    data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        reply = {"text": self.text, "type": self.type}
        if self.data is not None:
            reply["data"] = self.data
        return reply


@dataclass
class ChatMessage:
    role: str
    content: str
    timestamp: datetime = field(default_factory=datetime.now)
    intent: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
            "intent": self.intent,
        }


class Conversation:
    """Append-only transcript.

    Unbounded unless ``max_messages`` is given, in which case the oldest
    messages are dropped.
    """

    def __init__(self, max_messages: Optional[int] = None):
        self.max_messages = max_messages
        self._messages: List[ChatMessage] = []
        self._lock = threading.Lock()

    def add(self, role: str, content: str, intent: Optional[str] = None) -> ChatMessage:
        message = ChatMessage(role=role, content=content, intent=intent)
        with self._lock:
            self._messages.append(message)
            if self.max_messages and len(self._messages) > self.max_messages:
                del self._messages[:len(self._messages) - self.max_messages]
        return message

    def history(self) -> List[ChatMessage]:
        with self._lock:
            return list(self._messages)

    def clear(self):
        with self._lock:
            self._messages.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)


# === FORMATTING ===

def _excerpt(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def format_signal_summary(signals: List[Signal], limit: int = 5) -> str:
    return "\n\n".join(
        f"{i}. **{s.platform.value}** - {s.author}\n"
        f"   \"{_excerpt(s.content, 100)}\"\n"
        f"   🎯 Priority: {s.priority.value} | 💬 {s.comment_count} comments"
        for i, s in enumerate(signals[:limit], 1)
    )


def format_scored_leads(leads: List[ScoredLead]) -> str:
    return "\n\n".join(
        f"{i}. **{lead.lead_score} points** - {lead.signal.author} ({lead.persona.value})\n"
        f"   \"{_excerpt(lead.signal.content, 80)}\"\n"
        f"   🚨 Urgency: {lead.urgency.value}"
        for i, lead in enumerate(leads, 1)
    )


def format_platform_breakdown(signals: List[Signal]) -> str:
    counts = Counter(s.platform.value for s in signals)
    return "\n".join(f"• **{platform}**: {count} signals" for platform, count in counts.items())


def _mentions(signal: Signal, terms: List[str], include_author: bool = False) -> bool:
    text = signal.content.lower()
    if include_author:
        text = f"{text} {signal.author.lower()}"
    return any(term in text for term in terms)


class IntentRouter:
    """Routes chat messages to scans, scoring and stored-signal queries.

    ``process_message`` never raises: a failing handler is logged and turned
    into an apologetic reply of type ``error``.
    """

    def __init__(
        self,
        db,
        orchestrator=None,
        intelligence: Optional[SalesIntelligence] = None,
        generator=None,
        conversation: Optional[Conversation] = None,
    ):
        if orchestrator is None:
            from ..scanning import ScanOrchestrator
            orchestrator = ScanOrchestrator(db)
        if generator is None:
            from ..ai import TextGenerator
            generator = TextGenerator()

        self.db = db
        self.orchestrator = orchestrator
        self.generator = generator
        self.intelligence = intelligence or SalesIntelligence(generator=generator)
        self.conversation = conversation if conversation is not None else Conversation()

        self._handlers: Dict[Intent, Callable[[str], ChatReply]] = {
            Intent.LINKEDIN_SIGNALS: self._handle_linkedin,
            Intent.LINKEDIN_SEARCH: self._handle_linkedin,
            Intent.TWITTER_SIGNALS: self._handle_twitter,
            Intent.TWITTER_SEARCH: self._handle_twitter,
            Intent.TINYGRAD_SEARCH: self._handle_tinygrad,
            Intent.TINYGRAD_ANALYSIS: self._handle_tinygrad,
            Intent.SCORE_LEADS: self._handle_lead_scoring,
            Intent.HIGH_PRIORITY: self._handle_high_priority,
            Intent.DECISION_MAKERS: self._handle_decision_makers,
            Intent.BUDGET_LEADS: self._handle_budget,
            Intent.ALTERNATIVES: self._handle_alternatives,
            Intent.SHOW_SIGNALS: self._handle_show_signals,
            Intent.ANALYTICS: self._handle_analytics,
            Intent.SCAN_PLATFORMS: self._handle_scan_platforms,
            Intent.GENERAL_QUERY: self._handle_general_query,
        }

    def process_message(self, message: str) -> ChatReply:
        """Route one message and record both sides in the transcript."""
        logger.info(f'Processing chat message: "{message}"')
        intent = detect_intent(message)
        self.conversation.add("user", message, intent.value)
        logger.debug(f"Recognized intent: {intent.value}")

        try:
            reply = self._handlers[intent](message)
        except Exception as e:
            failure = HandlerFailure(intent.value, e)
            logger.exception(str(failure))
            reply = ChatReply(text=ERROR_TEXT, type="error")

        self.conversation.add("assistant", reply.text)
        return reply

    def clear_history(self):
        self.conversation.clear()

    def get_history(self) -> List[Dict[str, Any]]:
        return [m.to_dict() for m in self.conversation.history()]

    # === HANDLERS ===

    def _scan_social(self, source: str, label: str, reply_type: str) -> ChatReply:
        adapter = self.orchestrator.adapters.get(source)
        if adapter is None or not adapter.is_available():
            return ChatReply(
                text=f"{label} isn't configured yet, so I couldn't scan it. "
                     f"Add its API credentials and ask me again.",
                type=reply_type,
                data=[],
            )

        result = self.orchestrator.run([source], mode=source)
        if source in result.errors:
            return ChatReply(
                text=f"I encountered an issue accessing {label} data. This might be due to "
                     f"API limitations. Would you like me to try alternative search methods?",
                type="error",
            )

        signals = result.signals
        return ChatReply(
            text=f"I found {len(signals)} {label} signals! Here are the highlights:\n\n"
                 f"{format_signal_summary(signals)}",
            type=reply_type,
            data=[s.to_dict() for s in signals],
        )

    def _handle_linkedin(self, message: str) -> ChatReply:
        return self._scan_social("linkedin", "LinkedIn", "linkedin_results")

    def _handle_twitter(self, message: str) -> ChatReply:
        return self._scan_social("twitter", "Twitter/X", "twitter_results")

    def _handle_tinygrad(self, message: str) -> ChatReply:
        all_signals = self.db.list_signals()
        mentions = [s for s in all_signals if mentions_flagship(s)]

        if not mentions:
            result = self.orchestrator.comprehensive_scan()
            found = [s for s in result.signals if mentions_flagship(s)]
            return ChatReply(
                text=f'I searched across all platforms for "{FLAGSHIP_PROJECT}" and found '
                     f"{len(found)} new mentions! Here's what I discovered:\n\n"
                     f"{format_signal_summary(found)}",
                type="tinygrad_results",
                data=[s.to_dict() for s in found],
            )

        analysis = self.intelligence.monitor_project(all_signals)
        sentiment = analysis.sentiment
        return ChatReply(
            text=f"I found {len(mentions)} {FLAGSHIP_PROJECT} mentions! Here's the analysis:\n\n"
                 f"📊 **Sentiment**: {sentiment.positive} positive, {sentiment.negative} negative, "
                 f"{sentiment.neutral} neutral\n"
                 f"🔥 **Technical Discussions**: {len(analysis.technical_discussions)} posts\n"
                 f"💼 **Business Opportunities**: {len(analysis.business_opportunities)} potential leads\n\n"
                 f"{format_signal_summary(mentions)}",
            type="tinygrad_analysis",
            data={"signals": [s.to_dict() for s in mentions], "analysis": analysis.to_dict()},
        )

    def _handle_lead_scoring(self, message: str) -> ChatReply:
        scored = self.intelligence.score_all(self.db.list_signals()[:20])
        hot, warm = scored["hot"], scored["warm"]
        return ChatReply(
            text=f"✅ Lead scoring complete! Here's what I found:\n\n"
                 f"🔥 **Hot Leads**: {len(hot)} (150+ points)\n"
                 f"🌡️ **Warm Leads**: {len(warm)} (100-149 points)\n\n"
                 f"**Top 5 Hot Leads:**\n{format_scored_leads(hot[:5])}",
            type="lead_scoring_results",
            data={
                "hot_leads": [lead.to_dict() for lead in hot],
                "warm_leads": [lead.to_dict() for lead in warm],
                "all_scored": [lead.to_dict() for lead in scored["all"]],
            },
        )

    def _filtered_reply(self, signals: List[Signal], text: str, reply_type: str) -> ChatReply:
        return ChatReply(
            text=f"{text}\n\n{format_signal_summary(signals)}",
            type=reply_type,
            data=[s.to_dict() for s in signals],
        )

    def _handle_high_priority(self, message: str) -> ChatReply:
        signals = [s for s in self.db.list_signals() if s.priority.is_high]
        return self._filtered_reply(
            signals, f"I found {len(signals)} high-priority signals:", "high_priority_results"
        )

    def _handle_decision_makers(self, message: str) -> ChatReply:
        signals = [
            s for s in self.db.list_signals()
            if _mentions(s, DECISION_MAKER_FILTER, include_author=True)
        ]
        return self._filtered_reply(
            signals,
            f"I found {len(signals)} signals from potential decision makers:",
            "decision_maker_results",
        )

    def _handle_budget(self, message: str) -> ChatReply:
        signals = [s for s in self.db.list_signals() if _mentions(s, BUDGET_FILTER)]
        return self._filtered_reply(
            signals, f"I found {len(signals)} budget-conscious leads:", "budget_results"
        )

    def _handle_alternatives(self, message: str) -> ChatReply:
        signals = [s for s in self.db.list_signals() if _mentions(s, ALTERNATIVE_FILTER)]
        return self._filtered_reply(
            signals,
            f"I found {len(signals)} people looking for alternatives:",
            "alternatives_results",
        )

    def _handle_show_signals(self, message: str) -> ChatReply:
        signals = self.db.list_signals(limit=10)
        return ChatReply(
            text=f"Here are the {len(signals)} most recent signals:\n\n"
                 f"{format_signal_summary(signals, limit=10)}",
            type="signals_results",
            data=[s.to_dict() for s in signals],
        )

    def _handle_analytics(self, message: str) -> ChatReply:
        analytics = self.intelligence.analytics()
        competitors = "\n".join(
            f"• {name}: {count} mentions" for name, count in analytics["top_competitors"]
        )
        return ChatReply(
            text=f"📊 **Sales Analytics Overview:**\n\n"
                 f"🎯 **Total Leads**: {analytics['total_leads']}\n"
                 f"🔥 **Hot Leads**: {analytics['hot_leads']}\n"
                 f"🌡️ **Warm Leads**: {analytics['warm_leads']}\n"
                 f"📈 **Conversion Rate**: {analytics['conversion_rate']}%\n"
                 f"⭐ **Average Lead Score**: {analytics['average_lead_score']}\n\n"
                 f"**Top Competitors Mentioned:**\n{competitors}",
            type="analytics_results",
            data=analytics,
        )

    def _handle_scan_platforms(self, message: str) -> ChatReply:
        result = self.orchestrator.comprehensive_scan()
        failed = ""
        if result.errors:
            failed = f"\n\n⚠️ Failed sources: {', '.join(sorted(result.errors))}"
        return ChatReply(
            text=f"🔍 Comprehensive scan complete! I found {result.total} new signals across all "
                 f"platforms:\n\n{format_platform_breakdown(result.signals)}\n\n"
                 f"**Top Signals:**\n{format_signal_summary(result.signals)}{failed}",
            type="scan_results",
            data=result.to_dict(),
        )

    def _handle_general_query(self, message: str) -> ChatReply:
        try:
            text = self.generator.generate(GENERAL_PROMPT.format(message=message), message)
        except GenerationFailure as e:
            logger.warning(f"General query fell back to help text: {e}")
            return ChatReply(text=HELP_TEXT, type="fallback")
        return ChatReply(text=text, type="general_response")
