"""Tests for chat intent routing."""

import pytest

from lead_radar.chat import IntentRouter, Intent, Conversation, detect_intent
from lead_radar.chat.router import ERROR_TEXT, HELP_TEXT
from lead_radar.core.models import Platform, Priority
from lead_radar.scanning import ScanOrchestrator

from helpers import make_signal, FakeAdapter, FailingGenerator, StaticGenerator, EXAMPLE_CONTENT


class BrokenDatabase:
    """Database whose reads fail."""

    def list_signals(self, *args, **kwargs):
        raise RuntimeError("database is locked")


class TestDetectIntent:
    """Tests for keyword intent detection."""

    @pytest.mark.parametrize("message,intent", [
        ("show me linkedin signals", Intent.LINKEDIN_SIGNALS),
        ("Any Twitter mentions?", Intent.TWITTER_SIGNALS),
        ("find tinygrad mentions", Intent.TINYGRAD_SEARCH),
        ("score leads please", Intent.SCORE_LEADS),
        ("show me hot leads", Intent.HIGH_PRIORITY),
        ("find the decision makers", Intent.DECISION_MAKERS),
        ("who has budget constraints", Intent.BUDGET_LEADS),
        ("gpu alternatives", Intent.ALTERNATIVES),
        ("recent signals", Intent.SHOW_SIGNALS),
        ("analytics", Intent.ANALYTICS),
        ("scan everything", Intent.SCAN_PLATFORMS),
        ("hello there", Intent.GENERAL_QUERY),
        ("", Intent.GENERAL_QUERY),
    ])
    def test_detect(self, message, intent):
        assert detect_intent(message) == intent

    def test_precedence(self):
        """Earlier table entries win when several match."""
        assert detect_intent("tinygrad analysis") == Intent.TINYGRAD_SEARCH
        assert detect_intent("linkedin budget leads") == Intent.LINKEDIN_SIGNALS


class TestIntentRouter:
    """Tests for IntentRouter."""

    def make_router(self, db, adapters=None, generator=None):
        self.adapters = adapters if adapters is not None else {}
        orchestrator = ScanOrchestrator(db, adapters=self.adapters)
        return IntentRouter(db, orchestrator=orchestrator, generator=generator or FailingGenerator())

    def test_general_query_fallback(self, db):
        """With no generator available, general questions get the help text."""
        router = self.make_router(db)
        reply = router.process_message("")

        assert reply.type == "fallback"
        assert reply.text == HELP_TEXT

    def test_general_query_generated(self, db):
        router = self.make_router(db, generator=StaticGenerator(["Happy to help!"]))
        reply = router.process_message("what can you do?")

        assert reply.type == "general_response"
        assert reply.text == "Happy to help!"

    def test_handler_error(self):
        """A failing handler produces an error reply instead of raising."""
        router = IntentRouter(
            BrokenDatabase(),
            orchestrator=ScanOrchestrator(None, adapters={}),
            generator=FailingGenerator(),
        )
        reply = router.process_message("show signals")

        assert reply.type == "error"
        assert reply.text == ERROR_TEXT

    def test_linkedin_not_configured(self, db):
        """An unconfigured source replies with an empty result."""
        router = self.make_router(db, {"linkedin": FakeAdapter("linkedin", available=False)})
        reply = router.process_message("show me linkedin signals")

        assert reply.type == "linkedin_results"
        assert reply.data == []
        assert self.adapters["linkedin"].calls == 0

    def test_linkedin_scan_failure(self, db):
        router = self.make_router(db, {"linkedin": FakeAdapter("linkedin", error=RuntimeError("401"))})
        reply = router.process_message("linkedin posts")
        assert reply.type == "error"

    def test_twitter_results(self, db):
        """Configured social sources are scanned and stored."""
        signal = make_signal(platform=Platform.TWITTER, content="tinygrad on AMD")
        router = self.make_router(db, {"twitter": FakeAdapter("twitter", [signal])})
        reply = router.process_message("show me twitter")

        assert reply.type == "twitter_results"
        assert len(reply.data) == 1
        assert len(db.list_signals()) == 1

    def test_tinygrad_analysis_from_stored(self, db):
        """Stored mentions are analyzed without scanning."""
        db.insert_signal(make_signal(content="tinygrad is fast"))
        adapter = FakeAdapter("reddit")
        router = self.make_router(db, {"reddit": adapter})

        reply = router.process_message("tinygrad")

        assert reply.type == "tinygrad_analysis"
        assert reply.data["analysis"]["total_mentions"] == 1
        assert adapter.calls == 0

    def test_tinygrad_mention_in_title(self, db):
        """A mention in the title alone counts."""
        db.insert_signal(make_signal(title="TinyGrad 0.10 released", content="new version is out"))
        adapter = FakeAdapter("reddit")
        router = self.make_router(db, {"reddit": adapter})

        reply = router.process_message("tinygrad")

        assert reply.type == "tinygrad_analysis"
        assert len(reply.data["signals"]) == 1
        assert adapter.calls == 0

    def test_tinygrad_scans_when_none_stored(self, db):
        """With no stored mentions a comprehensive scan runs."""
        adapter = FakeAdapter("reddit", [
            make_signal(content="tinygrad beats pytorch"),
            make_signal(content="cuda again"),
        ])
        router = self.make_router(db, {"reddit": adapter})

        reply = router.process_message("find tinygrad mentions")

        assert reply.type == "tinygrad_results"
        assert len(reply.data) == 1
        assert adapter.calls == 1

    def test_score_leads(self, db):
        db.insert_signal(make_signal(content=EXAMPLE_CONTENT))
        db.insert_signal(make_signal(content="tinygrad"))
        router = self.make_router(db)

        reply = router.process_message("score leads")

        assert reply.type == "lead_scoring_results"
        assert len(reply.data["hot_leads"]) == 1
        assert len(reply.data["warm_leads"]) == 1
        assert reply.data["hot_leads"][0]["lead_score"] == 325

    def test_analytics_after_scoring(self, db):
        db.insert_signal(make_signal(content=EXAMPLE_CONTENT))
        router = self.make_router(db)
        router.process_message("score leads")

        reply = router.process_message("analytics")

        assert reply.type == "analytics_results"
        assert reply.data["total_leads"] == 1
        assert reply.data["hot_leads"] == 1

    def test_filters(self, db):
        """Stored-signal filters match content and, for titles, author."""
        db.insert_signal(make_signal(content="hello", author="cto_amy"))
        db.insert_signal(make_signal(content="too expensive for us"))
        db.insert_signal(make_signal(content="need a replacement for cuda"))
        db.insert_signal(make_signal(content="nothing here", priority=Priority.HIGHEST))
        router = self.make_router(db)

        assert len(router.process_message("find decision makers").data) == 1
        assert len(router.process_message("cheap stuff").data) == 1
        assert len(router.process_message("show alternatives").data) == 1
        high = router.process_message("high priority")
        assert high.type == "high_priority_results"
        assert len(high.data) == 1

    def test_show_signals(self, db):
        for i in range(12):
            db.insert_signal(make_signal(content=f"post {i}"))
        reply = self.make_router(db).process_message("latest signals")

        assert reply.type == "signals_results"
        assert len(reply.data) == 10

    def test_scan_platforms(self, db):
        adapters = {
            "reddit": FakeAdapter("reddit", [make_signal(content="GPU prices")]),
            "twitter": FakeAdapter("twitter", error=RuntimeError("rate limited")),
        }
        reply = self.make_router(db, adapters).process_message("scan")

        assert reply.type == "scan_results"
        assert reply.data["total"] == 1
        assert "twitter" in reply.data["errors"]

    def test_history(self, db):
        """Both sides of every exchange are recorded."""
        router = self.make_router(db)
        router.process_message("hello")
        router.process_message("analytics")

        history = router.get_history()
        assert [m["role"] for m in history] == ["user", "assistant", "user", "assistant"]
        assert history[0]["intent"] == "general_query"

        router.clear_history()
        assert router.get_history() == []


class TestConversation:
    """Tests for Conversation."""

    def test_bounded(self):
        """Oldest messages are dropped past the limit."""
        conversation = Conversation(max_messages=2)
        for text in ["a", "b", "c"]:
            conversation.add("user", text)
        assert [m.content for m in conversation.history()] == ["b", "c"]

    def test_unbounded_by_default(self):
        conversation = Conversation()
        for i in range(50):
            conversation.add("user", str(i))
        assert len(conversation) == 50
