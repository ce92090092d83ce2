"""Tests for outreach text generation."""

import json

import pytest

from lead_radar.ai import TextGenerator, FallbackGenerator, OutreachGenerator, OutreachDraft
from lead_radar.errors import GenerationFailure

from helpers import make_signal, FailingGenerator, StaticGenerator, fake_openai_client


class TestTextGenerator:
    """Tests for TextGenerator."""

    def test_missing_key(self):
        """No API key is a generation failure, not a crash."""
        with pytest.raises(GenerationFailure):
            TextGenerator(api_key="").generate("hi")

    def test_generate(self):
        """The prompt and context are sent with the system prompt."""
        generator = TextGenerator(api_key="sk-test", model="gpt-test", system_prompt="Be brief.")
        generator._client = fake_openai_client(content="  Sure thing.  ")

        assert generator.generate("Say hi", "some context", max_tokens=50) == "Sure thing."

        call = generator._client.calls[0]
        assert call["model"] == "gpt-test"
        assert call["max_tokens"] == 50
        assert call["messages"][0] == {"role": "system", "content": "Be brief."}
        assert call["messages"][1]["content"] == "Say hi\n\nContext: some context"

    def test_client_error(self):
        """Client errors are wrapped in GenerationFailure."""
        generator = TextGenerator(api_key="sk-test")
        generator._client = fake_openai_client(error=RuntimeError("rate limited"))

        with pytest.raises(GenerationFailure) as exc:
            generator.generate("hi")
        assert "rate limited" in str(exc.value)

    def test_empty_reply(self):
        generator = TextGenerator(api_key="sk-test")
        generator._client = fake_openai_client(content="")

        with pytest.raises(GenerationFailure):
            generator.generate("hi")


class TestFallbackGenerator:
    """Tests for the rule-based fallback."""

    def setup_method(self):
        """Set up test fixtures."""
        self.fallback = FallbackGenerator()

    def test_cost(self):
        draft = self.fallback.outreach("H100s are too expensive")
        assert draft.analysis.startswith("Strong cost-focused opportunity")
        assert draft.generated is False

    def test_performance(self):
        draft = self.fallback.outreach("Training is slow")
        assert draft.analysis.startswith("Performance-focused opportunity")

    def test_availability(self):
        draft = self.fallback.outreach("GPU shortage again")
        assert draft.analysis.startswith("Availability-driven opportunity")

    def test_rule_order(self):
        """Cost wins over performance when both appear."""
        draft = self.fallback.outreach("slow and expensive")
        assert draft.analysis.startswith("Strong cost-focused opportunity")

    def test_default(self):
        draft = self.fallback.outreach("Nice weather today")
        assert "opportunity to introduce" in draft.analysis


class TestOutreachGenerator:
    """Tests for OutreachGenerator."""

    def test_generated_draft(self):
        """Three generations fill analysis, response and context."""
        generator = StaticGenerator(["analysis text", "response text", "context text"])
        draft = OutreachGenerator(generator=generator).draft("GPU too expensive")

        assert draft == OutreachDraft("analysis text", "response text", "context text")
        assert len(generator.prompts) == 3
        assert 'Discussion: "GPU too expensive"' in generator.prompts[0]

    def test_fallback_on_failure(self):
        """Any generation failure uses the fallback triple."""
        draft = OutreachGenerator(generator=FailingGenerator()).draft("GPU too expensive")
        assert draft.generated is False
        assert draft.analysis.startswith("Strong cost-focused opportunity")

    def test_draft_and_store(self, db):
        """Drafts are stored as JSON against the signal."""
        signal_id = db.insert_signal(make_signal(content="Training is slow"))
        signal = db.get_signal(signal_id)

        draft, response_id = OutreachGenerator(generator=FailingGenerator()).draft_and_store(signal, db)

        stored = db.list_responses(signal_id=signal_id)
        assert stored[0].id == response_id
        assert json.loads(stored[0].response_text) == {
            "analysis": draft.analysis,
            "response": draft.response,
            "context": draft.context,
        }
