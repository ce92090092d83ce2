"""Outreach text generation using OpenAI GPT, with a rule-based fallback."""

import json
import logging
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Tuple

from ..core.config import settings
from ..errors import GenerationFailure

logger = logging.getLogger(__name__)

ANALYST_PROMPT = """You are a Tenstorrent AI sales analyst. Analyze how this discussion relates to Tenstorrent's AI hardware solutions. Focus on:
1. Specific pain points mentioned (cost, performance, availability, etc.)
2. How Tenstorrent's open-source approach addresses these issues
3. Key selling points relevant to this specific situation
4. Potential objections or concerns to address

Provide a concise but thorough analysis in 2-3 sentences."""

REPRESENTATIVE_PROMPT = """You are a Tenstorrent AI sales representative. Generate a natural, human-phrased response for sales outreach that:
1. Addresses the specific pain points mentioned in the discussion
2. Mentions Tenstorrent's open-source approach and AI hardware solutions
3. Provides a soft call-to-action that feels conversational
4. Sounds like a helpful colleague, not a salesperson
5. Is personalized to their specific situation
6. Includes a reason to continue the conversation

Write as if you're genuinely trying to help solve their problem. Keep it conversational and authentic."""

STRATEGIST_PROMPT = """You are a sales strategist. Based on this discussion, provide strategic context for sales outreach:
1. Best approach for initial contact
2. Key points to emphasize in follow-up
3. Potential next steps or resources to offer
4. Timeline considerations

Keep it practical and actionable for a sales team."""

DEFAULT_SYSTEM_PROMPT = (
    "You are an AI sales assistant for Tenstorrent, an AI hardware company "
    "with an open-source approach. Be concise, practical and specific."
)


@dataclass
class OutreachDraft:
    """Analysis, outreach message and sales context for one signal."""

    analysis: str
    response: str
    context: str
    generated: bool = True  # False when produced by the fallback

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data.pop("generated")
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class TextGenerator:
    """Chat-completion text generation collaborator."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ):
        """Initialize the generator."""
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.openai_model
        self.system_prompt = system_prompt
        self._client = None

    @property
    def client(self):
        """Lazy-load OpenAI client."""
        if self._client is None:
            try:
                from openai import OpenAI
                self._client = OpenAI(api_key=self.api_key, timeout=settings.http_timeout)
            except ImportError:
                raise ImportError("openai package required. Install with: pip install openai")
        return self._client

    def generate(
        self,
        prompt: str,
        context_text: str = "",
        system_prompt: Optional[str] = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        """Return generated prose. Raises GenerationFailure on any failure."""
        if not self.api_key:
            raise GenerationFailure("OpenAI API key not configured")

        user_content = prompt
        if context_text:
            user_content = f"{prompt}\n\nContext: {context_text}"

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt or self.system_prompt},
                    {"role": "user", "content": user_content},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
            text = (response.choices[0].message.content or "").strip()
        except Exception as e:
            raise GenerationFailure(f"Text generation failed: {e}") from e

        if not text:
            raise GenerationFailure("Text generation returned an empty reply")
        return text


# (trigger words, analysis, response, context), checked in order
FALLBACK_RULES: Tuple[Tuple[Tuple[str, ...], str, str, str], ...] = (
    (
        ("expensive", "cost", "budget", "price"),
        "Strong cost-focused opportunity. The discussion highlights budget constraints "
        "that Tenstorrent's transparent pricing model directly addresses.",
        "If budget is a concern, Tenstorrent's open-source AI hardware might be worth "
        "exploring as a cost-effective alternative to NVIDIA's premium pricing. Happy to "
        "share some cost comparisons if that would be helpful.",
        "Lead with pricing transparency and cost savings. Offer detailed cost analysis "
        "and ROI calculations.",
    ),
    (
        ("performance", "slow", "bottleneck"),
        "Performance-focused opportunity. User is experiencing limitations that "
        "Tenstorrent's architecture could potentially address.",
        "Have you considered Tenstorrent's approach? Our open-source AI architecture "
        "offers competitive performance with more transparent pricing than traditional "
        "GPU vendors. Would be happy to discuss how it might fit your performance "
        "requirements.",
        "Focus on technical performance benefits. Offer benchmarks and technical "
        "deep-dive sessions.",
    ),
    (
        ("shortage", "waitlist", "backorder", "availability"),
        "Availability-driven opportunity. Supply chain issues with traditional vendors "
        "create an opening for Tenstorrent solutions.",
        "While NVIDIA GPUs face availability issues, Tenstorrent's AI hardware solutions "
        "focus on open-source innovation that might better fit your timeline and "
        "requirements. Worth exploring if you're looking for alternatives.",
        "Emphasize availability and delivery timelines. Highlight supply chain "
        "advantages.",
    ),
)

DEFAULT_FALLBACK = OutreachDraft(
    analysis="This discussion presents an opportunity to introduce Tenstorrent's "
             "open-source AI hardware solutions as an alternative to traditional GPU vendors.",
    response="Tenstorrent's open-source AI hardware could be an interesting alternative - "
             "we focus on transparent pricing and accessible AI compute solutions.",
    context="Consider reaching out with technical documentation and cost comparison data. "
            "Follow up with performance benchmarks relevant to their use case.",
    generated=False,
)


class FallbackGenerator:
    """Deterministic outreach text keyed on pain-point words."""

    def outreach(self, content: str) -> OutreachDraft:
        text = (content or "").lower()
        for triggers, analysis, response, context in FALLBACK_RULES:
            if any(word in text for word in triggers):
                return OutreachDraft(analysis, response, context, generated=False)
        return DEFAULT_FALLBACK


class OutreachGenerator:
    """Produces the analysis/response/context triple for a signal."""

    def __init__(
        self,
        generator: Optional[TextGenerator] = None,
        fallback: Optional[FallbackGenerator] = None,
    ):
        self.generator = generator or TextGenerator()
        self.fallback = fallback or FallbackGenerator()

    def draft(self, content: str) -> OutreachDraft:
        """Three generations. Any failure substitutes the fallback draft."""
        discussion = f'Discussion: "{content}"'
        try:
            analysis = self.generator.generate(
                "Analyze this AI hardware discussion for Tenstorrent sales opportunities:\n\n"
                f"{discussion}\n\n"
                "How does this relate to Tenstorrent's AI hardware solutions and what are "
                "the key selling points?",
                system_prompt=ANALYST_PROMPT,
                max_tokens=200,
                temperature=0.3,
            )
            response = self.generator.generate(
                "Based on this AI hardware discussion, generate a natural sales outreach "
                f"response:\n\n{discussion}\n\n"
                "Write a conversational response that addresses their needs and mentions "
                "Tenstorrent's solutions.",
                system_prompt=REPRESENTATIVE_PROMPT,
                max_tokens=200,
                temperature=0.7,
            )
            context = self.generator.generate(
                discussion,
                system_prompt=STRATEGIST_PROMPT,
                max_tokens=150,
                temperature=0.5,
            )
        except GenerationFailure as e:
            logger.warning(f"Using fallback outreach text: {e}")
            return self.fallback.outreach(content)

        logger.info("Generated outreach analysis, response and context")
        return OutreachDraft(analysis=analysis, response=response, context=context)

    def draft_and_store(self, signal, db) -> Tuple[OutreachDraft, int]:
        """Draft outreach for a stored signal and persist it. Returns (draft, response id)."""
        draft = self.draft(signal.content)
        response_id = db.insert_response(signal.id, draft.to_json())
        return draft, response_id
