"""Test doubles shared across the test modules."""

from datetime import datetime
from types import SimpleNamespace

import requests

from lead_radar.core.models import Signal, Platform, Priority
from lead_radar.errors import GenerationFailure


EXAMPLE_CONTENT = (
    "We love tinygrad's performance vs pytorch but the budget for NVIDIA H100s "
    "is too expensive for our startup, our VP of Engineering approved switching"
)


def make_signal(**overrides) -> Signal:
    """Build a signal with sensible defaults."""
    fields = dict(
        platform=Platform.REDDIT,
        title="Looking at GPUs",
        content="Looking at GPUs for training",
        url="https://reddit.com/r/hardware/comments/x1/",
        author="someone",
        priority=Priority.MEDIUM,
        created_at=datetime(2024, 5, 1, 12, 0),
    )
    fields.update(overrides)
    return Signal(**fields)


class FakeResponse:
    """Canned requests.Response."""

    def __init__(self, payload=None, status_code: int = 200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Routes GET requests to canned payloads by URL suffix."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        for suffix, payload in self.routes.items():
            if url.endswith(suffix):
                if isinstance(payload, requests.RequestException):
                    raise payload
                if isinstance(payload, FakeResponse):
                    return payload
                return FakeResponse(payload)
        return FakeResponse(status_code=404)

    @property
    def urls(self):
        return [call["url"] for call in self.calls]


class FailingGenerator:
    """Text generator that is never configured."""

    def __init__(self):
        self.calls = 0

    def generate(self, prompt, context_text="", **kwargs):
        self.calls += 1
        raise GenerationFailure("OpenAI API key not configured")


class StaticGenerator:
    """Text generator returning queued replies, then a default."""

    def __init__(self, replies=None, default: str = "Generated text"):
        self.replies = list(replies or [])
        self.default = default
        self.prompts = []

    def generate(self, prompt, context_text="", **kwargs):
        self.prompts.append(prompt)
        if self.replies:
            return self.replies.pop(0)
        return self.default


class FakeAdapter:
    """Source adapter with canned results."""

    def __init__(self, name: str, signals=None, error: Exception = None, available: bool = True):
        self.source_name = name
        self.signals = list(signals or [])
        self.error = error
        self.available = available
        self.calls = 0

    def is_available(self) -> bool:
        return self.available

    def collect(self, terms=None):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.signals)


def fake_openai_client(content=None, error: Exception = None):
    """Object shaped like an OpenAI client's chat.completions."""
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        if error:
            raise error
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    client.calls = calls
    return client
