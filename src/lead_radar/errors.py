"""Error taxonomy for the signal pipeline.

None of these are fatal to the process. Adapters, the orchestrator and the
chat router catch them at their boundary and degrade to an empty or
fallback result.
"""

from typing import Optional


class LeadRadarError(Exception):
    """Base class for all pipeline errors."""


class SourceUnavailable(LeadRadarError):
    """A source is disabled because its credential or config is missing."""

    def __init__(self, source: str, reason: str = "credentials not configured"):
        self.source = source
        self.reason = reason
        super().__init__(f"{source} unavailable: {reason}")


class FetchFailure(LeadRadarError):
    """Transient network or parsing failure for one page or item."""

    def __init__(self, source: str, detail: str, cause: Optional[BaseException] = None):
        self.source = source
        self.detail = detail
        self.cause = cause
        super().__init__(f"{source} fetch failed: {detail}")


class GenerationFailure(LeadRadarError):
    """The text generation collaborator could not produce a reply."""


class HandlerFailure(LeadRadarError):
    """An intent handler raised while building a chat reply."""

    def __init__(self, intent: str, cause: BaseException):
        self.intent = intent
        self.cause = cause
        super().__init__(f"Handler for '{intent}' failed: {cause}")
