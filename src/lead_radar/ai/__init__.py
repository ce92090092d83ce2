"""Text generation for outreach and chat."""

from .generation import (
    TextGenerator,
    FallbackGenerator,
    OutreachGenerator,
    OutreachDraft,
)

__all__ = [
    "TextGenerator",
    "FallbackGenerator",
    "OutreachGenerator",
    "OutreachDraft",
]
