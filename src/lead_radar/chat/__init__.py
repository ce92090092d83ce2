"""Chat interface: keyword intent routing."""

from .router import (
    Intent,
    INTENT_TABLE,
    ChatReply,
    ChatMessage,
    Conversation,
    IntentRouter,
    detect_intent,
)

__all__ = [
    "Intent",
    "INTENT_TABLE",
    "ChatReply",
    "ChatMessage",
    "Conversation",
    "IntentRouter",
    "detect_intent",
]
