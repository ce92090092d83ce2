"""Data models for signal storage."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any


@dataclass
class OutreachResponse:
    """Generated outreach text tied to one signal."""

    id: Optional[int] = None
    signal_id: int = 0
    response_text: str = ""
    created_at: datetime = field(default_factory=datetime.now)

    # Filled from the joined signal row when listing
    signal_title: Optional[str] = None
    signal_platform: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "signal_id": self.signal_id,
            "response_text": self.response_text,
            "created_at": self.created_at.isoformat(),
            "title": self.signal_title,
            "platform": self.signal_platform,
        }
