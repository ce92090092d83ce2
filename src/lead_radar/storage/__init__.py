"""Storage layer for signals and outreach responses."""

from .database import SignalDatabase
from .models import OutreachResponse

__all__ = ["SignalDatabase", "OutreachResponse"]
