"""Scan orchestration and scheduling."""

from .orchestrator import ScanOrchestrator, ScanResult, SourceOutcome
from .scheduler import ScanScheduler, next_daily_run

__all__ = [
    "ScanOrchestrator",
    "ScanResult",
    "SourceOutcome",
    "ScanScheduler",
    "next_daily_run",
]
