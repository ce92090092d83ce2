"""Fan-out scans across source adapters with per-source failure isolation."""

import logging
import sqlite3
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..connectors import ADAPTERS, QUICK_SOURCES, ALL_SOURCES, BaseSourceAdapter, get_adapter
from ..core.config import settings
from ..core.models import Signal

logger = logging.getLogger(__name__)


@dataclass
class SourceOutcome:
    """What one adapter contributed to a scan."""

    stored: int = 0
    high_priority: int = 0
    duplicates: int = 0
    signals: List[Signal] = field(default_factory=list)


@dataclass
class ScanResult:
    """Combined counts from one scan."""

    mode: str
    per_source_counts: Dict[str, int] = field(default_factory=dict)
    high_priority_count: int = 0
    duplicates_skipped: int = 0
    errors: Dict[str, str] = field(default_factory=dict)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    signals: List[Signal] = field(default_factory=list)  # stored, with ids

    @property
    def total(self) -> int:
        return sum(self.per_source_counts.values())

    @property
    def failed_sources(self) -> List[str]:
        return list(self.errors)

    def to_dict(self) -> Dict:
        return {
            "mode": self.mode,
            "per_source_counts": dict(self.per_source_counts),
            "total": self.total,
            "high_priority_count": self.high_priority_count,
            "duplicates_skipped": self.duplicates_skipped,
            "errors": dict(self.errors),
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }


class ScanOrchestrator:
    """Runs adapters concurrently and persists what they return.

    Every adapter is waited on. One adapter raising is logged and counted as
    zero; the others' results are still stored and counted.
    """

    def __init__(
        self,
        db,
        adapters: Optional[Dict[str, BaseSourceAdapter]] = None,
        dedupe: Optional[bool] = None,
    ):
        self.db = db
        self.adapters = adapters if adapters is not None else {
            name: get_adapter(name) for name in ADAPTERS
        }
        self.dedupe = settings.dedupe if dedupe is None else dedupe

    def quick_scan(self) -> ScanResult:
        """Scan the always-available sources."""
        return self.run([s for s in QUICK_SOURCES if s in self.adapters], mode="quick")

    def comprehensive_scan(self) -> ScanResult:
        """Scan every configured source."""
        return self.run([s for s in ALL_SOURCES if s in self.adapters], mode="comprehensive")

    def run(self, sources: Sequence[str], mode: str = "custom") -> ScanResult:
        result = ScanResult(mode=mode, per_source_counts={name: 0 for name in sources})
        if not sources:
            result.finished_at = datetime.now()
            return result

        logger.info(f"Starting {mode} scan: {', '.join(sources)}")

        with ThreadPoolExecutor(max_workers=len(sources)) as executor:
            futures = {
                executor.submit(self._scan_source, name): name
                for name in sources
            }

            for future in as_completed(futures):
                name = futures[future]
                try:
                    outcome = future.result()
                except Exception as e:
                    logger.error(f"{name} scan failed: {e}")
                    result.errors[name] = str(e) or e.__class__.__name__
                    continue

                result.per_source_counts[name] = outcome.stored
                result.high_priority_count += outcome.high_priority
                result.duplicates_skipped += outcome.duplicates
                result.signals.extend(outcome.signals)

        result.finished_at = datetime.now()
        logger.info(
            f"{mode.capitalize()} scan completed: {result.total} signals "
            f"({result.high_priority_count} high priority, {len(result.errors)} sources failed)"
        )
        return result

    def _scan_source(self, name: str) -> SourceOutcome:
        signals = self.adapters[name].collect()
        outcome = SourceOutcome()
        for signal in signals:
            self._persist(signal, outcome)
        return outcome

    def _persist(self, signal: Signal, outcome: SourceOutcome):
        if self.dedupe and self.db.find_duplicate(signal) is not None:
            outcome.duplicates += 1
            return

        try:
            signal_id = self.db.insert_signal(signal)
        except sqlite3.Error as e:
            logger.warning(f"Failed to store {signal.platform.value} signal '{signal.title[:40]}': {e}")
            return

        outcome.signals.append(signal.with_id(signal_id))
        outcome.stored += 1
        if signal.priority.is_high:
            outcome.high_priority += 1
