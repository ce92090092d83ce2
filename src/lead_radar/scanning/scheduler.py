"""Background scheduler for unattended comprehensive scans."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from ..core.config import settings
from .orchestrator import ScanOrchestrator, ScanResult

logger = logging.getLogger(__name__)


def next_daily_run(after: datetime, hour: int, minute: int = 0) -> datetime:
    """The next time-of-day occurrence strictly after ``after``."""
    candidate = after.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate <= after:
        candidate += timedelta(days=1)
    return candidate


class ScanScheduler:
    """Runs the comprehensive scan on a fixed interval and once a day."""

    def __init__(
        self,
        orchestrator: ScanOrchestrator,
        interval_seconds: Optional[int] = None,
        nightly_hour: Optional[int] = None,
        poll_seconds: float = 30,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.orchestrator = orchestrator
        self.interval = interval_seconds or settings.scan_interval_seconds
        self.nightly_hour = settings.nightly_hour if nightly_hour is None else nightly_hour
        self.poll_seconds = poll_seconds
        self.clock = clock

        now = self.clock()
        self.next_interval_run = now + timedelta(seconds=self.interval)
        self.next_nightly_run = next_daily_run(now, self.nightly_hour)

        self.running = False
        self.thread = None
        self._stop_event = threading.Event()
        self.last_result: Optional[ScanResult] = None

    def start(self):
        self.running = True
        self._stop_event.clear()
        self.thread = threading.Thread(target=self._run_loop, daemon=True)
        self.thread.start()
        logger.info(
            f"Scan scheduler started (interval: {self.interval}s, "
            f"nightly at {self.nightly_hour:02d}:00)"
        )

    def stop(self):
        self.running = False
        self._stop_event.set()
        if self.thread:
            self.thread.join(timeout=5)

    def _run_loop(self):
        while self.running:
            try:
                self.run_pending()
            except Exception as e:
                logger.exception(f"Scan scheduler error: {e}")
            self._stop_event.wait(self.poll_seconds)

    def run_pending(self, now: Optional[datetime] = None) -> List[ScanResult]:
        """Run the comprehensive scan if either schedule is due.

        Both schedules falling due in the same tick share a single scan. Any
        scan restarts the interval countdown.
        """
        now = now or self.clock()
        interval_due = now >= self.next_interval_run
        nightly_due = now >= self.next_nightly_run
        if not (interval_due or nightly_due):
            return []

        if nightly_due:
            logger.info("Running nightly comprehensive scan")
        else:
            logger.info("Running scheduled comprehensive scan")
        result = self._run_scan()

        self.next_interval_run = now + timedelta(seconds=self.interval)
        if nightly_due:
            self.next_nightly_run = next_daily_run(now, self.nightly_hour)
        return [result]

    def _run_scan(self) -> ScanResult:
        result = self.orchestrator.comprehensive_scan()
        self.last_result = result
        return result
