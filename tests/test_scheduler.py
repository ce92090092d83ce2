"""Tests for the scan scheduler."""

from datetime import datetime, timedelta

from lead_radar.scanning import ScanScheduler, ScanResult, next_daily_run


class CountingOrchestrator:
    """Orchestrator stand-in that records comprehensive scans."""

    def __init__(self, error=None):
        self.scans = 0
        self.error = error

    def comprehensive_scan(self):
        self.scans += 1
        if self.error:
            raise self.error
        return ScanResult(mode="comprehensive")


START = datetime(2024, 1, 1, 12, 0)


class TestNextDailyRun:
    """Tests for next_daily_run."""

    def test_later_today(self):
        assert next_daily_run(datetime(2024, 1, 1, 1, 0), 2) == datetime(2024, 1, 1, 2, 0)

    def test_exactly_now_rolls_over(self):
        """The run time itself isn't 'after', so the next day is used."""
        assert next_daily_run(datetime(2024, 1, 1, 2, 0), 2) == datetime(2024, 1, 2, 2, 0)

    def test_tomorrow(self):
        assert next_daily_run(datetime(2024, 1, 31, 3, 0), 2) == datetime(2024, 2, 1, 2, 0)


class TestScanScheduler:
    """Tests for ScanScheduler."""

    def setup_method(self):
        """Set up test fixtures."""
        self.orchestrator = CountingOrchestrator()
        self.scheduler = ScanScheduler(
            self.orchestrator,
            interval_seconds=900,
            nightly_hour=2,
            clock=lambda: START,
        )

    def test_initial_schedule(self):
        """First runs are one interval away and at the next nightly hour."""
        assert self.scheduler.next_interval_run == START + timedelta(minutes=15)
        assert self.scheduler.next_nightly_run == datetime(2024, 1, 2, 2, 0)

    def test_nothing_due(self):
        assert self.scheduler.run_pending(START + timedelta(minutes=10)) == []
        assert self.orchestrator.scans == 0

    def test_interval_scan(self):
        """A due interval scan runs once and reschedules."""
        now = START + timedelta(minutes=15)
        results = self.scheduler.run_pending(now)

        assert len(results) == 1
        assert self.orchestrator.scans == 1
        assert self.scheduler.last_result is results[0]
        assert self.scheduler.next_interval_run == now + timedelta(minutes=15)
        assert self.scheduler.run_pending(now + timedelta(minutes=1)) == []

    def test_nightly_and_interval_share_one_scan(self):
        """When both schedules are due, one scan covers them and both move on."""
        now = datetime(2024, 1, 2, 2, 0)
        results = self.scheduler.run_pending(now)

        assert len(results) == 1
        assert self.orchestrator.scans == 1
        assert self.scheduler.next_nightly_run == datetime(2024, 1, 3, 2, 0)
        assert self.scheduler.next_interval_run == now + timedelta(minutes=15)
        assert self.scheduler.run_pending(now + timedelta(minutes=1)) == []

    def test_nightly_scan_restarts_interval(self):
        """A nightly scan pushes the next interval scan a full interval out."""
        self.scheduler.next_interval_run = datetime(2024, 1, 2, 2, 5)
        now = datetime(2024, 1, 2, 2, 0)

        assert len(self.scheduler.run_pending(now)) == 1
        assert self.scheduler.next_interval_run == now + timedelta(minutes=15)
        assert self.scheduler.run_pending(datetime(2024, 1, 2, 2, 5)) == []
        assert self.orchestrator.scans == 1

    def test_start_stop(self):
        """The background thread starts and stops cleanly."""
        scheduler = ScanScheduler(
            CountingOrchestrator(error=RuntimeError("boom")),
            interval_seconds=1,
            nightly_hour=2,
            poll_seconds=0.01,
        )
        scheduler.start()
        assert scheduler.running
        scheduler.stop()
        assert not scheduler.running
        assert not scheduler.thread.is_alive()
