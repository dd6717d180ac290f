"""
Background anomaly detection over the audit log.

Every tick looks at the trailing window [now - interval, now], counts audit
entries per account and flags every account whose count reaches the threshold.
Windows are back to back, so each entry is inspected once as long as ticks run
on schedule; a tick that runs late leaves a gap.

A failing tick is logged and dropped. The schedule keeps running.
"""
import logging
import time
from datetime import timedelta

from ouranimelist.metrics import (
    accounts_flagged_total,
    flagged_accounts_current,
    monitor_tick_duration_seconds,
    monitor_ticks_total,
)
from ouranimelist.repositories.flagged_account_repository import FlaggedAccountRepository
from ouranimelist.services.audit_recorder import AuditRecorder
from ouranimelist.utils import format_timestamp, now_utc

logger = logging.getLogger("main")


class AnomalyMonitor:
    def __init__(self, app, notifier, interval_seconds=10, threshold=10, clock=now_utc, recorder=None):
        if interval_seconds <= 0:
            raise ValueError(f"Monitor interval must be positive: {interval_seconds}")
        if threshold < 1:
            raise ValueError(f"Monitor threshold must be >= 1: {threshold}")

        self.app = app
        self.notifier = notifier
        self.interval = timedelta(seconds=interval_seconds)
        self.threshold = threshold
        self.clock = clock
        self.recorder = recorder or AuditRecorder(clock=clock)

    @property
    def interval_seconds(self):
        return self.interval.total_seconds()

    def evaluate(self, now=None):
        """
        Accounts at or over the threshold in the window ending at now, as
        {account: count}. Read only.
        """
        now = now or self.clock()
        counts = self.recorder.count_by_account_since(now - self.interval)
        return {account: count for account, count in counts.items() if count >= self.threshold}

    def tick(self):
        """Run one detection cycle. Returns the accounts flagged this cycle."""
        start_time = time.monotonic()
        flagged = []
        try:
            with self.app.app_context():
                now = self.clock()
                breaches = self.evaluate(now)
                for account_name in sorted(breaches):
                    FlaggedAccountRepository.upsert(account_name, format_timestamp(now))
                    accounts_flagged_total.inc()
                    logger.warning(
                        f"Account {account_name} made {breaches[account_name]} changes in the last "
                        f"{self.interval_seconds:g}s (threshold {self.threshold}), flagged"
                    )
                    self.notifier.notify(account_name)
                    flagged.append(account_name)
                if flagged:
                    flagged_accounts_current.set(FlaggedAccountRepository.count())
        except Exception as e:
            logger.error(f"Anomaly monitor tick failed: {e}", exc_info=True)
            monitor_ticks_total.labels(status="failed").inc()
            return flagged
        finally:
            monitor_tick_duration_seconds.observe(time.monotonic() - start_time)

        monitor_ticks_total.labels(status="success").inc()
        return flagged
