"""
Background Jobs - periodic tasks running beside the request handlers
"""
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
import logging

logger = logging.getLogger('main')

MONITOR_JOB_ID = 'anomaly_monitor'


class JobScheduler:
    """Owns the APScheduler instance for the process"""

    def __init__(self):
        self.scheduler = BackgroundScheduler(timezone='UTC')
        self._jobs_registered = False

    def init_monitor(self, monitor):
        """Schedule the anomaly monitor and start the scheduler"""
        self._register_jobs(monitor)
        if not self.scheduler.running:
            self.scheduler.start()
        logger.info("Job scheduler initialized")

    def _register_jobs(self, monitor):
        if self._jobs_registered:
            return

        # A tick that overruns must not overlap the next one
        self.scheduler.add_job(
            func=monitor.tick,
            trigger=IntervalTrigger(seconds=monitor.interval_seconds),
            id=MONITOR_JOB_ID,
            name='Anomaly Monitor',
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )

        self._jobs_registered = True
        logger.info(
            f"Anomaly monitor scheduled every {monitor.interval_seconds:g}s (threshold {monitor.threshold})"
        )

    def get_job(self, job_id):
        return self.scheduler.get_job(job_id)

    def shutdown(self, wait=False):
        """Stop the scheduler"""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
            logger.info("Job scheduler shutdown")
