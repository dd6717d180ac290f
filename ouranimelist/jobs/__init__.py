"""
Jobs package - background tasks and scheduling
"""
from .scheduler import JobScheduler, MONITOR_JOB_ID

__all__ = ["JobScheduler", "MONITOR_JOB_ID"]
