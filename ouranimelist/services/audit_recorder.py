"""Audit trail for catalog mutations.

Entries are added to the caller's transaction and never committed here: a
mutation and its audit entry are persisted together or not at all.
"""

from datetime import datetime

from ouranimelist.constants import AUDIT_ACTIONS
from ouranimelist.repositories.auditlog_repository import AuditLogRepository
from ouranimelist.utils import format_timestamp, now_utc


class AuditRecorder:
    def __init__(self, clock=now_utc):
        self.clock = clock

    def record(self, account_name: str, action: str):
        """Stage one entry in the current transaction, stamped now."""
        if action not in AUDIT_ACTIONS:
            raise ValueError(f"Unknown audit action: {action}")
        return AuditLogRepository.create(
            commit=False,
            account_name=account_name,
            action=action,
            timestamp=format_timestamp(self.clock()),
        )

    def entries_since(self, cutoff: datetime):
        return AuditLogRepository.get_since(format_timestamp(cutoff))

    def count_by_account_since(self, cutoff: datetime) -> dict:
        return AuditLogRepository.count_by_account_since(format_timestamp(cutoff))

    def recent_entries(self, account_name=None, limit=100):
        return AuditLogRepository.get_recent(account_name=account_name, limit=limit)
