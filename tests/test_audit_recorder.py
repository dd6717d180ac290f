"""
Tests for the audit trail
"""
from datetime import timedelta

import pytest

from conftest import MONDAY_NOON, FixedClock
from ouranimelist.constants import ACTION_ADD, ACTION_DELETE
from ouranimelist.db import db
from ouranimelist.repositories.auditlog_repository import AuditLogRepository
from ouranimelist.services.audit_recorder import AuditRecorder
from ouranimelist.utils import format_timestamp, parse_timestamp


class TestAuditRecorder:
    def test_record_is_staged_until_commit(self, accounts, clock):
        recorder = AuditRecorder(clock=clock)
        recorder.record("alice", ACTION_ADD)
        db.session.rollback()

        assert AuditLogRepository.count() == 0

    def test_record_and_commit(self, accounts, clock):
        recorder = AuditRecorder(clock=clock)
        recorder.record("alice", ACTION_ADD)
        db.session.commit()

        entry = AuditLogRepository.get_recent("alice")[0]
        assert entry.action == ACTION_ADD
        assert entry.timestamp == format_timestamp(MONDAY_NOON)

    def test_unknown_action_rejected(self, accounts):
        with pytest.raises(ValueError):
            AuditRecorder().record("alice", "rename")

    def test_window_counts(self, accounts):
        clock = FixedClock()
        recorder = AuditRecorder(clock=clock)

        clock.now = MONDAY_NOON - timedelta(seconds=30)
        recorder.record("alice", ACTION_ADD)
        clock.now = MONDAY_NOON - timedelta(seconds=5)
        recorder.record("alice", ACTION_DELETE)
        recorder.record("bob", ACTION_ADD)
        clock.now = MONDAY_NOON
        recorder.record("bob", ACTION_DELETE)
        db.session.commit()

        cutoff = MONDAY_NOON - timedelta(seconds=10)
        assert recorder.count_by_account_since(cutoff) == {"alice": 1, "bob": 2}
        assert [entry.account_name for entry in recorder.entries_since(cutoff)] == ["alice", "bob", "bob"]

    def test_recent_entries_newest_first(self, accounts, clock):
        recorder = AuditRecorder(clock=clock)
        recorder.record("alice", ACTION_ADD)
        recorder.record("alice", ACTION_DELETE)
        db.session.commit()

        assert [entry.action for entry in recorder.recent_entries("alice")] == [ACTION_DELETE, ACTION_ADD]
        assert recorder.recent_entries("bob") == []


class TestTimestamps:
    def test_format_is_sortable_utc(self):
        assert format_timestamp(MONDAY_NOON) == "2026-01-05 12:00:00.000000"
        assert format_timestamp(MONDAY_NOON) < format_timestamp(MONDAY_NOON + timedelta(microseconds=1))

    def test_parse_round_trip(self):
        assert parse_timestamp(format_timestamp(MONDAY_NOON)) == MONDAY_NOON
