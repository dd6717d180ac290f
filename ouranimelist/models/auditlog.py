"""Audit log model.

Append-only: one row per successful mutation of the catalog. Timestamps are
stored as sortable UTC strings so window queries are plain comparisons.
"""

from ouranimelist.db import db


class AuditLog(db.Model):
    __tablename__ = "audit_log"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    account_name = db.Column(db.String(100), db.ForeignKey("accounts.name"), nullable=False)
    action = db.Column(db.String(50), nullable=False)
    timestamp = db.Column(db.String(32), nullable=False, index=True)

    __table_args__ = (db.Index("idx_audit_account_timestamp", "account_name", "timestamp"),)

    def to_dict(self):
        return {
            "id": self.id,
            "account": self.account_name,
            "action": self.action,
            "timestamp": self.timestamp,
        }
