"""
Repository for AuditLog database operations
"""

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ouranimelist.db import db
from ouranimelist.models.auditlog import AuditLog


class AuditLogRepository:
    """Repository for AuditLog database operations"""

    @staticmethod
    def create(commit=True, **kwargs):
        """Append a new AuditLog record"""
        try:
            item = AuditLog(**kwargs)
            db.session.add(item)
            if commit:
                db.session.commit()
            else:
                db.session.flush()
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def get_since(cutoff):
        """All entries with timestamp >= cutoff, oldest first"""
        return AuditLog.query.filter(AuditLog.timestamp >= cutoff).order_by(AuditLog.id).all()

    @staticmethod
    def count_by_account_since(cutoff):
        """Map of account name -> number of entries with timestamp >= cutoff"""
        rows = (
            db.session.query(AuditLog.account_name, func.count(AuditLog.id))
            .filter(AuditLog.timestamp >= cutoff)
            .group_by(AuditLog.account_name)
            .all()
        )
        return {account_name: count for account_name, count in rows}

    @staticmethod
    def get_recent(account_name=None, limit=100):
        """Newest entries first, optionally for one account"""
        query = AuditLog.query
        if account_name:
            query = query.filter_by(account_name=account_name)
        return query.order_by(AuditLog.id.desc()).limit(limit).all()

    @staticmethod
    def count(account_name=None):
        """Count AuditLog records"""
        query = AuditLog.query
        if account_name:
            query = query.filter_by(account_name=account_name)
        return query.count()
