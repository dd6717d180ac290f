"""
Repository for FlaggedAccount database operations
"""

from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError

from ouranimelist.db import db
from ouranimelist.models.flagged_account import FlaggedAccount


class FlaggedAccountRepository:
    """Repository for FlaggedAccount database operations"""

    @staticmethod
    def get_all():
        """All flagged accounts, first detection first"""
        return FlaggedAccount.query.order_by(FlaggedAccount.flagged_at, FlaggedAccount.account_name).all()

    @staticmethod
    def get_by_name(account_name):
        """Get FlaggedAccount by account name"""
        return db.session.get(FlaggedAccount, account_name)

    @staticmethod
    def upsert(account_name, detected_at, commit=True):
        """Insert the flag, or bump last_detected_at/detections if it exists"""
        table = FlaggedAccount.__table__
        stmt = insert(table).values(
            account_name=account_name,
            flagged_at=detected_at,
            last_detected_at=detected_at,
            detections=1,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["account_name"],
            set_=dict(
                last_detected_at=stmt.excluded.last_detected_at,
                detections=table.c.detections + 1,
            ),
        )
        try:
            db.session.execute(stmt)
            if commit:
                db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def count():
        """Count FlaggedAccount records"""
        return FlaggedAccount.query.count()
