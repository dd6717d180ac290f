"""
Repository for Account database operations
"""

from sqlalchemy.exc import SQLAlchemyError

from ouranimelist.db import db
from ouranimelist.models.account import Account


class AccountRepository:
    """Repository for Account database operations"""

    @staticmethod
    def get_all():
        """Get all Account records ordered by name"""
        return Account.query.order_by(Account.name).all()

    @staticmethod
    def get_by_name(name):
        """Get Account by name"""
        return db.session.get(Account, name)

    @staticmethod
    def create(commit=True, **kwargs):
        """Create new Account record"""
        try:
            item = Account(**kwargs)
            db.session.add(item)
            if commit:
                db.session.commit()
            else:
                db.session.flush()
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e
