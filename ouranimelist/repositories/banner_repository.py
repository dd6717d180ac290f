"""
Repository for Banner database operations

Every query here is filtered by owner. There is no unscoped
lookup by title.
"""

from sqlalchemy import case
from sqlalchemy.exc import SQLAlchemyError

from ouranimelist.constants import DAYS_OF_WEEK
from ouranimelist.db import db
from ouranimelist.models.banner import Banner


def _paginate(query, limit, offset):
    if limit is not None:
        query = query.limit(limit)
    if offset:
        query = query.offset(offset)
    return query


class BannerRepository:
    """Repository for Banner database operations"""

    @staticmethod
    def get_by_owner_and_title(owner, title):
        """Get the Banner identified by (owner, title)"""
        return Banner.query.filter_by(owner=owner, title=title).first()

    @staticmethod
    def create(commit=True, **kwargs):
        """Create new Banner record"""
        try:
            item = Banner(**kwargs)
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
    def update_field(owner, title, field, value, commit=True):
        """Set one column on the matching row. Returns the number of rows updated."""
        try:
            updated = (
                Banner.query.filter_by(owner=owner, title=title)
                .update({getattr(Banner, field): value}, synchronize_session=False)
            )
            if commit:
                db.session.commit()
            return updated
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def delete(owner, title, commit=True):
        """Delete the matching row. Returns the number of rows deleted."""
        try:
            deleted = Banner.query.filter_by(owner=owner, title=title).delete(synchronize_session=False)
            if commit:
                db.session.commit()
            return deleted
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def list_by_owner(owner, limit=None, offset=0):
        """Banners of one owner in insertion order"""
        query = Banner.query.filter_by(owner=owner).order_by(Banner.id)
        return _paginate(query, limit, offset).all()

    @staticmethod
    def search_by_owner(owner, text, limit=None, offset=0):
        """Banners of one owner whose title contains text"""
        query = (
            Banner.query.filter(Banner.owner == owner, Banner.title.contains(text, autoescape=True))
            .order_by(Banner.id)
        )
        return _paginate(query, limit, offset).all()

    @staticmethod
    def list_by_release_distance(owner, today_index, limit=None, offset=0):
        """
        Banners of one owner ordered by how many days away their release day is
        from today_index (0 = today, 6 = tomorrow a week later). Unknown day
        names sort last.
        """
        distance = case(
            {day: (index - today_index) % len(DAYS_OF_WEEK) for index, day in enumerate(DAYS_OF_WEEK)},
            value=Banner.release_day,
            else_=len(DAYS_OF_WEEK),
        )
        query = Banner.query.filter_by(owner=owner).order_by(distance, Banner.id)
        return _paginate(query, limit, offset).all()

    @staticmethod
    def count_by_owner(owner):
        """Count Banner records of one owner"""
        return Banner.query.filter_by(owner=owner).count()
