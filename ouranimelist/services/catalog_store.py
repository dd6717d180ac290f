"""
Owner-scoped banner catalog.

Every operation takes the acting account and only ever touches that account's
banners. Mutations are committed together with exactly one audit entry; reads
have no side effects. Deletes and updates that match nothing still succeed
(and are still audited) and report 0 affected rows.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ouranimelist.constants import (
    ACTION_ADD,
    ACTION_DELETE,
    ACTION_UPDATE_CURRENT_EPISODES,
    ACTION_UPDATE_RELEASE_DAY,
    ACTION_UPDATE_RELEASE_TIME,
    ACTION_UPDATE_TOTAL_EPISODES,
    DAYS_OF_WEEK,
)
from ouranimelist.db import db
from ouranimelist.exceptions import ConflictException, DatabaseException, ValidationException
from ouranimelist.metrics import audit_entries_total, catalog_operation_failures_total
from ouranimelist.repositories.banner_repository import BannerRepository
from ouranimelist.services.audit_recorder import AuditRecorder

logger = logging.getLogger("main")


def now_local():
    return datetime.now().astimezone()


@dataclass
class BannerData:
    title: str
    release_day: str
    release_time: str
    current_episodes: int = 0
    total_episodes: int = 0
    image: Optional[bytes] = field(default=None, repr=False)


def validate_release_day(release_day):
    if release_day not in DAYS_OF_WEEK:
        raise ValidationException(f"Release day must be one of {', '.join(DAYS_OF_WEEK)}, got {release_day!r}")


def validate_release_time(release_time):
    if not isinstance(release_time, str) or not release_time:
        raise ValidationException(f"release_time must be a non-empty string, got {release_time!r}")


def validate_episode_count(name, value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationException(f"{name} must be a non-negative integer, got {value!r}")


def validate_page(page_size, page_index):
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ValidationException(f"page_size must be a positive integer, got {page_size!r}")
    if isinstance(page_index, bool) or not isinstance(page_index, int) or page_index < 0:
        raise ValidationException(f"page_index must be a non-negative integer, got {page_index!r}")


class CatalogStore:
    """Scoped banner operations. clock supplies 'today' for release-day sorting."""

    def __init__(self, recorder=None, clock=now_local):
        self.recorder = recorder or AuditRecorder()
        self.clock = clock

    def _commit_with_audit(self, owner, action):
        self.recorder.record(owner, action)
        db.session.commit()
        audit_entries_total.labels(action=action).inc()

    def _fail(self, operation, owner, error):
        db.session.rollback()
        catalog_operation_failures_total.labels(operation=operation, reason=type(error).__name__).inc()
        return DatabaseException(f"{operation} failed for account {owner}", detail=error)

    # Mutations

    def add_banner(self, banner: BannerData, owner: str):
        if not isinstance(banner.title, str) or not banner.title:
            raise ValidationException("Banner title is required")
        validate_release_day(banner.release_day)
        validate_release_time(banner.release_time)
        validate_episode_count("current_episodes", banner.current_episodes)
        validate_episode_count("total_episodes", banner.total_episodes)

        try:
            if BannerRepository.get_by_owner_and_title(owner, banner.title) is not None:
                raise ConflictException(f"Banner '{banner.title}' already exists")
            BannerRepository.create(
                commit=False,
                owner=owner,
                title=banner.title,
                image=banner.image,
                release_day=banner.release_day,
                release_time=banner.release_time,
                current_episodes=banner.current_episodes,
                total_episodes=banner.total_episodes,
            )
            self._commit_with_audit(owner, ACTION_ADD)
        except IntegrityError as e:
            db.session.rollback()
            if "UNIQUE" in str(e.orig).upper():
                raise ConflictException(f"Banner '{banner.title}' already exists")
            raise self._fail("add_banner", owner, e)
        except SQLAlchemyError as e:
            raise self._fail("add_banner", owner, e)

        logger.info(f"Account {owner} added banner '{banner.title}'")

    def delete_banner(self, title: str, owner: str) -> int:
        try:
            deleted = BannerRepository.delete(owner, title, commit=False)
            self._commit_with_audit(owner, ACTION_DELETE)
        except SQLAlchemyError as e:
            raise self._fail("delete_banner", owner, e)

        if not deleted:
            logger.debug(f"delete_banner matched nothing for account {owner}, title '{title}'")
        return deleted

    def _update(self, title, owner, column, value, action):
        try:
            updated = BannerRepository.update_field(owner, title, column, value, commit=False)
            self._commit_with_audit(owner, action)
        except SQLAlchemyError as e:
            raise self._fail(f"update_{column}", owner, e)
        return updated

    def update_current_episodes(self, title: str, owner: str, current_episodes: int) -> int:
        validate_episode_count("current_episodes", current_episodes)
        return self._update(title, owner, "current_episodes", current_episodes, ACTION_UPDATE_CURRENT_EPISODES)

    def update_total_episodes(self, title: str, owner: str, total_episodes: int) -> int:
        validate_episode_count("total_episodes", total_episodes)
        return self._update(title, owner, "total_episodes", total_episodes, ACTION_UPDATE_TOTAL_EPISODES)

    def update_release_day(self, title: str, owner: str, release_day: str) -> int:
        validate_release_day(release_day)
        return self._update(title, owner, "release_day", release_day, ACTION_UPDATE_RELEASE_DAY)

    def update_release_time(self, title: str, owner: str, release_time: str) -> int:
        validate_release_time(release_time)
        return self._update(title, owner, "release_time", release_time, ACTION_UPDATE_RELEASE_TIME)

    # Reads

    def _read(self, operation, owner, fetch):
        try:
            return fetch()
        except SQLAlchemyError as e:
            raise self._fail(operation, owner, e)

    def get_banner(self, title: str, owner: str):
        return self._read("get_banner", owner, lambda: BannerRepository.get_by_owner_and_title(owner, title))

    def search_banners(self, query: str, owner: str, page_size: int, page_index: int):
        validate_page(page_size, page_index)
        return self._read(
            "search_banners",
            owner,
            lambda: BannerRepository.search_by_owner(owner, query or "", limit=page_size, offset=page_index * page_size),
        )

    def list_all_banners(self, owner: str):
        return self._read("list_all_banners", owner, lambda: BannerRepository.list_by_owner(owner))

    def list_paged(self, owner: str, page_size: int, page_index: int):
        validate_page(page_size, page_index)
        return self._read(
            "list_paged",
            owner,
            lambda: BannerRepository.list_by_owner(owner, limit=page_size, offset=page_index * page_size),
        )

    def list_sorted_by_release_day(self, owner: str, page_size: int, page_index: int):
        validate_page(page_size, page_index)
        today_index = self.clock().weekday()
        return self._read(
            "list_sorted_by_release_day",
            owner,
            lambda: BannerRepository.list_by_release_distance(
                owner, today_index, limit=page_size, offset=page_index * page_size
            ),
        )
