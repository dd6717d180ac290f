"""
Weekday arithmetic for release schedules.

Days are the English weekday names in DAYS_OF_WEEK. Distances are circular:
a banner releasing today is 0 days away, one releasing yesterday is 6.
"""
from datetime import datetime, timedelta

from ouranimelist.constants import DAYS_OF_WEEK


def day_index(day_name):
    try:
        return DAYS_OF_WEEK.index(day_name)
    except ValueError:
        raise ValueError(f"Unknown release day: {day_name!r}")


def days_until(release_day, today_index):
    return (day_index(release_day) - today_index) % len(DAYS_OF_WEEK)


def parse_release_time(release_time):
    """Parse 'HH:MM' into (hours, minutes)."""
    try:
        hours, minutes = (int(part) for part in release_time.split(":")[:2])
    except (AttributeError, ValueError):
        raise ValueError(f"Release time must look like HH:MM, got {release_time!r}")
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Release time out of range: {release_time!r}")
    return hours, minutes


def next_release_at(release_day, release_time, now: datetime) -> datetime:
    """
    The next moment the banner releases, in now's timezone. If it releases
    today and the time has already passed, that is a week from today.
    """
    hours, minutes = parse_release_time(release_time)
    delta_days = days_until(release_day, now.weekday())
    target = (now + timedelta(days=delta_days)).replace(hour=hours, minute=minutes, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=len(DAYS_OF_WEEK))
    return target


def time_until_release(release_day, release_time, now: datetime) -> timedelta:
    return next_release_at(release_day, release_time, now) - now


def format_countdown(delta: timedelta) -> str:
    total_seconds = int(delta.total_seconds())
    if total_seconds <= 0:
        return "Next episode is out!"
    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{days}d {hours}h {minutes}m {seconds}s"
