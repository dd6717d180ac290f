"""
Models package

Every persisted entity lives in its own module:
- account.py
- banner.py
- auditlog.py
- flagged_account.py
"""

from .account import Account
from .banner import Banner
from .auditlog import AuditLog
from .flagged_account import FlaggedAccount

__all__ = [
    "Account",
    "Banner",
    "AuditLog",
    "FlaggedAccount",
]
