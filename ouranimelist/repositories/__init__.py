"""
Repositories package

Each repository encapsulates database operations for a model:
- account_repository.py
- banner_repository.py
- auditlog_repository.py
- flagged_account_repository.py

Write methods take a ``commit`` flag so services can group a mutation and its
audit entry into one transaction.

Usage:
    from ouranimelist.repositories.banner_repository import BannerRepository
    banners = BannerRepository.list_by_owner("alice")
"""
