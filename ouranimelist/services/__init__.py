"""
Services package

Business operations on top of the repositories:
- access_control.py: registration, login and role resolution
- audit_recorder.py: append-only audit trail and window aggregation
- catalog_store.py: owner-scoped banner operations, each mutation audited
- anomaly_monitor.py: periodic sweep that flags accounts acting too fast
- release_schedule.py: weekday arithmetic and release countdowns
- network.py: connectivity probe
"""
