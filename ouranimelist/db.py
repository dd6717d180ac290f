import logging
import sqlite3

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event, inspect

from ouranimelist.utils import now_utc

# Retrieve main logger
logger = logging.getLogger("main")

db = SQLAlchemy()

REQUIRED_TABLES = ["accounts", "banners", "audit_log", "flagged_accounts"]


def _set_sqlite_pragma(dbapi_connection, connection_record):
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return

    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON;")
    # Enable WAL mode for concurrent access from the monitor thread
    cursor.execute("PRAGMA journal_mode=WAL;")
    # Increase timeout to 30 seconds to handle contention
    cursor.execute("PRAGMA busy_timeout=30000;")
    cursor.close()


def init_db(app):
    # Register models on the metadata before create_all
    from ouranimelist import models  # noqa: F401

    with app.app_context():
        # Ensure foreign keys, WAL mode, and timeout are set when connection is opened
        if not event.contains(db.engine, "connect", _set_sqlite_pragma):
            event.listen(db.engine, "connect", _set_sqlite_pragma)

        inspector = inspect(db.engine)
        if not inspector.has_table("accounts"):
            logger.info("Initializing database tables...")
        db.create_all()
        logger.info(f"Database ready at {db.engine.url}")


def health_check():
    """Check that every required table exists."""
    try:
        table_names = inspect(db.engine).get_table_names()
        return all(table in table_names for table in REQUIRED_TABLES)
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


__all__ = ["db", "init_db", "health_check", "now_utc"]
