"""
db/connection.py
----------------
Opens and closes the single PostgreSQL connection a caller hands to
the repositories. Repositories never open or close connections
themselves; the caller owns the lifecycle.
"""

import psycopg2
from config import DATABASE_URL
from utils.logger import get_logger

logger = get_logger(__name__)


def connect(dsn: str = DATABASE_URL):
    """
    Open a new database connection.

    Args:
        dsn: libpq connection string or URL. Defaults to DATABASE_URL.

    Returns:
        A psycopg2 connection object.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    try:
        conn = psycopg2.connect(dsn)
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to connect to database: {e}")
        raise
    logger.info("Database connection opened.")
    return conn


def close_connection(conn) -> None:
    """
    Close a connection opened with `connect`.

    Args:
        conn: The psycopg2 connection to close. None is ignored.
    """
    if conn is None:
        return
    conn.close()
    logger.info("Database connection closed.")
