"""
Database handle and query utilities.

Provides a small interface for executing queries with psycopg,
returning results as dictionaries.

A Database owns exactly one connection for its lifetime. The HTTP app,
the repositories and the test fixtures all receive the same handle
explicitly instead of reaching for a module-level connection:

    with Database(config.database_url) as database:
        app = create_app(database)
        ...

Every helper runs inside its own transaction block, so a mutation is
committed (and visible to the next read) as soon as the helper returns.
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import psycopg
from psycopg.rows import dict_row

from blogapi.errors import StoreUnavailable

logger = logging.getLogger(__name__)


class Database:
    """Owned connection to the blog store."""

    def __init__(self, url: str, connect_timeout: int = 10):
        self.url = url
        self.connect_timeout = connect_timeout
        self._conn: psycopg.Connection | None = None
        # Serializes transactions on the single connection across threads
        self._lock = threading.RLock()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open(self) -> "Database":
        """
        Connect to the database.

        Raises:
            StoreUnavailable: if the server cannot be reached
        """
        if self.is_open:
            return self
        try:
            self._conn = psycopg.connect(
                self.url, autocommit=True, connect_timeout=self.connect_timeout
            )
        except psycopg.OperationalError as e:
            raise StoreUnavailable(f"Could not connect to database: {e}") from e
        logger.info("Connected to database %s", self.safe_url)
        return self

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._conn is None:
            return
        if not self._conn.closed:
            self._conn.close()
            logger.info("Closed database connection %s", self.safe_url)
        self._conn = None

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._conn is not None and not self._conn.closed

    @property
    def connection(self) -> psycopg.Connection:
        if not self.is_open:
            raise StoreUnavailable("Database is not open. Call open() first.")
        return self._conn

    @property
    def safe_url(self) -> str:
        """The connection URL with any password masked, for logging."""
        if "@" not in self.url or "://" not in self.url:
            return self.url
        scheme, rest = self.url.split("://", 1)
        credentials, host = rest.rsplit("@", 1)
        if ":" in credentials:
            username = credentials.split(":", 1)[0]
            return f"{scheme}://{username}:***@{host}"
        return self.url

    # =========================================================================
    # Query Helpers
    # =========================================================================

    @contextmanager
    def get_cursor(self):
        """
        Context manager for a cursor with dict rows inside one transaction.

        Commits when the block exits normally, rolls back on exception.
        Only one thread at a time holds a cursor on the handle.

        Usage:
            with database.get_cursor() as cur:
                cur.execute("SELECT * FROM blog_posts")
                rows = cur.fetchall()  # List of dicts
        """
        with self._lock:
            conn = self.connection
            with conn.transaction():
                with conn.cursor(row_factory=dict_row) as cur:
                    yield cur

    def execute(self, query: str, params: tuple = None) -> int:
        """
        Execute a query without returning results.

        Returns:
            Number of rows affected
        """
        with self.get_cursor() as cur:
            cur.execute(query, params)
            return cur.rowcount

    def fetch_one(self, query: str, params: tuple = None) -> dict[str, Any] | None:
        """Execute a query and return a single row as dict, or None."""
        with self.get_cursor() as cur:
            cur.execute(query, params)
            return cur.fetchone()

    def fetch_all(self, query: str, params: tuple = None) -> list[dict[str, Any]]:
        """Execute a query and return all rows as a list of dicts."""
        with self.get_cursor() as cur:
            cur.execute(query, params)
            return cur.fetchall()

    def fetch_value(self, query: str, params: tuple = None) -> Any:
        """Execute a query and return the first column of the first row."""
        row = self.fetch_one(query, params)
        if row is None:
            return None
        return next(iter(row.values()))

    # =========================================================================
    # Maintenance
    # =========================================================================

    def apply_migrations(self, directory: Path) -> list[Path]:
        """
        Run every *.sql file in ``directory`` in file name order.

        Returns:
            The migration files that were applied
        """
        directory = Path(directory)
        files = sorted(directory.glob("*.sql"))
        if not files:
            raise FileNotFoundError(f"No migration files found in {directory}")

        for path in files:
            with self.get_cursor() as cur:
                cur.execute(path.read_text())
            logger.info("Applied migration %s", path.name)
        return files

    def ping(self) -> bool:
        """Check that the connection can still run a query."""
        try:
            return self.fetch_value("SELECT 1 AS ok") == 1
        except (psycopg.Error, StoreUnavailable) as e:
            logger.warning("Database ping failed: %s", e)
            return False
