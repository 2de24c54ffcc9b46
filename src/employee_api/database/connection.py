"""
Database connection and pool management

The pool is synchronous: every call that can block (checkout, statement
execution) must run on a BlockingExecutor worker thread, never on the
event loop.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.pool import QueuePool

from employee_api.database.schema import metadata
from employee_api.utils.errors import (
    DatabaseConnectionError,
    PoolExhaustedError,
    StartupError,
)

logger = logging.getLogger(__name__)


class DatabasePool:
    """Bounded pool of database connections with checkout/return semantics"""

    def __init__(self, engine: Engine, timeout: float):
        self._engine = engine
        self._timeout = timeout

    @contextmanager
    def acquire(self) -> Iterator[Connection]:
        """
        Check out a connection for exclusive use by the caller

        Blocks the calling thread until a connection is free or the pool
        timeout elapses. The work inside the block runs in one transaction:
        committed on normal exit, rolled back if the block raises. The
        connection always goes back to the pool; broken ones are invalidated
        and replaced by the pool.

        Raises:
            PoolExhaustedError: no connection freed up within the timeout
            DatabaseConnectionError: a new connection could not be opened
        """
        try:
            conn = self._engine.connect()
        except sa_exc.TimeoutError as e:
            logger.warning(f"Pool exhausted after waiting {self._timeout}s: {self.status()}")
            raise PoolExhaustedError(
                f"No database connection available within {self._timeout:g}s"
            ) from e
        except sa_exc.DBAPIError as e:
            logger.error(f"Failed to open database connection: {e}")
            raise DatabaseConnectionError() from e

        try:
            with conn.begin():
                yield conn
        finally:
            conn.close()

    def ping(self) -> bool:
        """Run a trivial query on a pooled connection"""
        with self.acquire() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1

    def init_schema(self) -> None:
        """Create tables that do not exist yet"""
        metadata.create_all(self._engine)
        logger.info("Database schema ready")

    def status(self) -> Dict[str, Any]:
        pool = self._engine.pool
        if not isinstance(pool, QueuePool):
            return {"pool": type(pool).__name__}
        return {
            "size": pool.size(),
            "checked_out": pool.checkedout(),
            "idle": pool.checkedin(),
            "overflow": pool.overflow(),
        }

    def dispose(self) -> None:
        """Close all idle connections"""
        self._engine.dispose()
        logger.info("Database connections closed")


def create_pool(
    database_url: Optional[str],
    pool_size: int = 10,
    max_overflow: int = 0,
    pool_timeout: float = 30.0,
    pool_recycle: int = 1800,
    echo: bool = False,
) -> DatabasePool:
    """
    Build the connection pool and verify it can reach the database

    Raises:
        StartupError: the URL is missing or malformed, the driver is not
            installed, or the connectivity probe fails
    """
    if not database_url:
        raise StartupError("DATABASE_URL must be set")

    try:
        url = make_url(database_url)
    except sa_exc.ArgumentError as e:
        raise StartupError(f"Malformed DATABASE_URL: {e}") from e

    connect_args: Dict[str, Any] = {}
    if url.get_backend_name() == "sqlite":
        # Connections are checked out on worker threads, not the creating one
        connect_args["check_same_thread"] = False

    try:
        engine = create_engine(
            url,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
            pool_pre_ping=True,
            echo=echo,
            connect_args=connect_args,
        )
    except (sa_exc.ArgumentError, sa_exc.NoSuchModuleError, ImportError) as e:
        raise StartupError(f"Cannot create database engine: {e}") from e

    pool = DatabasePool(engine, timeout=pool_timeout)

    # Test connection
    try:
        pool.ping()
    except (sa_exc.SQLAlchemyError, DatabaseConnectionError, PoolExhaustedError) as e:
        engine.dispose()
        raise StartupError(f"Failed to establish database pool: {e}") from e

    logger.info(
        f"Database pool initialized - backend: {url.get_backend_name()}, "
        f"size: {pool_size}, overflow: {max_overflow}, timeout: {pool_timeout:g}s"
    )
    return pool
