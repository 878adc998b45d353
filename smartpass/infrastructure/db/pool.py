"""
Name: PostgreSQL Connection Pool

Responsibilities:
  - Manage connection pool lifecycle (init, get, close)
  - Configure connections with statement_timeout
  - Provide singleton pool instance

Collaborators:
  - psycopg_pool: Connection pooling
  - main.py: passes pool settings at startup

Constraints:
  - Singleton pattern (one pool per process)
  - Must init before use, close on shutdown

Notes:
  - Configure callback sets up each new connection
  - Acquisition waits at most DB_POOL_TIMEOUT_SECONDS (PoolTimeout)
"""

from functools import partial
from typing import Optional
import threading

from psycopg_pool import ConnectionPool

from ...logger import logger


# R: Singleton pool instance
_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def _configure_connection(conn, timeout_ms: int) -> None:
    """
    R: Configure a connection from the pool.

    Sets statement_timeout so no store call blocks a worker indefinitely.
    """
    if timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {timeout_ms}")
        conn.commit()


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    timeout_seconds: float = 5.0,
    statement_timeout_ms: int = 5000,
) -> ConnectionPool:
    """
    R: Initialize the connection pool.

    Args:
        database_url: PostgreSQL connection string
        min_size: Minimum connections to maintain
        max_size: Maximum connections allowed
        timeout_seconds: Max wait for a free connection
        statement_timeout_ms: Per-statement limit (0 disables)

    Raises:
        RuntimeError: If pool already initialized
    """
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise RuntimeError("Connection pool already initialized")

        logger.info(
            "Initializing connection pool",
            extra={"min_size": min_size, "max_size": max_size},
        )

        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            timeout=timeout_seconds,
            configure=partial(_configure_connection, timeout_ms=statement_timeout_ms),
            open=True,
        )
        return _pool


def get_pool() -> ConnectionPool:
    """
    R: Get the connection pool singleton.

    Raises:
        RuntimeError: If pool not initialized
    """
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    return _pool


def close_pool() -> None:
    """R: Close the connection pool (safe if never initialized)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("Closing connection pool")
            _pool.close()
            _pool = None
