"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Responsabilidades:
  - Mantener un único psycopg ConnectionPool por proceso.
  - Aplicar statement_timeout a cada conexión (opción libpq `-c`).

Colaboradores:
  - api/main.py (lifespan: init_pool / close_pool)
  - infrastructure/repositories/postgres/base.py (get_pool)
  - tests/integration/conftest.py
===============================================================================
"""

from __future__ import annotations

import threading

from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

_lock = threading.Lock()
_pool: ConnectionPool | None = None


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    statement_timeout_ms: int = 0,
) -> ConnectionPool:
    global _pool

    connect_kwargs: dict[str, str] = {}
    if statement_timeout_ms > 0:
        connect_kwargs["options"] = f"-c statement_timeout={int(statement_timeout_ms)}"

    with _lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("El pool ya fue inicializado.")
        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            kwargs=connect_kwargs,
            open=True,
        )

    logger.info(
        "Pool DB abierto",
        extra={
            "min_size": min_size,
            "max_size": max_size,
            "statement_timeout_ms": statement_timeout_ms,
        },
    )
    return _pool


def get_pool() -> ConnectionPool:
    pool = _pool
    if pool is None:
        raise PoolNotInitializedError("Pool no inicializado. Llamar init_pool() primero.")
    return pool


def close_pool() -> None:
    """Idempotente."""
    global _pool

    with _lock:
        pool, _pool = _pool, None
    if pool is not None:
        pool.close()
        logger.info("Pool DB cerrado")
