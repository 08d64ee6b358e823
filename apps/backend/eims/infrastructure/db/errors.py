"""
CRC CARD — infrastructure/db/errors.py

Errores del ciclo de vida del pool. Heredan de DatabaseError para que un uso
fuera de orden (sin init_pool) termine en el 503 estándar y no en un 500.
"""

from ...crosscutting.exceptions import DatabaseError


class PoolAlreadyInitializedError(DatabaseError):
    """init_pool() llamado dos veces en el mismo proceso."""


class PoolNotInitializedError(DatabaseError):
    """get_pool() antes de init_pool() (o después de close_pool())."""
