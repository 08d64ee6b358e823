"""
Repository implementations (in-memory for tests, PostgreSQL for runtime).
"""

from .in_memory import (
    InMemoryCourseRepository,
    InMemoryOtpChallengeRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresCourseRepository,
    PostgresOtpChallengeRepository,
    PostgresUserRepository,
)

__all__ = [
    "InMemoryCourseRepository",
    "InMemoryOtpChallengeRepository",
    "InMemoryUserRepository",
    "PostgresCourseRepository",
    "PostgresOtpChallengeRepository",
    "PostgresUserRepository",
]
