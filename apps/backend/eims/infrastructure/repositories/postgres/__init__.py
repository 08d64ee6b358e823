"""
PostgreSQL Repository Implementations.
"""

from .course import PostgresCourseRepository
from .otp_challenge import PostgresOtpChallengeRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresCourseRepository",
    "PostgresOtpChallengeRepository",
    "PostgresUserRepository",
]
