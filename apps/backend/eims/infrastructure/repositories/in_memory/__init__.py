"""
In-Memory Repository Implementations.

For testing and CI. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .course import InMemoryCourseRepository
from .otp_challenge import InMemoryOtpChallengeRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCourseRepository",
    "InMemoryOtpChallengeRepository",
    "InMemoryUserRepository",
]
