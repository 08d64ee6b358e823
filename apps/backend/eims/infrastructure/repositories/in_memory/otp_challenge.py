"""
In-memory store de desafíos OTP (una entrada por email + propósito).

Thread-safe (Lock). Devuelve copias para que incrementar intentos pase
siempre por record_failed_attempt.
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, Optional, Tuple

from ....domain.entities import OtpChallenge, OtpPurpose
from ....domain.repositories import OtpChallengeRepository
from ....identity.users import normalize_email


class InMemoryOtpChallengeRepository(OtpChallengeRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._challenges: Dict[Tuple[str, OtpPurpose], OtpChallenge] = {}

    @staticmethod
    def _key(email: str, purpose: OtpPurpose) -> Tuple[str, OtpPurpose]:
        return normalize_email(email), OtpPurpose(purpose)

    def save_challenge(self, challenge: OtpChallenge) -> None:
        key = self._key(challenge.email, challenge.purpose)
        with self._lock:
            self._challenges[key] = replace(challenge, email=key[0])

    def get_challenge(self, email: str, purpose: OtpPurpose) -> Optional[OtpChallenge]:
        with self._lock:
            challenge = self._challenges.get(self._key(email, purpose))
            return replace(challenge) if challenge else None

    def record_failed_attempt(self, email: str, purpose: OtpPurpose) -> int:
        key = self._key(email, purpose)
        with self._lock:
            challenge = self._challenges.get(key)
            if challenge is None:
                return 0
            challenge.attempts += 1
            return challenge.attempts

    def delete_challenge(self, email: str, purpose: OtpPurpose) -> bool:
        with self._lock:
            return self._challenges.pop(self._key(email, purpose), None) is not None
