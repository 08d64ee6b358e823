"""
Repositorio PostgreSQL de desafíos OTP (tabla `otp_challenges`).

Una fila por (email, purpose): save_challenge hace upsert y reinicia intentos.
"""

from __future__ import annotations

from typing import Optional

from ....domain.entities import OtpChallenge, OtpPurpose
from ....identity.users import normalize_email
from .base import PostgresRepositoryBase

_COLUMNS = "email, purpose, code_hash, expires_at, attempts, created_at"


class PostgresOtpChallengeRepository(PostgresRepositoryBase):
    def save_challenge(self, challenge: OtpChallenge) -> None:
        self._execute(
            query="""
                INSERT INTO otp_challenges (
                    email, purpose, code_hash, expires_at, attempts, created_at
                )
                VALUES (%s, %s, %s, %s, %s, NOW())
                ON CONFLICT (email, purpose) DO UPDATE
                SET code_hash = EXCLUDED.code_hash,
                    expires_at = EXCLUDED.expires_at,
                    attempts = EXCLUDED.attempts,
                    created_at = NOW()
            """,
            params=(
                normalize_email(challenge.email),
                OtpPurpose(challenge.purpose).value,
                challenge.code_hash,
                challenge.expires_at,
                challenge.attempts,
            ),
            context_msg="PostgresOtpChallengeRepository: Failed to save challenge",
            extra={"purpose": OtpPurpose(challenge.purpose).value},
        )

    def get_challenge(self, email: str, purpose: OtpPurpose) -> Optional[OtpChallenge]:
        row = self._fetchone(
            query=f"""
                SELECT {_COLUMNS} FROM otp_challenges
                WHERE email = %s AND purpose = %s
            """,
            params=(normalize_email(email), OtpPurpose(purpose).value),
            context_msg="PostgresOtpChallengeRepository: Failed to load challenge",
            extra={"purpose": OtpPurpose(purpose).value},
        )
        if not row:
            return None
        return OtpChallenge(
            email=row[0],
            purpose=OtpPurpose(row[1]),
            code_hash=row[2],
            expires_at=row[3],
            attempts=row[4],
            created_at=row[5],
        )

    def record_failed_attempt(self, email: str, purpose: OtpPurpose) -> int:
        row = self._fetchone(
            query="""
                UPDATE otp_challenges
                SET attempts = attempts + 1
                WHERE email = %s AND purpose = %s
                RETURNING attempts
            """,
            params=(normalize_email(email), OtpPurpose(purpose).value),
            context_msg="PostgresOtpChallengeRepository: Failed to record attempt",
            extra={"purpose": OtpPurpose(purpose).value},
        )
        return int(row[0]) if row else 0

    def delete_challenge(self, email: str, purpose: OtpPurpose) -> bool:
        deleted = self._execute(
            query="DELETE FROM otp_challenges WHERE email = %s AND purpose = %s",
            params=(normalize_email(email), OtpPurpose(purpose).value),
            context_msg="PostgresOtpChallengeRepository: Failed to delete challenge",
            extra={"purpose": OtpPurpose(purpose).value},
        )
        return bool(deleted)
