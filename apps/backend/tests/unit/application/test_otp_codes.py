"""
Name: OTP Challenge Service Tests

Responsibilities:
  - Issue / verify single-use codes
  - Expiry and attempt exhaustion delete the challenge
  - Codes are stored hashed, bound to email + purpose
"""

import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from eims.application.otp_codes import OtpChallengeService, OtpSettings, hash_otp_code
from eims.domain.entities import OtpPurpose
from eims.infrastructure.repositories import InMemoryOtpChallengeRepository

pytestmark = pytest.mark.unit


@pytest.fixture
def repo() -> InMemoryOtpChallengeRepository:
    return InMemoryOtpChallengeRepository()


@pytest.fixture
def service(repo) -> OtpChallengeService:
    return OtpChallengeService(repo, OtpSettings(length=6, ttl_seconds=600, max_attempts=3))


def test_issue_generates_numeric_code_and_stores_only_hash(service, repo):
    code = service.issue("Alice@Example.com", OtpPurpose.SIGNUP)

    assert len(code) == 6
    assert code.isdigit()

    stored = repo.get_challenge("alice@example.com", OtpPurpose.SIGNUP)
    assert stored is not None
    assert stored.code_hash != code
    assert stored.code_hash == hash_otp_code("alice@example.com", OtpPurpose.SIGNUP, code)
    assert stored.attempts == 0


def test_code_length_follows_settings(repo):
    service = OtpChallengeService(repo, OtpSettings(length=8))
    assert len(service.issue("a@example.com", OtpPurpose.LOGIN)) == 8


def test_verify_consumes_code(service, repo):
    code = service.issue("alice@example.com", OtpPurpose.SIGNUP)

    assert service.verify("ALICE@example.com", OtpPurpose.SIGNUP, code) is True
    assert repo.get_challenge("alice@example.com", OtpPurpose.SIGNUP) is None
    assert service.verify("alice@example.com", OtpPurpose.SIGNUP, code) is False


def test_code_is_bound_to_purpose(service):
    code = service.issue("alice@example.com", OtpPurpose.SIGNUP)
    assert service.verify("alice@example.com", OtpPurpose.LOGIN, code) is False
    assert service.verify("alice@example.com", OtpPurpose.SIGNUP, code) is True


def test_new_code_replaces_previous(service, repo):
    service.issue("alice@example.com", OtpPurpose.LOGIN)
    second = service.issue("alice@example.com", OtpPurpose.LOGIN)

    stored = repo.get_challenge("alice@example.com", OtpPurpose.LOGIN)
    assert stored.code_hash == hash_otp_code("alice@example.com", OtpPurpose.LOGIN, second)
    assert service.verify("alice@example.com", OtpPurpose.LOGIN, second) is True


def test_verify_without_challenge(service):
    assert service.verify("nobody@example.com", OtpPurpose.LOGIN, "123456") is False


def test_expired_code_is_rejected_and_deleted(service, repo):
    code = service.issue("alice@example.com", OtpPurpose.SIGNUP)
    challenge = repo.get_challenge("alice@example.com", OtpPurpose.SIGNUP)
    repo.save_challenge(
        replace(challenge, expires_at=datetime.now(timezone.utc) - timedelta(seconds=1))
    )

    assert service.verify("alice@example.com", OtpPurpose.SIGNUP, code) is False
    assert repo.get_challenge("alice@example.com", OtpPurpose.SIGNUP) is None


def test_wrong_guesses_are_counted_then_challenge_dropped(service, repo):
    code = service.issue("alice@example.com", OtpPurpose.LOGIN)
    wrong = "000000" if code != "000000" else "111111"

    assert service.verify("alice@example.com", OtpPurpose.LOGIN, wrong) is False
    assert repo.get_challenge("alice@example.com", OtpPurpose.LOGIN).attempts == 1
    assert service.verify("alice@example.com", OtpPurpose.LOGIN, wrong) is False
    assert service.verify("alice@example.com", OtpPurpose.LOGIN, wrong) is False

    assert repo.get_challenge("alice@example.com", OtpPurpose.LOGIN) is None
    # El código correcto ya no sirve tras agotar intentos.
    assert service.verify("alice@example.com", OtpPurpose.LOGIN, code) is False


def test_hash_is_bound_to_email_and_purpose():
    base = hash_otp_code("a@example.com", OtpPurpose.SIGNUP, "123456")
    assert base == hash_otp_code(" A@example.com", OtpPurpose.SIGNUP, "123456 ")
    assert base != hash_otp_code("b@example.com", OtpPurpose.SIGNUP, "123456")
    assert base != hash_otp_code("a@example.com", OtpPurpose.LOGIN, "123456")


class BarrierOtpRepository(InMemoryOtpChallengeRepository):
    """Both verifiers read the challenge before either of them deletes it."""

    def __init__(self, parties: int) -> None:
        super().__init__()
        self._barrier = threading.Barrier(parties, timeout=5)

    def get_challenge(self, email, purpose):
        challenge = super().get_challenge(email, purpose)
        self._barrier.wait()
        return challenge


def test_concurrent_verifications_accept_code_once():
    repo = BarrierOtpRepository(parties=2)
    service = OtpChallengeService(repo, OtpSettings())
    code = service.issue("alice@example.com", OtpPurpose.LOGIN)

    results: list[bool] = []
    lock = threading.Lock()

    def verify() -> None:
        accepted = service.verify("alice@example.com", OtpPurpose.LOGIN, code)
        with lock:
            results.append(accepted)

    threads = [threading.Thread(target=verify) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert sorted(results) == [False, True]
    assert InMemoryOtpChallengeRepository.get_challenge(
        repo, "alice@example.com", OtpPurpose.LOGIN
    ) is None
