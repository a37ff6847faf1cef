"""Outstanding OTP challenges keyed by email"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional
import hmac
import secrets
import string
import threading

OTP_LENGTH = 6


def generate_otp() -> str:
    """Return a cryptographically random 6-digit numeric OTP."""
    return "".join(secrets.choice(string.digits) for _ in range(OTP_LENGTH))


@dataclass
class OtpChallenge:
    code: str
    created_at: datetime


class OtpStore:
    """
    Interface for challenge storage.

    put() overwrites any earlier challenge for the email. matches() checks a
    code without spending it. consume() is a compare-and-delete: when several
    callers present the same code, exactly one of them gets True.
    """

    def put(self, email: str, code: str) -> None:
        raise NotImplementedError

    def matches(self, email: str, code: str) -> bool:
        raise NotImplementedError

    def consume(self, email: str, code: str) -> bool:
        raise NotImplementedError

    def discard(self, email: str) -> None:
        raise NotImplementedError


class InMemoryOtpStore(OtpStore):
    """Process-local store guarded by a single lock."""

    def __init__(
        self,
        ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        self.ttl = ttl
        self._clock = clock
        self._challenges: Dict[str, OtpChallenge] = {}
        self._lock = threading.Lock()

    def _expired(self, challenge: OtpChallenge) -> bool:
        if not self.ttl:
            return False
        return self._clock() > challenge.created_at + self.ttl

    def _match(self, email: str, code: str) -> bool:
        # caller holds the lock; expired challenges are dropped on sight
        challenge = self._challenges.get(email)
        if challenge is None:
            return False
        if self._expired(challenge):
            del self._challenges[email]
            return False
        return hmac.compare_digest(challenge.code.encode(), code.strip().encode())

    def put(self, email: str, code: str) -> None:
        with self._lock:
            self._challenges[email] = OtpChallenge(code=code, created_at=self._clock())

    def matches(self, email: str, code: str) -> bool:
        with self._lock:
            return self._match(email, code)

    def consume(self, email: str, code: str) -> bool:
        with self._lock:
            if not self._match(email, code):
                return False
            del self._challenges[email]
            return True

    def discard(self, email: str) -> None:
        with self._lock:
            self._challenges.pop(email, None)

    def __contains__(self, email: str) -> bool:
        with self._lock:
            challenge = self._challenges.get(email)
            return challenge is not None and not self._expired(challenge)

    def __len__(self) -> int:
        with self._lock:
            return len(self._challenges)
