"""A login gate that locks after too many failed attempts."""

from __future__ import annotations

import enum


class LoginResult(enum.Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    REJECTED = "rejected"


class LoginLockedError(RuntimeError):
    """Raised when attempting to log in after the gate has locked."""


class LoginGate:
    """Checks credentials and locks once the failure limit is reached."""

    def __init__(self, account: str, password: str, max_attempts: int = 3) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._account = account
        self._password = password
        self.max_attempts = max_attempts
        self.failures = 0

    def locked(self) -> bool:
        return self.failures >= self.max_attempts

    def attempt(self, name: str, passwd: str) -> LoginResult:
        """Try the credentials; failed and empty attempts count towards the lock."""
        if self.locked():
            raise LoginLockedError("too many attempts")
        if not name or not passwd:
            self.failures += 1
            return LoginResult.EMPTY
        if name == self._account and passwd == self._password:
            return LoginResult.SUCCESS
        self.failures += 1
        return LoginResult.REJECTED