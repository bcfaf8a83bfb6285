from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

# =========================
# Session state
# =========================
class SessionState(str, Enum):
    """Lifecycle of the single portal session.

    UNINITIALIZED -> READY (CAPTCHA page loaded) -> AUTHENTICATED (login accepted).
    There is no way back except restarting the process.
    """
    UNINITIALIZED = "UNINITIALIZED"
    READY = "READY"
    AUTHENTICATED = "AUTHENTICATED"

# =========================
# Value Objects
# =========================
@dataclass(frozen=True)
class LoginResult:
    authorised: bool
    error_message: str | None = None
    csrf_token: str | None = None

    @classmethod
    def success(cls, csrf_token: str) -> "LoginResult":
        return cls(authorised=True, csrf_token=csrf_token)

    @classmethod
    def refused(cls, error_message: str) -> "LoginResult":
        return cls(authorised=False, error_message=error_message)


@dataclass(frozen=True)
class AttendanceRecord:
    slot: str
    attended: int
    total: int
    percentage: int
