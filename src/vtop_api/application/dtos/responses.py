from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Sequence

from vtop_api.domain.model import AttendanceRecord, LoginResult, SessionState


@dataclass(frozen=True)
class LoginResponseDTO:
    authorised: bool
    error_message: str | None = None
    csrf_token: str | None = None

    @classmethod
    def from_domain(cls, result: LoginResult) -> "LoginResponseDTO":
        return cls(
            authorised=result.authorised,
            error_message=result.error_message,
            csrf_token=result.csrf_token,
        )

    def to_json(self) -> dict[str, Any]:
        # Optional keys are left out instead of sent as null
        body: dict[str, Any] = {"authorised": self.authorised}
        if self.error_message is not None:
            body["errorMessage"] = self.error_message
        if self.csrf_token is not None:
            body["csrfToken"] = self.csrf_token
        return body


@dataclass(frozen=True)
class AttendanceRecordDTO:
    slot: str
    attended: int
    total: int
    percentage: int

    @classmethod
    def from_domain(cls, rec: AttendanceRecord) -> "AttendanceRecordDTO":
        return cls(slot=rec.slot, attended=rec.attended, total=rec.total, percentage=rec.percentage)

    def to_json(self) -> dict[str, Any]:
        return {
            "slot": self.slot,
            "attended": self.attended,
            "total": self.total,
            "percentage": self.percentage,
        }


def attendance_response(records: Sequence[AttendanceRecord]) -> dict[str, Any]:
    return {"attendance": [AttendanceRecordDTO.from_domain(r).to_json() for r in records]}


@dataclass(frozen=True)
class SessionStatusDTO:
    state: SessionState

    @property
    def authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def to_json(self) -> dict[str, Any]:
        return {"state": self.state.value, "authenticated": self.authenticated}
