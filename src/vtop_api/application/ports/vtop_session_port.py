from __future__ import annotations
from typing import Protocol

from vtop_api.domain.model import AttendanceRecord, LoginResult, SessionState


class VtopSessionPort(Protocol):
    """Stateful VTOP login bound to one browser tab."""

    @property
    def state(self) -> SessionState: ...

    def get_captcha(self) -> str: ...
    def login(self, username: str, password: str, captcha: str) -> LoginResult: ...
    def get_attendance(self, semester_id: str) -> list[AttendanceRecord]: ...
    def close(self) -> None: ...
