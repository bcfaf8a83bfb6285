from __future__ import annotations
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from vtop_api.application.dtos.responses import LoginResponseDTO, SessionStatusDTO, attendance_response
from vtop_api.application.ports.vtop_session_port import VtopSessionPort
from vtop_api.presentation.api.dependencies import get_session
from vtop_api.presentation.api.metrics import ATTENDANCE_REQUESTS, CAPTCHA_REQUESTS, LOGIN_ATTEMPTS

router = APIRouter(prefix="/api", tags=["vtop"])


class LoginIn(BaseModel):
    username: str | None = None
    password: str | None = None
    captcha: str | None = None


class AttendanceIn(BaseModel):
    semesterID: str | None = None


def bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


@router.get("/captcha")
def captcha(session: VtopSessionPort = Depends(get_session)) -> dict[str, str]:
    """Loads the login page and returns its CAPTCHA as base64. Call this first."""
    payload = session.get_captcha()
    CAPTCHA_REQUESTS.inc()
    return {"captcha": payload}


@router.post("/login")
def login(body: LoginIn, session: VtopSessionPort = Depends(get_session)) -> Any:
    if not body.username or not body.password or not body.captcha:
        return bad_request("Username, password, and captcha are required.")
    result = session.login(body.username, body.password, body.captcha)
    LOGIN_ATTEMPTS.labels(outcome="authorised" if result.authorised else "refused").inc()
    return LoginResponseDTO.from_domain(result).to_json()


@router.post("/attendance")
def attendance(body: AttendanceIn, session: VtopSessionPort = Depends(get_session)) -> Any:
    if not body.semesterID:
        return bad_request("semesterID is required.")
    records = session.get_attendance(body.semesterID)
    ATTENDANCE_REQUESTS.inc()
    return attendance_response(records)


@router.get("/session")
def session_status(session: VtopSessionPort = Depends(get_session)) -> dict[str, Any]:
    return SessionStatusDTO(session.state).to_json()
