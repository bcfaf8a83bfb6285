from __future__ import annotations

import logging
import threading
from typing import Any
from urllib.parse import urlencode, urlparse

from vtop_api.application.ports.remote_page_port import PageDriverFactory, RemotePageDriver
from vtop_api.application.ports.vtop_session_port import VtopSessionPort
from vtop_api.config import MOBILE_USER_AGENT
from vtop_api.domain.errors import (
    NotAuthenticated,
    ScrapeElementNotFound,
    SessionNotInitialized,
    TransportError,
)
from vtop_api.domain.model import AttendanceRecord, LoginResult, SessionState
from vtop_api.infrastructure.adapters.vtop import scripts
from vtop_api.infrastructure.adapters.vtop.markup import (
    AUTHORIZED_ID_SELECTOR,
    CAPTCHA_IMG_SELECTOR,
    captcha_payload,
    classify_login_response,
    parse_attendance_table,
)

logger = logging.getLogger(__name__)

VTOP_BASE_URL = "https://vtopcc.vit.ac.in/vtop"


class VtopPortalSession(VtopSessionPort):
    """
    One VTOP login living inside one browser tab.

    Requests are issued from within the page (through the portal's own jQuery) so
    that cookies set by VTOP stay attached to the live tab.
    Calls are serialized; the tab is the only shared resource.
    """

    def __init__(
        self,
        page_factory: PageDriverFactory,
        *,
        base_url: str = VTOP_BASE_URL,
        user_agent: str = MOBILE_USER_AGENT,
    ) -> None:
        self.page_factory = page_factory
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self._page: RemotePageDriver | None = None
        self._csrf_token: str | None = None
        self._state = SessionState.UNINITIALIZED
        self._lock = threading.Lock()

    def _log(self, msg: str) -> None:
        logger.info(f"[VtopPortalSession] {msg}")

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED and bool(self._csrf_token)

    @property
    def csrf_token(self) -> str | None:
        return self._csrf_token

    def _path(self, endpoint: str) -> str:
        # Same-origin path for in-page requests, e.g. /vtop/login
        return f"{urlparse(self.base_url).path.rstrip('/')}/{endpoint}"

    # ---------- Lifecycle ----------
    def initialize(self) -> None:
        """Launches the browser tab on first use; no-op afterwards."""
        if self._page is not None:
            return
        self._log("Launching browser page")
        self._page = self.page_factory(self.user_agent)

    def close(self) -> None:
        with self._lock:
            if self._page is None:
                return
            page, self._page = self._page, None
            page.close()

    # ---------- 1. CAPTCHA ----------
    def get_captcha(self) -> str:
        with self._lock:
            self.initialize()
            assert self._page is not None
            self._page.navigate(f"{self.base_url}/login")
            src = self._page.read_attribute(CAPTCHA_IMG_SELECTOR, "src")
            if src is None:
                raise ScrapeElementNotFound(CAPTCHA_IMG_SELECTOR)
            payload = captcha_payload(src)
            if self._state is SessionState.UNINITIALIZED:
                self._state = SessionState.READY
            self._log(f"CAPTCHA fetched ({len(payload)} base64 chars)")
            return payload

    # ---------- 2. Login ----------
    def login(self, username: str, password: str, captcha: str) -> LoginResult:
        with self._lock:
            if self._page is None or self._state is SessionState.UNINITIALIZED:
                raise SessionNotInitialized()

            self._log(f"Submitting login form for {username}")
            body = self._post(scripts.SUBMIT_LOGIN_FORM, self._path("login"), username, password, captcha)
            result = classify_login_response(body)

            if not result.authorised:
                self._log(f"Login refused: {result.error_message}")
                return result

            self._csrf_token = result.csrf_token
            self._state = SessionState.AUTHENTICATED
            self._log("Login accepted, moving tab to /content")
            self._page.navigate(f"{self.base_url}/content")
            return result

    # ---------- 3. Attendance ----------
    def get_attendance(self, semester_id: str) -> list[AttendanceRecord]:
        with self._lock:
            if self._page is None or not self.authenticated:
                raise NotAuthenticated()

            authorized_id = self._page.read_field(AUTHORIZED_ID_SELECTOR)
            if authorized_id is None:
                raise ScrapeElementNotFound(AUTHORIZED_ID_SELECTOR)

            data = urlencode({
                "_csrf": self._csrf_token,
                "semesterSubId": semester_id,
                "authorizedID": authorized_id,
            })
            self._log(f"Fetching attendance for semester {semester_id}")
            body = self._post(scripts.POST_FORM, self._path("processViewStudentAttendance"), data)
            records = parse_attendance_table(body)
            self._log(f"Attendance rows: {len(records)}")
            return records

    # ---------- Helpers ----------
    def _post(self, script: str, *args: Any) -> str:
        """Runs an in-page AJAX script and returns the response body."""
        assert self._page is not None
        res = self._page.evaluate(script, *args)
        if not isinstance(res, dict):
            raise TransportError(f"In-page request returned {type(res).__name__}, expected a result object")
        if not res.get("ok"):
            status = res.get("status") or 0
            raise TransportError(f"AJAX request failed (status={status}): {res.get('error') or 'unknown error'}")
        return str(res.get("body") or "")
