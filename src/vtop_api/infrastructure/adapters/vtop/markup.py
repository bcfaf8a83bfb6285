from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup  # type: ignore[import-untyped]

from vtop_api.domain.errors import (
    MalformedAttendanceTable,
    MalformedAuthResponse,
    ScrapeElementNotFound,
)
from vtop_api.domain.model import AttendanceRecord, LoginResult

logger = logging.getLogger(__name__)

CAPTCHA_IMG_SELECTOR = "#captchaBlock img"
AUTHORIZED_ID_SELECTOR = "#authorizedIDX"
ATTENDANCE_TABLE_ID = "getStudentDetails"

# Only present in the landing page served after a successful login
AUTHORISED_MARKER = "authorizedidx"

INVALID_CAPTCHA_RE = re.compile(r"invalid\s*captcha", re.IGNORECASE)
INVALID_CREDENTIALS_RE = re.compile(
    r"invalid\s*(user\s*name|login\s*id|user\s*id)\s*/\s*password", re.IGNORECASE
)

INVALID_CAPTCHA_MSG = "Invalid Captcha"
INVALID_CREDENTIALS_MSG = "Invalid Username / Password"
UNKNOWN_LOGIN_ERROR_MSG = "Unknown login error"

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


def captcha_payload(src: str | None) -> str:
    """Strips the ``data:<mime>;base64,`` prefix from a CAPTCHA ``src``."""
    if not src or not src.startswith("data:") or "," not in src:
        raise ScrapeElementNotFound(CAPTCHA_IMG_SELECTOR)
    return src.split(",", 1)[1]


def classify_login_response(body: str) -> LoginResult:
    """Maps the raw body returned by the login POST to a LoginResult.

    Raises MalformedAuthResponse when the page claims success but carries no CSRF token.
    """
    page = body.lower()
    if AUTHORISED_MARKER in page:
        soup = BeautifulSoup(body, "html.parser")
        csrf_input = soup.find("input", {"name": "_csrf"})
        token = csrf_input.get("value") if csrf_input else None
        if not token:
            raise MalformedAuthResponse("Login accepted but no _csrf field in the response")
        return LoginResult.success(token)

    if INVALID_CAPTCHA_RE.search(page):
        return LoginResult.refused(INVALID_CAPTCHA_MSG)
    if INVALID_CREDENTIALS_RE.search(page):
        return LoginResult.refused(INVALID_CREDENTIALS_MSG)
    return LoginResult.refused(UNKNOWN_LOGIN_ERROR_MSG)


def parse_int(text: str) -> int:
    """Leading-integer parse of a table cell; anything unparseable counts as 0."""
    m = _LEADING_INT_RE.match(text.strip())
    return int(m.group(0)) if m else 0


def primary_slot(text: str) -> str:
    # "A1+TA1" -> "A1"
    return text.strip().split("+", 1)[0].strip()


def _column_indexes(headings: list[str]) -> dict[str, int]:
    found: dict[str, int] = {}
    for i, heading in enumerate(headings):
        if "slot" in heading:
            found["slot"] = i
        elif "attended" in heading:
            found["attended"] = i
        elif "total" in heading:
            found["total"] = i
        elif "percentage" in heading:
            found["percentage"] = i
    missing = [name for name in ("slot", "attended", "total", "percentage") if name not in found]
    if missing:
        raise MalformedAttendanceTable(f"Attendance table has no column for: {', '.join(missing)}")
    return found


def parse_attendance_table(html: str) -> list[AttendanceRecord]:
    """Rebuilds attendance rows from the flat cell grid of ``#getStudentDetails``.

    Row ``r`` / column ``c`` sits at flat cell index ``r * len(headers) + c``; the
    markup's ``tr`` boundaries are not relied upon.
    """
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find(id=ATTENDANCE_TABLE_ID)
    if table is None:
        raise MalformedAttendanceTable(f"No #{ATTENDANCE_TABLE_ID} table in the response")

    headings = [th.get_text(" ", strip=True).lower() for th in table.find_all("th")]
    cols = _column_indexes(headings)
    width = len(headings)
    cells = [td.get_text(" ", strip=True) for td in table.find_all("td")]

    records: list[AttendanceRecord] = []
    slot_i, attended_i, total_i, pct_i = cols["slot"], cols["attended"], cols["total"], cols["percentage"]
    while slot_i < len(cells):
        if max(attended_i, total_i, pct_i) >= len(cells):
            raise MalformedAttendanceTable(
                f"Attendance row {len(records) + 1} is truncated ({len(cells)} cells, {width} columns)"
            )
        records.append(
            AttendanceRecord(
                slot=primary_slot(cells[slot_i]),
                attended=parse_int(cells[attended_i]),
                total=parse_int(cells[total_i]),
                percentage=parse_int(cells[pct_i]),
            )
        )
        slot_i += width
        attended_i += width
        total_i += width
        pct_i += width

    logger.debug("Parsed %d attendance rows from %d cells", len(records), len(cells))
    return records
