import pytest

from vtop_api.domain.errors import MalformedAttendanceTable, MalformedAuthResponse, ScrapeElementNotFound
from vtop_api.domain.model import AttendanceRecord
from vtop_api.infrastructure.adapters.vtop.markup import (
    captcha_payload,
    classify_login_response,
    parse_attendance_table,
    parse_int,
    primary_slot,
)
from tests.unit._fakes_page import (
    ATTENDANCE_HTML,
    INVALID_CAPTCHA_HTML,
    INVALID_CREDENTIALS_HTML,
    LOGIN_NO_CSRF_HTML,
    LOGIN_OK_HTML,
)


def test_attendance_fixture_parses_to_exact_records():
    assert parse_attendance_table(ATTENDANCE_HTML) == [
        AttendanceRecord(slot="A1", attended=18, total=20, percentage=90),
        AttendanceRecord(slot="B2", attended=15, total=20, percentage=75),
        AttendanceRecord(slot="C1", attended=0, total=0, percentage=0),
    ]


def test_attendance_columns_found_by_header_substring():
    html = """
    <table id="getStudentDetails">
      <tr><th>Sl.No.</th><th>Course Code</th><th>Slot</th><th>Attended Classes</th>
          <th>Total Classes</th><th>Attendance Percentage</th><th>View</th></tr>
      <tr><td>1</td><td>BCSE301L</td><td> L31+L32 </td><td>22</td><td>24</td><td>92%</td><td>View</td></tr>
      <tr><td>2</td><td>BMAT201L</td><td>D1</td><td> 9 </td><td>12</td><td>75</td><td>View</td></tr>
    </table>
    """
    assert parse_attendance_table(html) == [
        AttendanceRecord(slot="L31", attended=22, total=24, percentage=92),
        AttendanceRecord(slot="D1", attended=9, total=12, percentage=75),
    ]


def test_attendance_without_rows_is_empty():
    html = '<table id="getStudentDetails"><tr><th>Slot</th><th>Attended</th><th>Total</th><th>Percentage</th></tr></table>'
    assert parse_attendance_table(html) == []


def test_attendance_missing_header_is_malformed():
    html = '<table id="getStudentDetails"><tr><th>Slot</th><th>Attended</th><th>Total</th></tr><tr><td>A1</td><td>1</td><td>2</td></tr></table>'
    with pytest.raises(MalformedAttendanceTable, match="percentage"):
        parse_attendance_table(html)


def test_attendance_missing_table_is_malformed():
    with pytest.raises(MalformedAttendanceTable):
        parse_attendance_table("<html><body>Session expired</body></html>")


def test_attendance_truncated_row_is_malformed():
    html = """
    <table id="getStudentDetails">
      <tr><th>Slot</th><th>Attended</th><th>Total</th><th>Percentage</th></tr>
      <tr><td>A1</td><td>1</td><td>2</td><td>50</td></tr>
      <tr><td>B1</td><td>3</td></tr>
    </table>
    """
    with pytest.raises(MalformedAttendanceTable):
        parse_attendance_table(html)


def test_login_success_extracts_csrf():
    res = classify_login_response(LOGIN_OK_HTML)
    assert res.authorised is True
    assert res.csrf_token == "tok-123"
    assert res.error_message is None


def test_login_marker_without_csrf_is_malformed():
    with pytest.raises(MalformedAuthResponse):
        classify_login_response(LOGIN_NO_CSRF_HTML)


def test_login_invalid_captcha():
    res = classify_login_response(INVALID_CAPTCHA_HTML)
    assert not res.authorised
    assert res.error_message == "Invalid Captcha"
    assert res.csrf_token is None


@pytest.mark.parametrize("body", [
    INVALID_CREDENTIALS_HTML,
    "Invalid User Name / Password",
    "invalid userid/password",
    "INVALID LOGIN ID /PASSWORD",
])
def test_login_invalid_credentials(body):
    assert classify_login_response(body).error_message == "Invalid Username / Password"


def test_login_unknown_error():
    res = classify_login_response("<html><body>Service unavailable</body></html>")
    assert res.error_message == "Unknown login error"


def test_captcha_payload_strips_data_uri_prefix():
    assert captcha_payload("data:image/png;base64,iVBORw0KGgo=") == "iVBORw0KGgo="


@pytest.mark.parametrize("src", [None, "", "/vtop/captcha.jpg"])
def test_captcha_payload_requires_data_uri(src):
    with pytest.raises(ScrapeElementNotFound):
        captcha_payload(src)


def test_cell_helpers():
    assert parse_int(" 18 ") == 18
    assert parse_int("90%") == 90
    assert parse_int("abc") == 0
    assert parse_int("") == 0
    assert primary_slot(" A1+TA1 ") == "A1"
    assert primary_slot("B2") == "B2"
