from __future__ import annotations

CAPTCHA_B64 = "aGVsbG8="  # b"hello"
CAPTCHA_SRC = f"data:image/jpeg;base64,{CAPTCHA_B64}"

LOGIN_OK_HTML = """
<html><body>
  <input type="hidden" id="authorizedIDX" name="authorizedIDX" value="21BCE1234">
  <form id="logoutForm"><input type="hidden" name="_csrf" value="tok-123"></form>
</body></html>
"""

LOGIN_NO_CSRF_HTML = '<html><body><input type="hidden" id="authorizedIDX" value="21BCE1234"></body></html>'

INVALID_CAPTCHA_HTML = '<div class="alert">Invalid  Captcha</div>'

INVALID_CREDENTIALS_HTML = '<span class="text-danger">Invalid LoginId/Password</span>'

ATTENDANCE_HTML = """
<table id="getStudentDetails">
  <thead><tr><th>Slot</th><th>Attended</th><th>Total</th><th>Percentage</th></tr></thead>
  <tbody>
    <tr><td>A1+TA1</td><td>18</td><td>20</td><td>90</td></tr>
    <tr><td>B2</td><td>15</td><td>20</td><td>75</td></tr>
    <tr><td>C1</td><td>0</td><td>abc</td><td>0</td></tr>
  </tbody>
</table>
"""


def ok(body: str) -> dict:
    return {"ok": True, "body": body}


def failed(error: str = "timeout", status: int = 0) -> dict:
    return {"ok": False, "status": status, "error": error}


class FakePage:
    def __init__(self, *, captcha_src: str | None = CAPTCHA_SRC, fields: dict | None = None, responses=None) -> None:
        self.captcha_src = captcha_src
        self.fields = {"#authorizedIDX": "21BCE1234"} if fields is None else fields
        self.responses = list(responses or [])
        self.navigations: list[str] = []
        self.evaluations: list[tuple] = []
        self.closed = False

    def navigate(self, url):
        self.navigations.append(url)

    def evaluate(self, script, *args):
        self.evaluations.append((script, args))
        return self.responses.pop(0)

    def read_field(self, selector):
        return self.fields.get(selector)

    def read_attribute(self, selector, name):
        if selector == "#captchaBlock img" and name == "src":
            return self.captcha_src
        return None

    def close(self):
        self.closed = True


class FakePageFactory:
    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.user_agents: list[str] = []

    def __call__(self, user_agent):
        self.user_agents.append(user_agent)
        return self.page
