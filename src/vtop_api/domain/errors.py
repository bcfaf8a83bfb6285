from __future__ import annotations


class VtopError(Exception):
    """Base class for every failure surfaced by the portal session."""


class SessionNotInitialized(VtopError):
    def __init__(self, message: str = "Browser not initialized. Call /api/captcha first.") -> None:
        super().__init__(message)


class NotAuthenticated(VtopError):
    def __init__(self, message: str = "Not logged in. Call /api/login first.") -> None:
        super().__init__(message)


class ScrapeElementNotFound(VtopError):
    """An element the portal is expected to render is missing from the live DOM."""

    def __init__(self, selector: str) -> None:
        super().__init__(f"Element not found on page: {selector}")
        self.selector = selector


class MalformedAuthResponse(VtopError):
    pass


class MalformedAttendanceTable(VtopError):
    pass


class NavigationTimeout(VtopError):
    def __init__(self, url: str, detail: str = "") -> None:
        msg = f"Timed out loading {url}"
        super().__init__(f"{msg}: {detail}" if detail else msg)
        self.url = url


class TransportError(VtopError):
    """The in-page request never produced a response (network failure, script timeout)."""


class BrowserLaunchError(VtopError):
    pass
