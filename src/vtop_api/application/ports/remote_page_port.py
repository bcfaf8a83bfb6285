from __future__ import annotations
from typing import Any, Callable, Protocol


class RemotePageDriver(Protocol):
    """One browser tab that scripts can run inside of.

    Implementations:
    - SeleniumPageDriver (Chrome via WebDriver)
    - Fakes for testing
    """

    def navigate(self, url: str) -> None:
        """Loads url and returns once the page is quiescent.

        Raises NavigationTimeout if the page does not settle in time.
        """
        ...

    def evaluate(self, script: str, *args: Any) -> Any:
        """Runs an asynchronous script in the page context and returns the value it resolves with.

        The script receives args followed by a completion callback as its last argument.
        Raises TransportError when the script never completes.
        """
        ...

    def read_field(self, selector: str) -> str | None:
        """Current value of the form field matching selector, None if absent."""
        ...

    def read_attribute(self, selector: str, name: str) -> str | None:
        """Attribute of the first element matching selector, None if the element is absent."""
        ...

    def close(self) -> None: ...


# Launches a browser with the given user agent and returns its single page.
PageDriverFactory = Callable[[str], RemotePageDriver]
