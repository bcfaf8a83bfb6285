from __future__ import annotations

import logging
from typing import Any

from selenium import webdriver
from selenium.common.exceptions import NoSuchElementException, TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait

from vtop_api.application.ports.remote_page_port import RemotePageDriver
from vtop_api.config import Settings, settings as default_settings
from vtop_api.domain.errors import BrowserLaunchError, NavigationTimeout, TransportError

logger = logging.getLogger(__name__)

# Document loaded and no jQuery request in flight
PAGE_IS_IDLE = r"""
return document.readyState === 'complete'
  && (typeof window.jQuery === 'undefined' || window.jQuery.active === 0);
"""


class SeleniumPageDriver(RemotePageDriver):
    def __init__(self, driver: webdriver.Chrome, *, quiescence_timeout: float = 15.0) -> None:
        """Page driver backed by a single Chrome tab.

        - navigate() blocks until the document is complete and jQuery is idle
        - evaluate() runs callback-style scripts through execute_async_script
        - missing elements come back as None instead of raising

        Args:
            driver (webdriver.Chrome): Launched driver; owned by this object from now on.
            quiescence_timeout (float, optional): Seconds to wait for the page to go idle. Defaults to 15.0.
        """
        self._driver = driver
        self._quiescence_timeout = quiescence_timeout

    def _log(self, msg: str) -> None:
        logger.info(f"[SeleniumPageDriver] {msg}")

    def navigate(self, url: str) -> None:
        self._log(f"GET {url}")
        try:
            self._driver.get(url)
        except TimeoutException as e:
            raise NavigationTimeout(url, e.msg or "page load timeout") from e
        self.wait_idle(url)

    def wait_idle(self, url: str = "") -> None:
        try:
            WebDriverWait(self._driver, self._quiescence_timeout).until(
                lambda d: bool(d.execute_script(PAGE_IS_IDLE))
            )
        except TimeoutException as e:
            raise NavigationTimeout(url or self._driver.current_url, "page never went idle") from e

    def evaluate(self, script: str, *args: Any) -> Any:
        try:
            return self._driver.execute_async_script(script, *args)
        except TimeoutException as e:
            raise TransportError("In-page request timed out") from e
        except WebDriverException as e:
            raise TransportError(f"In-page script failed: {e.msg or e}") from e

    def read_field(self, selector: str) -> str | None:
        return self.read_attribute(selector, "value")

    def read_attribute(self, selector: str, name: str) -> str | None:
        try:
            el = self._driver.find_element(By.CSS_SELECTOR, selector)
        except NoSuchElementException:
            return None
        return el.get_attribute(name)

    def close(self) -> None:
        self._log("Quitting browser")
        self._driver.quit()


def chrome_options(user_agent: str, *, headless: bool = True) -> Options:
    opts = Options()
    if headless:
        opts.add_argument("--headless=new")
    opts.add_argument("--no-sandbox")
    opts.add_argument("--disable-dev-shm-usage")
    opts.add_argument("--disable-gpu")
    opts.add_argument("--window-size=430,932")
    opts.add_argument("--disable-blink-features=AutomationControlled")
    opts.add_argument(f"--user-agent={user_agent}")
    opts.add_argument("--log-level=3")
    return opts


def make_chrome_page(user_agent: str, cfg: Settings | None = None) -> SeleniumPageDriver:
    """PageDriverFactory launching a fresh Chrome with user_agent."""
    cfg = cfg or default_settings
    logger.info("Launching Chrome (headless=%s)", cfg.headless)
    try:
        driver = webdriver.Chrome(options=chrome_options(user_agent, headless=cfg.headless))
    except WebDriverException as e:
        raise BrowserLaunchError(f"Could not launch Chrome: {e.msg or e}") from e
    driver.set_page_load_timeout(cfg.page_load_timeout)
    driver.set_script_timeout(cfg.script_timeout)
    return SeleniumPageDriver(driver, quiescence_timeout=cfg.quiescence_timeout)
