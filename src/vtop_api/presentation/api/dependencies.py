from __future__ import annotations
from functools import partial

from vtop_api.application.ports.vtop_session_port import VtopSessionPort
from vtop_api.config import Settings, settings
from vtop_api.infrastructure.adapters.browser.selenium_page import make_chrome_page
from vtop_api.infrastructure.adapters.vtop.portal_session import VtopPortalSession

# Exactly one portal session per process
_session: VtopPortalSession | None = None


def build_session(cfg: Settings) -> VtopPortalSession:
    """Wires a portal session to a Chrome tab; the browser is launched on first use."""
    return VtopPortalSession(
        page_factory=partial(make_chrome_page, cfg=cfg),
        base_url=cfg.vtop_base_url,
        user_agent=cfg.user_agent,
    )


def get_session() -> VtopSessionPort:
    global _session
    if _session is None:
        _session = build_session(settings)
    return _session


def close_session() -> None:
    global _session
    if _session is not None:
        _session.close()
        _session = None
