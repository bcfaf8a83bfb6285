from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env if present
load_dotenv()

# VTOP branches on device type; the login flow is scripted against the iPhone variant.
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 18_5 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/18.5 Mobile/15E148 Safari/604.1"
)


@dataclass(frozen=True)
class Settings:
    vtop_base_url: str = os.getenv("VTOP_BASE_URL", "https://vtopcc.vit.ac.in/vtop").rstrip("/")
    user_agent: str = os.getenv("VTOP_USER_AGENT", MOBILE_USER_AGENT)
    headless: bool = os.getenv("VTOP_HEADLESS", "1") == "1"
    page_load_timeout: float = float(os.getenv("VTOP_PAGE_LOAD_TIMEOUT", "60"))
    script_timeout: float = float(os.getenv("VTOP_SCRIPT_TIMEOUT", "45"))
    quiescence_timeout: float = float(os.getenv("VTOP_QUIESCENCE_TIMEOUT", "15"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "3000"))


settings = Settings()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
