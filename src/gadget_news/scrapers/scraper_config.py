from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple

from gadget_news.core.constants import CONTENT_IMAGE_SELECTOR


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


DEFAULT_USER_AGENTS: Tuple[str, ...] = (
    # Chrome 121 (macOS)
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/121.0.0.0 Safari/537.36",
    # Chrome 121 (Windows)
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/121.0.0.0 Safari/537.36",
    # Safari 17 (macOS)
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_6_4) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
)


@dataclass(frozen=True)
class ImageScraperConfig:
    timeout_sec: float = _env_float("IMAGE_FETCH_TIMEOUT_SEC", 10.0)
    interval_sec: float = _env_float("IMAGE_FETCH_INTERVAL_SEC", 0.5)
    max_workers: int = _env_int("IMAGE_FETCH_MAX_WORKERS", 1)
    content_image_selector: str = CONTENT_IMAGE_SELECTOR
    accept_language: str = "ja,en-US;q=0.9,en;q=0.8"
    user_agents: Tuple[str, ...] = field(default_factory=lambda: DEFAULT_USER_AGENTS)
