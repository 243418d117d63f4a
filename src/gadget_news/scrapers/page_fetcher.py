from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

import requests
from bs4 import BeautifulSoup

from gadget_news.scrapers.errors import PageFetchError
from gadget_news.scrapers.scraper_config import DEFAULT_USER_AGENTS, ImageScraperConfig

logger = logging.getLogger(__name__)

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


@dataclass(frozen=True)
class PageFetchResult:
    final_url: str
    soup: BeautifulSoup


def _make_headers(config: ImageScraperConfig | None) -> dict[str, str]:
    user_agents = config.user_agents if config else DEFAULT_USER_AGENTS
    return {
        "User-Agent": random.choice(user_agents),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": config.accept_language if config else "ja,en;q=0.8",
    }


def _safe_decode_response(resp: requests.Response) -> str:
    # 헤더에 charset이 없으면 requests가 ISO-8859-1로 읽어 일본어가 깨진다.
    if not resp.encoding or resp.encoding.lower() == "iso-8859-1":
        apparent = resp.apparent_encoding
        if apparent:
            resp.encoding = apparent
    return resp.text or ""


def _is_html_response(resp: requests.Response) -> bool:
    ct = (resp.headers.get("Content-Type") or "").lower()
    if not ct:
        return True
    return any(x in ct for x in _HTML_CONTENT_TYPES)


def fetch_page(
    url: str,
    timeout_sec: float,
    session: Any = None,
    *,
    config: ImageScraperConfig | None = None,
) -> PageFetchResult:
    http = session or requests
    try:
        resp = http.get(url, headers=_make_headers(config), timeout=timeout_sec, allow_redirects=True)
    except requests.RequestException as e:
        raise PageFetchError(url, f"request_error:{type(e).__name__}") from e

    if resp.status_code >= 400:
        raise PageFetchError(url, f"http_status:{resp.status_code}")
    if not _is_html_response(resp):
        raise PageFetchError(url, f"non_html_content_type:{resp.headers.get('Content-Type')}")

    html = _safe_decode_response(resp)
    final_url = getattr(resp, "url", None) or url
    return PageFetchResult(final_url=final_url, soup=BeautifulSoup(html, "html.parser"))
