from __future__ import annotations

import logging
import random
from typing import Any

import feedparser
import requests

from gadget_news.scrapers.errors import FeedFetchError
from gadget_news.scrapers.scraper_config import DEFAULT_USER_AGENTS

logger = logging.getLogger(__name__)

_FEED_ACCEPT = "application/rss+xml, application/rdf+xml, application/atom+xml, application/xml;q=0.9, */*;q=0.8"


def fetch_feed(url: str, timeout_sec: float, session: Any = None) -> list[Any]:
    """피드를 내려받아 feedparser 항목 목록을 원래 순서대로 돌려준다.

    전송 오류, HTTP 4xx/5xx, 항목이 하나도 없는 깨진 문서는 FeedFetchError.
    정상 문서인데 항목이 없으면 빈 목록이다.
    """
    http = session or requests
    headers = {
        "User-Agent": random.choice(DEFAULT_USER_AGENTS),
        "Accept": _FEED_ACCEPT,
    }
    try:
        resp = http.get(url, headers=headers, timeout=timeout_sec)
    except requests.RequestException as e:
        raise FeedFetchError(url, f"request_error:{type(e).__name__}") from e

    if resp.status_code >= 400:
        raise FeedFetchError(url, f"http_status:{resp.status_code}")

    parsed = feedparser.parse(resp.content)
    entries = list(parsed.get("entries") or [])
    if parsed.get("bozo") and not entries:
        exc = parsed.get("bozo_exception")
        raise FeedFetchError(url, f"malformed_feed:{type(exc).__name__ if exc else 'unknown'}")

    logger.debug("feed fetched: %s (%d entries)", url, len(entries))
    return entries
