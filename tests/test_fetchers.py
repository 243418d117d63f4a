from __future__ import annotations

from typing import Any

import pytest
import requests

from gadget_news.scrapers.errors import FeedFetchError, PageFetchError, ScraperError
from gadget_news.scrapers.feed_fetcher import fetch_feed
from gadget_news.scrapers.page_fetcher import fetch_page

_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>t</title>
<item><title>iPhone 16 \xe7\x99\xba\xe8\xa1\xa8</title><link>https://example.com/1</link>
<description>desc</description><pubDate>Tue, 02 Jan 2024 12:00:00 +0900</pubDate></item>
<item><title>Pixel 9</title><link>https://example.com/2</link></item>
</channel></rss>
"""


class _Resp:
    def __init__(
        self,
        *,
        status_code: int = 200,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
        url: str = "",
        encoding: str | None = "utf-8",
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.url = url
        self.encoding = encoding
        self.apparent_encoding = "utf-8"

    @property
    def text(self) -> str:
        return self.content.decode(self.encoding or "utf-8", errors="replace")


class _Session:
    def __init__(self, response: Any) -> None:
        self._response = response
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> _Resp:
        self.calls.append({"url": url, **kwargs})
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


def test_fetch_feed_returns_entries_in_order() -> None:
    session = _Session(_Resp(content=_RSS))
    entries = fetch_feed("https://example.com/rss", 5, session=session)
    assert [e.title for e in entries] == ["iPhone 16 発表", "Pixel 9"]
    assert entries[0].link == "https://example.com/1"
    assert entries[0].published_parsed is not None
    assert session.calls[0]["timeout"] == 5


def test_fetch_feed_raises_on_transport_and_status_errors() -> None:
    with pytest.raises(FeedFetchError):
        fetch_feed("https://example.com/rss", 5, session=_Session(requests.Timeout("slow")))
    with pytest.raises(FeedFetchError) as exc_info:
        fetch_feed("https://example.com/rss", 5, session=_Session(_Resp(status_code=503)))
    assert isinstance(exc_info.value, ScraperError)
    assert exc_info.value.reason == "http_status:503"


def test_fetch_feed_raises_on_malformed_document() -> None:
    with pytest.raises(FeedFetchError):
        fetch_feed("https://example.com/rss", 5, session=_Session(_Resp(content=b"<<< not xml")))


def test_fetch_page_parses_html_and_keeps_final_url() -> None:
    resp = _Resp(
        content=b'<html><head><meta property="og:image" content="/a.jpg"></head></html>',
        headers={"Content-Type": "text/html; charset=utf-8"},
        url="https://www.example.com/final",
    )
    result = fetch_page("https://example.com/start", 10, session=_Session(resp))
    assert result.final_url == "https://www.example.com/final"
    assert result.soup.find("meta", attrs={"property": "og:image"})["content"] == "/a.jpg"


def test_fetch_page_rejects_bad_responses() -> None:
    with pytest.raises(PageFetchError):
        fetch_page("https://example.com", 10, session=_Session(requests.ConnectionError("down")))
    with pytest.raises(PageFetchError):
        fetch_page("https://example.com", 10, session=_Session(_Resp(status_code=404, headers={"Content-Type": "text/html"})))
    with pytest.raises(PageFetchError):
        fetch_page("https://example.com", 10, session=_Session(_Resp(headers={"Content-Type": "image/png"})))
