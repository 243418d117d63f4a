from __future__ import annotations


class ScraperError(Exception):
    """외부 소스(피드, 기사 페이지) 수집 실패의 공통 베이스."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{reason}: {url}")
        self.url = url
        self.reason = reason


class FeedFetchError(ScraperError):
    pass


class PageFetchError(ScraperError):
    pass
