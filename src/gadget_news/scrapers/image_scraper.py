from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Callable, Sequence
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from gadget_news.core.constants import (
    CONTENT_IMAGE_SELECTOR,
    DEFAULT_PLACEHOLDER_IMAGE,
    IMAGE_EXTENSIONS,
    IMAGE_URL_BLOCKLIST,
    PLACEHOLDER_IMAGES,
)
from gadget_news.models import Gadget
from gadget_news.processing.rate_limit import MinIntervalRateLimiter
from gadget_news.processing.types import LogFunc
from gadget_news.scrapers.page_fetcher import PageFetchResult, fetch_page
from gadget_news.scrapers.scraper_config import ImageScraperConfig

logger = logging.getLogger(__name__)

PageFetchFunc = Callable[[str], PageFetchResult]

PROGRESS_LOG_EVERY = 10


def placeholder_image_for(category: str | None) -> str:
    if not category:
        return DEFAULT_PLACEHOLDER_IMAGE
    return PLACEHOLDER_IMAGES.get(category, DEFAULT_PLACEHOLDER_IMAGE)


def is_valid_image_url(url: str | None) -> bool:
    if not url:
        return False
    lowered = url.lower()
    if any(bad in lowered for bad in IMAGE_URL_BLOCKLIST):
        return False
    return lowered.endswith(IMAGE_EXTENSIONS) or "image" in lowered


def normalize_image_url(url: str, base_url: str | None) -> str:
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("/"):
        parts = urlsplit(base_url or "")
        if parts.scheme and parts.hostname:
            # user:pass@ 는 버리고 호스트와 포트만 남긴다
            host = f"[{parts.hostname}]" if ":" in parts.hostname else parts.hostname
            if parts.port is not None:
                host = f"{host}:{parts.port}"
            return f"{parts.scheme}://{host}{url}"
    return url


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None


def extract_image_candidate(
    soup: BeautifulSoup,
    content_selector: str = CONTENT_IMAGE_SELECTOR,
) -> str | None:
    """대표 이미지 후보: og:image > twitter:image > 본문 img(검증 통과한 첫 번째)."""
    og_image = _meta_content(soup, property="og:image")
    if og_image:
        return og_image
    twitter_image = _meta_content(soup, name="twitter:image")
    if twitter_image:
        return twitter_image
    for img in soup.select(content_selector):
        src = (img.get("src") or "").strip()
        if is_valid_image_url(src):
            return src
    return None


class ImageResolver:
    def __init__(
        self,
        *,
        rate_limiter: MinIntervalRateLimiter,
        logger: LogFunc,
        fetch_page_func: PageFetchFunc | None = None,
        config: ImageScraperConfig | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._config = config or ImageScraperConfig()
        self._rate_limiter = rate_limiter
        self._log = logger
        self._fetch_page = fetch_page_func or self._default_fetch_page
        workers = self._config.max_workers if max_workers is None else max_workers
        self._max_workers = max(1, int(workers))

    def _default_fetch_page(self, url: str) -> PageFetchResult:
        return fetch_page(url, self._config.timeout_sec, config=self._config)

    def _lookup(self, url: str) -> str | None:
        self._rate_limiter.wait()
        page = self._fetch_page(url)
        candidate = extract_image_candidate(page.soup, self._config.content_image_selector)
        if not candidate:
            return None
        return normalize_image_url(candidate, page.final_url or url)

    def resolve(self, gadget: Gadget) -> Gadget:
        if gadget.image_url:
            return gadget
        if not gadget.source_url:
            return replace(gadget, image_url=placeholder_image_for(gadget.category))
        try:
            image_url = self._lookup(gadget.source_url)
        except Exception as e:
            logger.warning("이미지 추출 실패: %s (%s: %s)", gadget.source_url, type(e).__name__, e)
            image_url = None
        return replace(gadget, image_url=image_url or placeholder_image_for(gadget.category))

    def _log_progress(self, done: int, total: int) -> None:
        if done % PROGRESS_LOG_EVERY == 0 or done == total:
            self._log(f"🖼️ 이미지 처리 진행: {done}/{total}")

    def resolve_all(self, gadgets: Sequence[Gadget]) -> list[Gadget]:
        total = len(gadgets)
        if total == 0:
            return []
        self._log(f"🖼️ 이미지 추출 시작: {total}건")
        results: list[Gadget] = []
        if self._max_workers <= 1:
            for idx, gadget in enumerate(gadgets, start=1):
                results.append(self.resolve(gadget))
                self._log_progress(idx, total)
            return results

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            for idx, resolved in enumerate(executor.map(self.resolve, gadgets), start=1):
                results.append(resolved)
                self._log_progress(idx, total)
        return results


def build_default_image_resolver(*, logger: LogFunc, config: ImageScraperConfig | None = None) -> ImageResolver:
    cfg = config or ImageScraperConfig()
    return ImageResolver(
        rate_limiter=MinIntervalRateLimiter(cfg.interval_sec),
        logger=logger,
        config=cfg,
    )
