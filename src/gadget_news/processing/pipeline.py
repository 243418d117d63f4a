from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Mapping, Sequence

from gadget_news.core.config import (
    AI_CALL_INTERVAL_SEC,
    AI_MAX_WORKERS,
    FEED_FETCH_MAX_WORKERS,
    FEED_FETCH_TIMEOUT_SEC,
    FEED_SOURCES,
    MAX_GADGETS,
    TREND_MIN_ITEMS,
    TREND_MIN_MENTIONS,
    RunConfig,
)
from gadget_news.core.constants import TREND_KEYWORDS
from gadget_news.export.export_manager import export_gadgets_json
from gadget_news.models import Gadget, GadgetData
from gadget_news.processing.ai_service import AIEnrichmentService
from gadget_news.processing.llm_client import GeminiTextClient
from gadget_news.processing.parsing import EntryParser, ensure_unique_ids
from gadget_news.processing.rate_limit import MinIntervalRateLimiter
from gadget_news.processing.trends import apply_trends
from gadget_news.processing.types import ExportFunc, FeedFetchFunc, LogFunc, NowFunc
from gadget_news.scrapers.feed_fetcher import fetch_feed
from gadget_news.scrapers.image_scraper import ImageResolver, build_default_image_resolver
from gadget_news.utils import utc_now


class GadgetPipeline:
    def __init__(
        self,
        *,
        entry_parser: EntryParser,
        ai_service: AIEnrichmentService,
        image_resolver: ImageResolver,
        feed_fetcher: FeedFetchFunc,
        export_func: ExportFunc,
        logger: LogFunc,
        ai_enabled: bool,
        sources: Sequence[Mapping[str, Any]] = FEED_SOURCES,
        max_items: int = MAX_GADGETS,
        feed_max_workers: int = FEED_FETCH_MAX_WORKERS,
        trend_keywords: Sequence[str] = TREND_KEYWORDS,
        trend_min_mentions: int = TREND_MIN_MENTIONS,
        trend_min_items: int = TREND_MIN_ITEMS,
        now_provider: NowFunc | None = None,
    ) -> None:
        self._entry_parser = entry_parser
        self._ai_service = ai_service
        self._ai_enabled = ai_enabled
        self._image_resolver = image_resolver
        self._feed_fetcher = feed_fetcher
        self._export = export_func
        self._log = logger
        self._sources = list(sources)
        self._max_items = max_items
        self._feed_max_workers = max(1, int(feed_max_workers))
        self._trend_keywords = tuple(trend_keywords)
        self._trend_min_mentions = trend_min_mentions
        self._trend_min_items = trend_min_items
        self._now_provider = now_provider or utc_now

    def _collect_source(self, source: Mapping[str, Any]) -> list[Gadget]:
        name, url = source["name"], source["url"]
        try:
            entries = self._feed_fetcher(url)
        except Exception as e:
            # 한 피드의 실패는 그 피드만 0건으로 처리
            self._log(f"⚠️ 피드 수집 실패: {name} ({type(e).__name__}: {e})")
            return []
        gadgets = self._entry_parser.parse_entries(entries, name)
        self._log(f"📰 {name}: {len(gadgets)}건 수집")
        return gadgets

    def collect_gadgets(self, sources: Sequence[Mapping[str, Any]] | None = None) -> list[Gadget]:
        targets = list(self._sources if sources is None else sources)
        if not targets:
            return []
        workers = min(self._feed_max_workers, len(targets))
        if workers <= 1:
            per_source = [self._collect_source(source) for source in targets]
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                per_source = list(executor.map(self._collect_source, targets))

        collected: list[Gadget] = []
        for gadgets in per_source:
            collected.extend(gadgets)
        return ensure_unique_ids(collected)

    def select_recent(self, gadgets: Sequence[Gadget]) -> list[Gadget]:
        ordered = sorted(gadgets, key=lambda g: g.published_at, reverse=True)
        return ordered[: max(0, self._max_items)]

    def enrich(self, gadgets: Sequence[Gadget]) -> list[Gadget]:
        if self._ai_enabled:
            return self._ai_service.enrich_all(gadgets)
        self._log("⚠️ GEMINI_API_KEY 미설정: 데모 모드(기본 요약)로 진행")
        return self._ai_service.apply_defaults_all(gadgets)

    def run(self) -> GadgetData | None:
        self._log("📡 RSS 피드 수집 시작")
        gadgets = self.select_recent(self.collect_gadgets())
        if not gadgets:
            self._log("⚠️ 수집된 가젯 기사가 없습니다. 출력 파일을 만들지 않습니다.")
            return None
        self._log(f"✅ 처리 대상: {len(gadgets)}건")

        gadgets = self.enrich(gadgets)
        gadgets = self._image_resolver.resolve_all(gadgets)
        gadgets = apply_trends(
            gadgets,
            self._trend_keywords,
            min_mentions=self._trend_min_mentions,
            min_trending=self._trend_min_items,
        )
        trending = sum(1 for g in gadgets if g.is_trending)
        self._log(f"🔥 트렌드 표시: {trending}건")

        data = GadgetData(gadgets=tuple(gadgets), last_updated=self._now_provider())
        self._export(data)
        return data


def build_default_entry_parser(*, logger: LogFunc) -> EntryParser:
    return EntryParser(logger=logger)


def build_default_ai_service(*, api_key: str | None, logger: LogFunc) -> AIEnrichmentService:
    return AIEnrichmentService(
        generate_text_func=GeminiTextClient(api_key or ""),
        rate_limiter=MinIntervalRateLimiter(AI_CALL_INTERVAL_SEC),
        logger=logger,
        max_workers=AI_MAX_WORKERS,
    )


def _default_feed_fetcher(url: str) -> list[Any]:
    return fetch_feed(url, FEED_FETCH_TIMEOUT_SEC)


def build_default_pipeline(run_config: RunConfig, *, logger: LogFunc) -> GadgetPipeline:
    output_dir = run_config.output_dir

    def _export(data: GadgetData) -> None:
        path = export_gadgets_json(data, output_dir)
        logger(f"💾 저장 완료: {path} ({len(data.gadgets)}건)")

    return GadgetPipeline(
        entry_parser=build_default_entry_parser(logger=logger),
        ai_service=build_default_ai_service(api_key=run_config.api_key, logger=logger),
        image_resolver=build_default_image_resolver(logger=logger),
        feed_fetcher=_default_feed_fetcher,
        export_func=_export,
        logger=logger,
        ai_enabled=run_config.ai_enabled,
        max_items=run_config.max_items,
    )
