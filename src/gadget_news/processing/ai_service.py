from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Sequence

from gadget_news.models import Gadget
from gadget_news.processing.ai_enricher import apply_default_values, enrich_gadget
from gadget_news.processing.rate_limit import MinIntervalRateLimiter
from gadget_news.processing.types import GenerateTextFunc, LogFunc

PROGRESS_LOG_EVERY = 10


class AIEnrichmentService:
    def __init__(
        self,
        *,
        generate_text_func: GenerateTextFunc,
        rate_limiter: MinIntervalRateLimiter,
        logger: LogFunc,
        enrich_func: Callable[[Gadget, GenerateTextFunc], Gadget] = enrich_gadget,
        max_workers: int = 1,
    ) -> None:
        self._generate_text = generate_text_func
        self._rate_limiter = rate_limiter
        self._log = logger
        self._enrich = enrich_func
        self._max_workers = max(1, int(max_workers))

    def _generate_with_spacing(self, prompt: str) -> str | None:
        self._rate_limiter.wait()
        return self._generate_text(prompt)

    def _enrich_one(self, gadget: Gadget) -> Gadget:
        try:
            return self._enrich(gadget, self._generate_with_spacing)
        except Exception as e:
            self._log(f"⚠️ AI 처리 실패, 기본값 사용: {gadget.title[:40]} ({type(e).__name__}: {e})")
            return apply_default_values(gadget)

    def _log_progress(self, done: int, total: int) -> None:
        if done % PROGRESS_LOG_EVERY == 0 or done == total:
            self._log(f"🤖 AI 처리 진행: {done}/{total}")

    def enrich_all(self, gadgets: Sequence[Gadget]) -> list[Gadget]:
        """기사별로 AI 요약을 붙인다. 결과 순서는 입력 순서와 같다."""
        total = len(gadgets)
        if total == 0:
            return []
        self._log(f"🤖 AI 처리 시작: {total}건 (간격 {self._rate_limiter.interval_sec:.1f}초)")

        if self._max_workers <= 1:
            results: list[Gadget] = []
            for idx, gadget in enumerate(gadgets, start=1):
                results.append(self._enrich_one(gadget))
                self._log_progress(idx, total)
            return results

        # 워커 수와 무관하게 호출 간격은 공유 리미터가 보장한다.
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            results = []
            for idx, enriched in enumerate(executor.map(self._enrich_one, gadgets), start=1):
                results.append(enriched)
                self._log_progress(idx, total)
        return results

    def apply_defaults_all(self, gadgets: Sequence[Gadget]) -> list[Gadget]:
        return [apply_default_values(gadget) for gadget in gadgets]
