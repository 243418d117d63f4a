from __future__ import annotations

import datetime
import threading

from gadget_news.models import Gadget
from gadget_news.processing.ai_enricher import apply_default_values
from gadget_news.processing.ai_service import AIEnrichmentService
from gadget_news.processing.rate_limit import MinIntervalRateLimiter

_NOW = datetime.datetime(2024, 5, 1, tzinfo=datetime.timezone.utc)


class _CountingLimiter(MinIntervalRateLimiter):
    def __init__(self) -> None:
        super().__init__(1.0, sleep=lambda _s: None)
        self.calls = 0
        self._count_lock = threading.Lock()

    def wait(self) -> float:
        with self._count_lock:
            self.calls += 1
        return 0.0


def _gadgets(n: int) -> list[Gadget]:
    return [
        Gadget(id=f"id{i:06d}", title=f"iPhone news {i}", source_name="src", source_url=None, published_at=_NOW)
        for i in range(n)
    ]


def test_enrich_all_keeps_order_and_waits_per_call() -> None:
    limiter = _CountingLimiter()
    logs: list[str] = []
    service = AIEnrichmentService(
        generate_text_func=lambda prompt: '{"summary": "要約", "category": "Audio"}',
        rate_limiter=limiter,
        logger=logs.append,
    )
    result = service.enrich_all(_gadgets(12))

    assert [g.id for g in result] == [g.id for g in _gadgets(12)]
    assert all(g.summary == "要約" and g.category == "Audio" for g in result)
    assert limiter.calls == 12
    assert any("10/12" in line for line in logs)
    assert any("12/12" in line for line in logs)


def test_enrich_all_absorbs_item_exception() -> None:
    def _generate(prompt: str) -> str:
        if "news 1\n" in prompt:
            raise RuntimeError("boom")
        return '{"summary": "ok"}'

    logs: list[str] = []
    service = AIEnrichmentService(
        generate_text_func=_generate,
        rate_limiter=_CountingLimiter(),
        logger=logs.append,
    )
    items = _gadgets(3)
    result = service.enrich_all(items)

    assert result[1] == apply_default_values(items[1])
    assert result[0].summary == "ok" and result[2].summary == "ok"
    assert any("AI 처리 실패" in line for line in logs)


def test_enrich_all_parallel_preserves_order() -> None:
    limiter = _CountingLimiter()
    service = AIEnrichmentService(
        generate_text_func=lambda prompt: '{"summary": "s"}',
        rate_limiter=limiter,
        logger=lambda _msg: None,
        max_workers=4,
    )
    items = _gadgets(9)
    result = service.enrich_all(items)
    assert [g.id for g in result] == [g.id for g in items]
    assert limiter.calls == 9


def test_apply_defaults_all_makes_no_calls() -> None:
    def _generate(prompt: str) -> str:
        raise AssertionError("must not be called")

    service = AIEnrichmentService(
        generate_text_func=_generate,
        rate_limiter=_CountingLimiter(),
        logger=lambda _msg: None,
    )
    result = service.apply_defaults_all(_gadgets(2))
    assert all(g.summary and g.price_text == "価格未定" for g in result)
