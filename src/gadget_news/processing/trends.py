from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from gadget_news.core.constants import TREND_KEYWORDS
from gadget_news.models import Gadget


def count_trend_keywords(
    gadgets: Iterable[Gadget],
    keywords: Sequence[str] = TREND_KEYWORDS,
) -> dict[str, int]:
    """키워드별로 제목에 그 키워드를 포함한 기사 수를 센다 (기사당 1회)."""
    counts = {kw: 0 for kw in keywords}
    for gadget in gadgets:
        lowered = (gadget.title or "").lower()
        for kw in keywords:
            if kw.lower() in lowered:
                counts[kw] += 1
    return counts


def apply_trends(
    gadgets: Sequence[Gadget],
    keywords: Sequence[str] = TREND_KEYWORDS,
    min_mentions: int = 2,
    min_trending: int = 3,
) -> list[Gadget]:
    # 이미 True인 플래그는 내리지 않는다. 같은 입력에 다시 적용해도 결과가 같다.
    counts = count_trend_keywords(gadgets, keywords)
    hot = [kw.lower() for kw, count in counts.items() if count >= min_mentions]

    result: list[Gadget] = []
    for gadget in gadgets:
        lowered = (gadget.title or "").lower()
        if not gadget.is_trending and any(kw in lowered for kw in hot):
            gadget = replace(gadget, is_trending=True)
        result.append(gadget)

    trending_count = sum(1 for g in result if g.is_trending)
    if trending_count >= min_trending:
        return result

    # 트렌드가 너무 적으면 최신순 상위 min_trending건을 강제로 표시
    recent = sorted(range(len(result)), key=lambda i: result[i].published_at, reverse=True)
    for idx in recent[:max(0, min_trending)]:
        if not result[idx].is_trending:
            result[idx] = replace(result[idx], is_trending=True)
    return result
