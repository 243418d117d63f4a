from __future__ import annotations

from typing import Iterable, Sequence

from gadget_news.core.constants import (
    CATEGORY_RULES,
    DEFAULT_CATEGORY,
    GADGET_CATEGORIES,
    RELEVANCE_KEYWORDS,
)


def is_gadget_related(title: str | None, keywords: Iterable[str] = RELEVANCE_KEYWORDS) -> bool:
    # 제목에 가젯 키워드가 하나라도 포함되어 있으면 수집 대상
    if not title:
        return False
    lowered = title.lower()
    return any(kw.lower() in lowered for kw in keywords)


def guess_category(
    title: str | None,
    rules: Sequence[tuple[str, Sequence[str]]] = CATEGORY_RULES,
    default: str = DEFAULT_CATEGORY,
) -> str:
    # 규칙 순서가 곧 우선순위. AI 카테고리 검증 실패 시에도 이 결과를 쓴다.
    if not title:
        return default
    lowered = title.lower()
    for category, keywords in rules:
        if any(kw.lower() in lowered for kw in keywords):
            return category
    return default


def is_valid_category(value: object) -> bool:
    return isinstance(value, str) and value in GADGET_CATEGORIES
