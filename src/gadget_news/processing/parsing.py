from __future__ import annotations

import datetime
from dataclasses import replace
from typing import Any, Callable, Iterable

from gadget_news.models import Gadget
from gadget_news.processing.classification import is_gadget_related
from gadget_news.processing.types import LogFunc, NowFunc
from gadget_news.utils import clean_text, parse_datetime_utc, short_hash, struct_time_to_utc, utc_now


def _entry_value(entry: Any, name: str) -> Any:
    # feedparser entry는 속성/키 접근을 모두 지원하지만, 테스트용 스텁은 둘 중 하나만 가진다.
    value = getattr(entry, name, None)
    if value is None and isinstance(entry, dict):
        value = entry.get(name)
    return value


def build_gadget_id(source_name: str, link: str | None, title: str) -> str:
    return short_hash(source_name, link or "", title)


def ensure_unique_ids(gadgets: Iterable[Gadget]) -> list[Gadget]:
    # 같은 실행 안에서 id가 겹치면 -2, -3 ... 접미사를 붙인다.
    seen: dict[str, int] = {}
    result: list[Gadget] = []
    for gadget in gadgets:
        count = seen.get(gadget.id, 0) + 1
        seen[gadget.id] = count
        if count > 1:
            gadget = replace(gadget, id=f"{gadget.id}-{count}")
        result.append(gadget)
    return result


class EntryParser:
    def __init__(
        self,
        *,
        is_related_func: Callable[[str | None], bool] = is_gadget_related,
        clean_text_func: Callable[[str], str] = clean_text,
        now_provider: NowFunc | None = None,
        logger: LogFunc | None = None,
    ) -> None:
        self._is_related = is_related_func
        self._clean_text = clean_text_func
        self._now_provider = now_provider or utc_now
        self._log = logger or (lambda _msg: None)

    def pick_published_at(self, entry: Any) -> datetime.datetime:
        # published_parsed > updated_parsed > published 문자열 > 수집 시각
        for name in ("published_parsed", "updated_parsed"):
            parsed = struct_time_to_utc(_entry_value(entry, name))
            if parsed is not None:
                return parsed
        raw = _entry_value(entry, "published")
        if isinstance(raw, str):
            parsed = parse_datetime_utc(raw)
            if parsed is not None:
                return parsed
        return self._now_provider()

    def pick_description(self, entry: Any) -> str | None:
        raw = _entry_value(entry, "summary") or _entry_value(entry, "description") or ""
        cleaned = self._clean_text(str(raw))
        return cleaned or None

    def parse_entry(self, entry: Any, source_name: str) -> Gadget | None:
        title_raw = _entry_value(entry, "title")
        if not isinstance(title_raw, str):
            return None
        # 태그 속성(class="pc-only" 등)이 키워드로 잡히지 않도록 정리한 제목으로 판정
        title = self._clean_text(title_raw)
        if not title or not self._is_related(title):
            return None
        link = _entry_value(entry, "link") or None
        return Gadget(
            id=build_gadget_id(source_name, link, title),
            title=title,
            source_name=source_name,
            source_url=link,
            published_at=self.pick_published_at(entry),
            original_content=self.pick_description(entry),
        )

    def parse_entries(self, entries: Iterable[Any], source_name: str) -> list[Gadget]:
        gadgets: list[Gadget] = []
        for idx, entry in enumerate(entries, start=1):
            try:
                gadget = self.parse_entry(entry, source_name)
            except Exception as e:
                # 한 항목의 파싱 실패가 같은 피드의 나머지 항목을 막지 않도록 건너뛴다.
                self._log(f"⚠️ 항목 파싱 실패: {source_name} #{idx} ({type(e).__name__}: {e})")
                continue
            if gadget is not None:
                gadgets.append(gadget)
        return gadgets
