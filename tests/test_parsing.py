from __future__ import annotations

import datetime
import time

from gadget_news.models import Gadget
from gadget_news.processing.parsing import EntryParser, build_gadget_id, ensure_unique_ids

_NOW = datetime.datetime(2024, 5, 1, 12, 0, tzinfo=datetime.timezone.utc)


class _Entry:
    def __init__(
        self,
        *,
        title,
        link: str | None = "https://example.com/a",
        summary: str | None = None,
        published_parsed: time.struct_time | None = None,
    ) -> None:
        self.title = title
        self.link = link
        self.summary = summary
        if published_parsed is not None:
            self.published_parsed = published_parsed


def _parser(logs: list[str] | None = None) -> EntryParser:
    sink = logs if logs is not None else []
    return EntryParser(now_provider=lambda: _NOW, logger=sink.append)


def test_parse_entry_builds_gadget() -> None:
    published = time.strptime("2024-04-30 08:00:00", "%Y-%m-%d %H:%M:%S")
    entry = _Entry(
        title=" 新型 <b>iPhone</b>&nbsp;発表 ",
        summary="<p>新しい iPhone が登場</p>",
        published_parsed=published,
    )
    gadget = _parser().parse_entry(entry, "ITmedia Mobile")

    assert gadget is not None
    assert gadget.title == "新型 iPhone 発表"
    assert gadget.source_name == "ITmedia Mobile"
    assert gadget.source_url == "https://example.com/a"
    assert gadget.original_content == "新しい iPhone が登場"
    assert gadget.published_at == datetime.datetime(2024, 4, 30, 8, 0, tzinfo=datetime.timezone.utc)
    assert gadget.id == build_gadget_id("ITmedia Mobile", "https://example.com/a", "新型 iPhone 発表")
    assert gadget.summary is None and gadget.category is None and gadget.image_url is None
    assert gadget.is_trending is False


def test_parse_entry_defaults_missing_fields() -> None:
    gadget = _parser().parse_entry(_Entry(title="Pixel 9 発売", link=None), "CNET Japan")
    assert gadget is not None
    assert gadget.published_at == _NOW
    assert gadget.original_content is None
    assert gadget.source_url is None


def test_parse_entry_drops_irrelevant_and_missing_titles() -> None:
    parser = _parser()
    assert parser.parse_entry(_Entry(title="今日の天気"), "src") is None
    assert parser.parse_entry(_Entry(title=None), "src") is None
    # 키워드는 맞지만 태그를 벗기면 빈 제목
    assert parser.parse_entry(_Entry(title="<pc>"), "src") is None
    # 태그 속성에만 있는 키워드는 관련성으로 치지 않는다
    assert parser.parse_entry(_Entry(title='<span class="pc-only">今日の天気</span>'), "src") is None


def test_parse_entry_accepts_mapping_entries() -> None:
    entry = {"title": "Galaxy S24 レビュー", "link": "https://example.com/g", "description": "本文"}
    gadget = _parser().parse_entry(entry, "src")
    assert gadget is not None
    assert gadget.original_content == "本文"


def test_parse_entry_uses_published_string_when_parsed_missing() -> None:
    entry = {"title": "MacBook 発表", "published": "2024-04-01T00:00:00Z"}
    gadget = _parser().parse_entry(entry, "src")
    assert gadget is not None
    assert gadget.published_at == datetime.datetime(2024, 4, 1, tzinfo=datetime.timezone.utc)


class _BrokenEntry:
    @property
    def title(self):
        raise RuntimeError("boom")


def test_parse_entries_skips_broken_entry() -> None:
    logs: list[str] = []
    entries = [_Entry(title="iPhone 16 発表"), _BrokenEntry(), _Entry(title="天気"), _Entry(title="AirPods 発売")]
    gadgets = _parser(logs).parse_entries(entries, "src")
    assert [g.title for g in gadgets] == ["iPhone 16 発表", "AirPods 発売"]
    assert len(logs) == 1


def test_ensure_unique_ids_appends_suffix() -> None:
    base = Gadget(id="abcd1234", title="t", source_name="s", source_url=None, published_at=_NOW)
    other = Gadget(id="ffff0000", title="u", source_name="s", source_url=None, published_at=_NOW)
    ids = [g.id for g in ensure_unique_ids([base, other, base, base])]
    assert ids == ["abcd1234", "ffff0000", "abcd1234-2", "abcd1234-3"]
