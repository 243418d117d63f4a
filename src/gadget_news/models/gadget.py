from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import TypedDict

from gadget_news.utils import format_iso_utc


class GadgetPayload(TypedDict):
    id: str
    title: str
    summary: str | None
    price: int | None
    priceText: str | None
    category: str | None
    imageUrl: str | None
    sourceUrl: str | None
    sourceName: str
    publishedAt: str
    isTrending: bool


class GadgetDataPayload(TypedDict):
    gadgets: list[GadgetPayload]
    lastUpdated: str


@dataclass(frozen=True)
class Gadget:
    id: str
    title: str
    source_name: str
    source_url: str | None
    published_at: datetime.datetime
    original_content: str | None = None  # 요약 입력용, 출력에는 포함하지 않음
    summary: str | None = None
    price: int | None = None
    price_text: str | None = None
    category: str | None = None
    image_url: str | None = None
    is_trending: bool = False

    def to_payload(self) -> GadgetPayload:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "price": self.price,
            "priceText": self.price_text,
            "category": self.category,
            "imageUrl": self.image_url,
            "sourceUrl": self.source_url,
            "sourceName": self.source_name,
            "publishedAt": format_iso_utc(self.published_at),
            "isTrending": self.is_trending,
        }


@dataclass(frozen=True)
class GadgetData:
    gadgets: tuple[Gadget, ...]
    last_updated: datetime.datetime

    def to_payload(self) -> GadgetDataPayload:
        return {
            "gadgets": [g.to_payload() for g in self.gadgets],
            "lastUpdated": format_iso_utc(self.last_updated),
        }
