from __future__ import annotations

import datetime
import email.utils
import hashlib
import html
import re
from typing import Any

_WS_RE = re.compile(r"\s+")  # 공백 정리 시 연속 공백을 단일 공백으로 축약
_TAG_RE = re.compile(r"<[^>]+>")  # 설명문에 섞여 들어온 HTML 태그 제거용


def clean_text(s: str) -> str:
    """HTML 엔티티/태그를 제거하고 공백을 정리한 깔끔한 텍스트로 정규화."""
    if not s:
        return ""
    # 1) &nbsp; 같은 HTML 엔티티를 문자로 변환
    s = html.unescape(s)

    # 2) NBSP(유니코드) -> 일반 스페이스로
    s = s.replace("\u00a0", " ")

    # 3) 혹시 섞여 들어온 HTML 태그 제거
    s = _TAG_RE.sub("", s)

    # 4) 공백 정리
    return _WS_RE.sub(" ", s).strip()


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def struct_time_to_utc(value: Any) -> datetime.datetime | None:
    # feedparser의 *_parsed 값(UTC 기준 struct_time)을 aware datetime으로 변환
    if not value:
        return None
    try:
        return datetime.datetime(*tuple(value)[:6], tzinfo=datetime.timezone.utc)
    except (TypeError, ValueError):
        return None


def parse_datetime_utc(value: str) -> datetime.datetime | None:
    if not value:
        return None
    try:
        dt = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        try:
            dt = email.utils.parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def format_iso_utc(value: datetime.datetime) -> str:
    """ISO-8601 UTC 문자열(`Z` 접미사)로 직렬화."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc).isoformat().replace("+00:00", "Z")


def short_hash(*parts: str, length: int = 8) -> str:
    joined = "|".join(p or "" for p in parts)
    return hashlib.sha1(joined.encode("utf-8")).hexdigest()[:length]
