from __future__ import annotations

import ast
import json
import math
import re
from dataclasses import dataclass, replace
from typing import Any

from gadget_news.core.constants import (
    NO_CONTENT_PLACEHOLDER,
    PRICE_TEXT_FORMAT,
    PRICE_UNDETERMINED,
    SUMMARY_TEMPLATE,
)
from gadget_news.models import Gadget
from gadget_news.processing.classification import guess_category, is_valid_category
from gadget_news.processing.types import GenerateTextFunc

PROMPT_TEMPLATE = """以下のガジェット情報を分析して、JSON形式で回答してください。

タイトル: {title}
内容: {content}

回答形式（JSON）:
{{
  "summary": "3行以内の日本語要約（製品の特徴、性能、価格などの要点）",
  "price": 税込価格（数値のみ、不明な場合はnull）,
  "priceText": "価格表示テキスト（例：¥99,800、不明な場合は「価格未定」）",
  "category": "カテゴリ（Mobile/PC/Wearable/Audio/Smart Home のいずれか）",
  "isTrending": トレンド性が高いかどうか（true/false）
}}

注意:
- summaryは必ず日本語で、製品の魅力が伝わる文章にしてください
- categoryは必ず5つのうちいずれかを選択してください
- isTrendingは、新製品発表や大きなアップデートの場合にtrueにしてください
"""

_FENCED_JSON_RE = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")
_NUMERIC_RE = re.compile(r"^-?\d+(?:\.\d+)?$")


@dataclass(frozen=True)
class AIReply:
    summary: str | None = None
    price: int | None = None
    price_text: str | None = None
    category: str | None = None
    is_trending: bool | None = None


def build_prompt(gadget: Gadget) -> str:
    content = gadget.original_content or NO_CONTENT_PLACEHOLDER
    return PROMPT_TEMPLATE.format(title=gadget.title, content=content)


def _extract_brace_block(text: str) -> str | None:
    # 첫 '{'부터 깊이가 0으로 돌아오는 지점까지. 문자열 리터럴 안의 괄호는 세지 않는다.
    start = text.find("{")
    if start == -1:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def extract_json_payload(text: str) -> str:
    """응답 텍스트에서 JSON 후보를 고른다: ```json 블록 > 첫 중괄호 블록 > 전체 텍스트."""
    if not text:
        return ""
    fenced = _FENCED_JSON_RE.search(text)
    if fenced:
        return fenced.group(1).strip()
    block = _extract_brace_block(text)
    if block:
        return block.strip()
    return text.strip()


def _load_json_object(payload: str) -> dict[str, Any] | None:
    def _try_load(candidate: str) -> Any:
        try:
            return json.loads(candidate)
        except ValueError:
            return None

    obj = _try_load(payload)
    if obj is None:
        cleaned = _TRAILING_COMMA_RE.sub(r"\1", payload)
        obj = _try_load(cleaned)
        if obj is None:
            # 모델이 작은따옴표 dict를 돌려주는 경우 대비
            try:
                obj = ast.literal_eval(cleaned)
            except (ValueError, SyntaxError, MemoryError, RecursionError, TypeError):
                return None
    return obj if isinstance(obj, dict) else None


def _as_text(value: Any) -> str | None:
    # 모델이 준 문자열은 줄바꿈까지 그대로 보존하고, 앞뒤 공백만 정리한다.
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _as_price(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(round(value)) if math.isfinite(value) else None
    if isinstance(value, str):
        raw = value.replace(",", "").replace("¥", "").replace("円", "").strip()
        if _NUMERIC_RE.match(raw):
            return int(round(float(raw)))
    return None


def parse_ai_reply(text: str | None) -> AIReply | None:
    # 파싱 불가(빈 응답, JSON 객체 아님)면 None. 필드 단위 타입 불일치는 '없음'으로 본다.
    if not text or not text.strip():
        return None
    data = _load_json_object(extract_json_payload(text))
    if data is None:
        return None
    trending = data.get("isTrending")
    return AIReply(
        summary=_as_text(data.get("summary")),
        price=_as_price(data.get("price")),
        price_text=_as_text(data.get("priceText")),
        category=_as_text(data.get("category")),
        is_trending=trending if isinstance(trending, bool) else None,
    )


def format_price_text(price: int) -> str:
    return PRICE_TEXT_FORMAT.format(price=price)


def apply_ai_reply(gadget: Gadget, reply: AIReply) -> Gadget:
    summary = reply.summary if reply.summary is not None else gadget.summary
    price = reply.price if reply.price is not None else gadget.price
    if reply.price_text is not None:
        price_text = reply.price_text
    elif price is not None:
        price_text = format_price_text(price)
    else:
        price_text = PRICE_UNDETERMINED
    if is_valid_category(reply.category):
        category = reply.category
    else:
        category = guess_category(gadget.title)
    is_trending = reply.is_trending if reply.is_trending is not None else gadget.is_trending
    return replace(
        gadget,
        summary=summary,
        price=price,
        price_text=price_text,
        category=category,
        is_trending=is_trending,
    )


def apply_default_values(gadget: Gadget) -> Gadget:
    # AI 없이도 요약/가격 표기/카테고리가 비지 않도록 채운다. 이미 있는 값은 건드리지 않는다.
    return replace(
        gadget,
        summary=gadget.summary if gadget.summary is not None else SUMMARY_TEMPLATE.format(title=gadget.title),
        price_text=gadget.price_text if gadget.price_text is not None else PRICE_UNDETERMINED,
        category=gadget.category if gadget.category is not None else guess_category(gadget.title),
    )


def enrich_gadget(gadget: Gadget, generate_text: GenerateTextFunc) -> Gadget:
    # 기사 하나를 AI로 요약/가격/카테고리/트렌드 판정. 실패하면 부분 결과 없이 기본값만 적용.
    reply_text = generate_text(build_prompt(gadget))
    reply = parse_ai_reply(reply_text)
    if reply is None:
        return apply_default_values(gadget)
    return apply_default_values(apply_ai_reply(gadget, reply))
