from __future__ import annotations

import logging
import re
from typing import Any

import requests

from gadget_news.core.config import (
    GEMINI_API_BASE,
    GEMINI_CONNECT_TIMEOUT_SEC,
    GEMINI_MODEL,
    GEMINI_READ_TIMEOUT_SEC,
)

logger = logging.getLogger(__name__)


def _extract_gemini_text(payload: dict[str, Any]) -> str:
    # Gemini REST 응답에서 텍스트만 추출
    try:
        return payload["candidates"][0]["content"]["parts"][0]["text"].strip()
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""


def build_request_payload(prompt: str) -> dict[str, Any]:
    return {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": prompt}],
            }
        ],
    }


def gemini_generate_text(
    prompt: str,
    *,
    api_key: str,
    api_base: str = GEMINI_API_BASE,
    model: str = GEMINI_MODEL,
    timeout: tuple[float, float] = (GEMINI_CONNECT_TIMEOUT_SEC, GEMINI_READ_TIMEOUT_SEC),
    session: Any = None,
) -> str | None:
    """Gemini generateContent 호출 후 첫 후보의 텍스트를 돌려준다.

    재시도는 하지 않는다. 실패는 None으로 알리고, 호출한 쪽이 기본값으로 흡수한다.
    """
    if not api_key:
        logger.warning("GEMINI_API_KEY 미설정")
        return None
    http = session or requests
    url = f"{api_base}/models/{model}:generateContent"
    try:
        resp = http.post(
            url,
            headers={"x-goog-api-key": api_key, "Content-Type": "application/json"},
            json=build_request_payload(prompt),
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.warning("Gemini 호출 실패: %s: %s", type(e).__name__, e)
        return None

    if not resp.ok:
        snippet = re.sub(r"\s+", " ", resp.text or "")[:160]
        logger.warning("Gemini 호출 실패: %s %s", resp.status_code, snippet)
        return None

    try:
        data = resp.json()
    except ValueError:
        logger.warning("Gemini 응답 JSON 파싱 실패")
        return None

    text = _extract_gemini_text(data) if isinstance(data, dict) else ""
    if not text:
        logger.warning("Gemini 응답 텍스트 비어있음")
        return None
    return text


class GeminiTextClient:
    """자격 증명을 묶어 둔 텍스트 생성 호출자. AIEnrichmentService에 함수처럼 주입된다."""

    def __init__(self, api_key: str, *, session: Any = None, **options: Any) -> None:
        self._api_key = api_key
        self._session = session
        self._options = options

    def __call__(self, prompt: str) -> str | None:
        return gemini_generate_text(
            prompt,
            api_key=self._api_key,
            session=self._session,
            **self._options,
        )
