from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

_repo_root = Path(__file__).resolve().parents[3]
load_dotenv(dotenv_path=_repo_root / ".env")

# ==========================================
# 피드 설정 (수정 가능)
# ==========================================

FEED_SOURCES = [
    {"name": "ITmedia Mobile", "url": "https://rss.itmedia.co.jp/rss/2.0/mobile.xml"},
    {"name": "ITmedia PC USER", "url": "https://rss.itmedia.co.jp/rss/2.0/pcuser.xml"},
    {"name": "CNET Japan", "url": "http://feeds.japan.cnet.com/rss/cnet/all.rdf"},
    {"name": "Impress Watch", "url": "https://www.watch.impress.co.jp/data/rss/1.0/ipw/feed.rdf"},
    {"name": "PC Watch", "url": "https://pc.watch.impress.co.jp/data/rss/1.0/pcw/feed.rdf"},
    {"name": "AV Watch", "url": "https://av.watch.impress.co.jp/data/rss/1.0/avw/feed.rdf"},
    {"name": "ケータイ Watch", "url": "https://k-tai.watch.impress.co.jp/data/rss/1.0/ktw/feed.rdf"},
]

REPO_ROOT = _repo_root
DATA_DIR = Path(os.getenv("DATA_DIR", str(REPO_ROOT / "data")))
OUTPUT_FILENAME = "gadgets.json"

MAX_GADGETS = int(os.getenv("MAX_GADGETS", "50"))

# ==========================================
# 환경변수 기반 설정
# ==========================================

FEED_FETCH_TIMEOUT_SEC = int(os.getenv("FEED_FETCH_TIMEOUT_SEC", "20"))
FEED_FETCH_MAX_WORKERS = int(os.getenv("FEED_FETCH_MAX_WORKERS", "4"))

GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_CONNECT_TIMEOUT_SEC = int(os.getenv("GEMINI_CONNECT_TIMEOUT_SEC", "30"))
GEMINI_READ_TIMEOUT_SEC = int(os.getenv("GEMINI_READ_TIMEOUT_SEC", "60"))
AI_CALL_INTERVAL_SEC = float(os.getenv("AI_CALL_INTERVAL_SEC", "1.0"))
AI_MAX_WORKERS = int(os.getenv("AI_MAX_WORKERS", "1"))

TREND_MIN_MENTIONS = int(os.getenv("TREND_MIN_MENTIONS", "2"))
TREND_MIN_ITEMS = int(os.getenv("TREND_MIN_ITEMS", "3"))

API_KEY_ENV = "GEMINI_API_KEY"
OUTPUT_DIR_ENV = "OUTPUT_DIR"


@dataclass(frozen=True)
class RunConfig:
    api_key: str | None
    output_dir: Path
    max_items: int = MAX_GADGETS

    @property
    def ai_enabled(self) -> bool:
        return bool(self.api_key)


def _pick(explicit: str | None, env_name: str, environ: Mapping[str, str]) -> str | None:
    """명시 인자 > 환경변수 순으로 값을 고른다. 빈 문자열은 없는 것으로 본다."""
    if explicit is not None and explicit.strip():
        return explicit.strip()
    raw = (environ.get(env_name) or "").strip()
    return raw or None


def resolve_run_config(
    api_key: str | None = None,
    output_dir: str | None = None,
    *,
    max_items: int | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunConfig:
    env = os.environ if environ is None else environ
    resolved_dir = _pick(output_dir, OUTPUT_DIR_ENV, env)
    return RunConfig(
        api_key=_pick(api_key, API_KEY_ENV, env),
        output_dir=Path(resolved_dir) if resolved_dir else DATA_DIR,
        max_items=max_items if max_items is not None else MAX_GADGETS,
    )
