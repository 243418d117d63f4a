from __future__ import annotations

import argparse
import datetime
import logging
import traceback
from typing import Sequence

from gadget_news.core.config import resolve_run_config
from gadget_news.processing.pipeline import build_default_pipeline

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _log(message: str) -> None:
    ts = datetime.datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {message}")


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gadget-news",
        description="가젯 뉴스 RSS를 수집/요약해 gadgets.json을 생성합니다.",
    )
    parser.add_argument("api_key", nargs="?", default=None, help="Gemini API 키 (생략 시 GEMINI_API_KEY)")
    parser.add_argument("output_dir", nargs="?", default=None, help="출력 디렉터리 (생략 시 OUTPUT_DIR 또는 data/)")
    parser.add_argument("--max-items", type=int, default=None, help="처리할 최대 기사 수")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging 레벨 (기본 INFO)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        _log("프로그램 시작")
        run_config = resolve_run_config(args.api_key, args.output_dir, max_items=args.max_items)
        pipeline = build_default_pipeline(run_config, logger=_log)
        data = pipeline.run()
        if data is None:
            _log("완료: 처리할 기사가 없어 파일을 갱신하지 않았습니다.")
            return 0
        _log(f"완료! 총 {len(data.gadgets)}건")
        return 0

    except Exception as e:
        print("❌ 오류 발생:", e)
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
