from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from gadget_news.core.config import OUTPUT_FILENAME
from gadget_news.models import GadgetData


def _atomic_write_json(path: Path, payload: Any) -> None:
    """임시 파일로 저장 후 원자적 교체."""
    tmp_path = path.with_name(f"{path.name}.tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, path)


def export_gadgets_json(data: GadgetData, output_dir: str | os.PathLike[str]) -> Path:
    # 매 실행마다 이전 파일을 통째로 교체한다.
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / OUTPUT_FILENAME
    _atomic_write_json(path, data.to_payload())
    return path
