from __future__ import annotations

import datetime

import pytest

import gadget_news.export.gadget_exporter as exporter
from gadget_news.models import GadgetData


class _Pipeline:
    def __init__(self, result) -> None:
        self._result = result

    def run(self):
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


def _patch_pipeline(monkeypatch, result, captured: dict) -> None:
    def _build(run_config, *, logger):
        captured["config"] = run_config
        return _Pipeline(result)

    monkeypatch.setattr(exporter, "build_default_pipeline", _build)


def test_main_resolves_arguments_and_returns_zero(monkeypatch, tmp_path) -> None:
    captured: dict = {}
    data = GadgetData(gadgets=(), last_updated=datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc))
    _patch_pipeline(monkeypatch, data, captured)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    assert exporter.main(["key-123", str(tmp_path), "--max-items", "5"]) == 0
    config = captured["config"]
    assert config.api_key == "key-123"
    assert config.output_dir == tmp_path
    assert config.max_items == 5
    assert config.ai_enabled


def test_main_empty_batch_is_not_an_error(monkeypatch) -> None:
    captured: dict = {}
    _patch_pipeline(monkeypatch, None, captured)
    monkeypatch.setenv("GEMINI_API_KEY", "  ")
    assert exporter.main([]) == 0
    assert captured["config"].ai_enabled is False


def test_main_returns_one_on_fatal_error(monkeypatch, capsys) -> None:
    _patch_pipeline(monkeypatch, PermissionError("read-only"), {})
    assert exporter.main([]) == 1
    assert "❌" in capsys.readouterr().out


def test_main_rejects_unknown_log_level(monkeypatch) -> None:
    _patch_pipeline(monkeypatch, None, {})
    with pytest.raises(SystemExit) as exc_info:
        exporter.main(["--log-level", "LOUD"])
    assert exc_info.value.code == 2


def test_main_accepts_lowercase_log_level(monkeypatch) -> None:
    _patch_pipeline(monkeypatch, None, {})
    assert exporter.main(["--log-level", "debug"]) == 0
