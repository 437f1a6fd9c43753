from __future__ import annotations

from pathlib import Path

import pytest

from bookscribe.config import ToolConfig, load_config


def test_defaults() -> None:
    cfg = load_config()
    assert cfg == ToolConfig(log_dir=cfg.log_dir)
    assert cfg.page_cap == 50
    assert cfg.ocr_min_chars == 100
    assert cfg.ocr_scale == 1.5
    assert cfg.ocr_lang == "eng"
    assert cfg.extract_backend == "pymupdf"


def test_yaml_then_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg_file = tmp_path / "bookscribe.yaml"
    cfg_file.write_text("page_cap: 10\nocr_lang: deu\nextract_backend: pypdf\n", encoding="utf-8")
    monkeypatch.setenv("BOOKSCRIBE_PAGE_CAP", "20")
    cfg = load_config(cfg_file)
    assert cfg.page_cap == 20
    assert cfg.ocr_lang == "deu"
    assert cfg.extract_backend == "pypdf"


def test_config_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg_file = tmp_path / "c.yaml"
    cfg_file.write_text("ocr_scale: 2\n", encoding="utf-8")
    monkeypatch.setenv("BOOKSCRIBE_CONFIG", str(cfg_file))
    assert load_config().ocr_scale == 2.0


def test_unknown_key_rejected(tmp_path: Path) -> None:
    cfg_file = tmp_path / "c.yaml"
    cfg_file.write_text("page_limit: 3\n", encoding="utf-8")
    with pytest.raises(ValueError, match="page_limit"):
        load_config(cfg_file)


@pytest.mark.parametrize(
    ("var", "value"),
    [
        ("BOOKSCRIBE_EXTRACT_BACKEND", "tika"),
        ("BOOKSCRIBE_PAGE_CAP", "0"),
        ("BOOKSCRIBE_OCR_SCALE", "-1"),
        ("BOOKSCRIBE_PAGE_CAP", "many"),
    ],
)
def test_invalid_values_rejected(monkeypatch: pytest.MonkeyPatch, var: str, value: str) -> None:
    monkeypatch.setenv(var, value)
    with pytest.raises(ValueError):
        load_config()


def test_missing_explicit_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")
