"""Runtime settings loaded from an optional YAML file and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

__all__ = ["ToolConfig", "load_config", "ENV_PREFIX"]

ENV_PREFIX = "BOOKSCRIBE_"
_BACKENDS = ("pymupdf", "pypdf")


@dataclass(frozen=True, slots=True)
class ToolConfig:
    """Knobs for the extraction, OCR and logging stages.

    Attributes:
        page_cap: Maximum number of pages processed by embedded-text extraction.
        ocr_min_chars: Extracted text shorter than this (after stripping)
            triggers the OCR fallback.
        ocr_scale: Render scale applied before OCR.
        ocr_lang: Tesseract language code.
        extract_backend: ``pymupdf`` or ``pypdf``.
        tesseract_cmd: Optional path to the ``tesseract`` binary.
        log_dir: Directory for rotating log files.
    """

    page_cap: int = 50
    ocr_min_chars: int = 100
    ocr_scale: float = 1.5
    ocr_lang: str = "eng"
    extract_backend: str = "pymupdf"
    tesseract_cmd: str | None = None
    log_dir: str = "logs"

    def validate(self) -> ToolConfig:
        if self.page_cap < 1:
            raise ValueError("page_cap must be >= 1")
        if self.ocr_min_chars < 0:
            raise ValueError("ocr_min_chars must be >= 0")
        if self.ocr_scale <= 0:
            raise ValueError("ocr_scale must be > 0")
        if self.extract_backend not in _BACKENDS:
            raise ValueError(f"extract_backend must be one of {', '.join(_BACKENDS)}")
        return self


def _coerce(name: str, raw: Any) -> Any:
    """Convert a YAML/env value to the field's declared type."""
    if raw is None:
        return None
    if name in ("page_cap", "ocr_min_chars"):
        return int(raw)
    if name == "ocr_scale":
        return float(raw)
    return str(raw)


def load_config(path: str | Path | None = None) -> ToolConfig:
    """Build a :class:`ToolConfig`.

    Resolution order, later wins:
    1. dataclass defaults
    2. YAML mapping at ``path`` (or ``$BOOKSCRIBE_CONFIG``)
    3. ``BOOKSCRIBE_<FIELD>`` environment variables

    Raises:
        FileNotFoundError: If an explicit config path does not exist.
        ValueError: On unknown keys or invalid values.
    """
    known = {f.name for f in fields(ToolConfig)}
    overrides: dict[str, Any] = {}

    cfg_path = path or os.getenv(f"{ENV_PREFIX}CONFIG")
    if cfg_path:
        src = Path(cfg_path)
        data = yaml.safe_load(src.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"config file must contain a mapping: {src}")
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown config keys: {', '.join(unknown)}")
        overrides.update({k: _coerce(k, v) for k, v in data.items()})

    for name in known:
        env_val = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if env_val not in (None, ""):
            overrides[name] = _coerce(name, env_val)

    return replace(ToolConfig(), **overrides).validate()
