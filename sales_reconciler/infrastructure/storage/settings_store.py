"""Storage helpers for reconciliation settings overrides."""
from __future__ import annotations

from pathlib import Path
import json
from typing import Any

DEFAULT_FILE_NAME = "reconciler_settings.json"


def _normalize_overrides(raw: dict[str, Any] | None, allowed: set[str] | None = None) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    if not isinstance(raw, dict):
        return normalized
    for key, value in raw.items():
        if key is None:
            continue
        key_str = str(key).strip().lower()
        if not key_str:
            continue
        if allowed is not None and key_str not in allowed:
            continue
        normalized[key_str] = value.strip() if isinstance(value, str) else value
    return normalized


def load_overrides(path: Path, allowed: set[str] | None = None) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return _normalize_overrides(data, allowed)


def save_overrides(overrides: dict[str, Any], path: Path, allowed: set[str] | None = None) -> dict[str, Any]:
    normalized = _normalize_overrides(overrides, allowed)
    path.write_text(
        json.dumps(normalized, ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )
    return normalized
