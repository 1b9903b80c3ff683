"""Shared JSON configuration storage."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from tool_rental.logging_config import get_logger


def load_config_data(config_path: Path) -> dict[str, Any]:
    """Load configuration JSON data from disk, or an empty mapping."""
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        get_logger(__name__).warning("Ignoring unreadable config file %s", config_path)
        return {}
    if isinstance(data, dict):
        return data
    return {}


def save_config_data(config_path: Path, data: dict[str, Any]) -> None:
    """Persist configuration JSON data to disk."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
    )


def update_config_value(config_path: Path, key: str, value: Any) -> None:
    """Set one key in the config file, keeping the others."""
    payload = load_config_data(config_path)
    if value is None:
        payload.pop(key, None)
    else:
        payload[key] = value
    save_config_data(config_path, payload)
