"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

_DEFAULT_EQUIP_POLICY = "owned"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "QuestTown"
        return Path.home() / "QuestTown"
    return Path.home() / ".config" / "questtown"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the directory the game state blob is written to."""
    return get_user_data_dir() / "saves"


def _normalize_equip_policy(value: object) -> str:
    return "any" if value == "any" else _DEFAULT_EQUIP_POLICY


def load_config(path: Path | None = None) -> Dict[str, str]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {"equip_policy": _DEFAULT_EQUIP_POLICY}
    except (OSError, ValueError):
        return {"equip_policy": _DEFAULT_EQUIP_POLICY}
    if not isinstance(raw, dict):
        return {"equip_policy": _DEFAULT_EQUIP_POLICY}
    return {"equip_policy": _normalize_equip_policy(raw.get("equip_policy"))}


def save_config(config: Dict[str, str], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"equip_policy": _normalize_equip_policy(config.get("equip_policy"))}
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
