# expense_tracker/config.py
from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Dict

import yaml

LOG_LEVEL_ENV = "EXPENSE_TRACKER_LOG_LEVEL"

DEFAULT_CONFIG: Dict[str, object] = {
    "expense_file": "data/expenses.json",
    "summary_file": "data/category-summary.json",
    "log_level": "WARNING",
}


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = value
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _check_log_level(value, source) -> str:
    if not isinstance(value, str) or value.strip().upper() not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level {value!r} from {source}, expected one of {', '.join(LOG_LEVELS)}"
        )
    return value.strip().upper()


def load_config(path=None) -> Dict[str, object]:
    """
    Read a YAML config and fill in defaults. A missing file (or no path at
    all) gives the defaults. The log level from the environment wins over the
    file and is normalized to an upper-case level name.
    """
    data: Dict[str, object] = {}
    if path is not None and Path(path).exists():
        try:
            with Path(path).open("r", encoding="utf-8") as fp:
                data = yaml.safe_load(fp) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Config file {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
    config = _merge_defaults(data, copy.deepcopy(DEFAULT_CONFIG))
    env_level = os.getenv(LOG_LEVEL_ENV)
    if env_level:
        config["log_level"] = _check_log_level(env_level, LOG_LEVEL_ENV)
    else:
        config["log_level"] = _check_log_level(config["log_level"], path or "defaults")
    return config


def save_config(config: Dict[str, object], path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config, fp, sort_keys=False)
