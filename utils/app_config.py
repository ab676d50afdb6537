"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores user preferences that must be known before opening the DB (db_folder,
log_level). Config lives in ~/.expense_tracker/config.json.
"""
import json
import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".expense_tracker"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_LOG_LEVEL = "INFO"


def load_config(path: Path | None = None) -> dict:
    """Returns {} on missing or corrupt file — never raises."""
    try:
        with open(path or CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict, path: Path | None = None) -> None:
    """Creates the config folder if needed; atomic write via .tmp + os.replace()."""
    target = Path(path or CONFIG_FILE)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, target)
    finally:
        tmp.unlink(missing_ok=True)


def get_db_folder(config: dict | None = None) -> str | None:
    """Return config["db_folder"] or None if not set."""
    return (config if config is not None else load_config()).get("db_folder")


def get_log_level(config: dict | None = None) -> str:
    return (config if config is not None else load_config()).get("log_level", DEFAULT_LOG_LEVEL)
