from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict

from invoice_generator.core.models.invoice import get_currency
from invoice_generator.core.models.labels import LabelSet
from invoice_generator.utils.files import write_atomic

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[2] / "data"
SETTINGS_PATH = DATA_DIR / "settings.json"

DEFAULT_SETTINGS: Dict[str, object] = {
    "currency": "HKD",
    "output_dir": "",
    "theme": "light",
    "payment_terms": "30 Days",
    "labels": {},
}


def load_settings(path: Path | None = None) -> dict:
    target = path or SETTINGS_PATH
    settings = json.loads(json.dumps(DEFAULT_SETTINGS))
    if not target.exists():
        return settings
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", target, exc)
        return settings
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected an object", target)
        return settings
    for key, default in DEFAULT_SETTINGS.items():
        value = data.get(key, default)
        if isinstance(default, dict):
            settings[key] = {str(k): str(v) for k, v in value.items()} if isinstance(value, dict) else {}
        else:
            settings[key] = str(value) if value is not None else default
    settings["currency"] = get_currency(settings["currency"]).code
    return settings


def save_settings(data: dict, path: Path | None = None) -> Path:
    target = path or SETTINGS_PATH
    return write_atomic(target, json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8"))


def labels_from_settings(settings: dict) -> LabelSet:
    return LabelSet(settings.get("labels") or {})


def output_dir_from_settings(settings: dict) -> Path:
    raw = str(settings.get("output_dir") or "").strip()
    return Path(raw).expanduser() if raw else Path.home()
