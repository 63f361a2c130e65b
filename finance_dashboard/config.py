from __future__ import annotations

import copy
from pathlib import Path
from typing import Dict

import yaml

DEFAULT_CONFIG: Dict[str, object] = {
    "currency": {
        "symbol": "Rp",
        "thousands_sep": ".",
        "decimal_sep": ",",
        "max_decimals": 3,
    },
    "period_label": "Januari",
    "palette": [
        "#3b82f6",
        "#ef4444",
        "#10b981",
        "#f59e0b",
        "#8b5cf6",
        "#ec4899",
        "#06b6d4",
        "#f97316",
    ],
    "labels": {
        "income": "Pemasukan",
        "expense": "Pengeluaran",
        "income_badge": "Masuk",
        "expense_badge": "Keluar",
        "empty_table": "Belum ada transaksi",
        "empty_chart": "Belum ada data",
    },
    "web": {
        "host": "127.0.0.1",
        "port": 8000,
    },
}

CONFIG_PATH = Path("cashboard.yaml")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged or (merged[key] is None and isinstance(value, dict)):
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def default_config() -> Dict[str, object]:
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(path: Path | str | None = None) -> Dict[str, object]:
    target = Path(path) if path else CONFIG_PATH
    if not target.exists():
        return default_config()
    with target.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {target} must contain a mapping")
    return _merge_defaults(data, DEFAULT_CONFIG)


def save_config(config: Dict[str, object], path: Path | str | None = None) -> None:
    target = Path(path) if path else CONFIG_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config, fp, sort_keys=False)
