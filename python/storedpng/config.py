# python/storedpng/config.py
# Encoder configuration parsing utilities
# Exists to load PNG encoder options from dataclasses, mappings or JSON files
# RELEVANT FILES: python/storedpng/encoder.py, tests/test_config.py
from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .stored_deflate import CHUNK_SIZE, MAX_STORED_BLOCK

ConfigSource = Union["EncoderConfig", Mapping[str, Any], str, Path, None]

# Row order of the scanline stream relative to the input buffer.
# "bottom-up" emits the last stored row first; "top-down" keeps storage order.
_ROW_ORDERS: Dict[str, str] = {
    "bottomup": "bottom-up",
    "reversed": "bottom-up",
    "flipped": "bottom-up",
    "topdown": "top-down",
    "natural": "top-down",
    "storage": "top-down",
}

ROW_ORDER_BOTTOM_UP = "bottom-up"
ROW_ORDER_TOP_DOWN = "top-down"


def _normalize_key(value: Any) -> str:
    return "".join(
        c
        for c in str(value).strip().lower()
        if c not in {"-", "_", " ", "."}
    )


def _normalize_choice(value: Any, mapping: Mapping[str, str], label: str) -> str:
    key = _normalize_key(value)
    if key not in mapping:
        raise ValueError(f"Unknown {label}: {value!r}")
    return mapping[key]


def normalize_row_order(value: Any) -> str:
    return _normalize_choice(value, _ROW_ORDERS, "row order")


@dataclass
class EncoderConfig:
    chunk_size: int = CHUNK_SIZE
    row_order: str = ROW_ORDER_BOTTOM_UP

    def __post_init__(self):
        self.row_order = normalize_row_order(self.row_order)

    def to_dict(self) -> dict:
        return {
            "chunk_size": self.chunk_size,
            "row_order": self.row_order,
        }

    def copy(self) -> "EncoderConfig":
        return copy.deepcopy(self)

    def validate(self) -> None:
        if not (1 <= self.chunk_size <= MAX_STORED_BLOCK):
            raise ValueError(f"chunk_size must be within [1, {MAX_STORED_BLOCK}]")
        self.row_order = normalize_row_order(self.row_order)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["EncoderConfig"] = None) -> "EncoderConfig":
        base = copy.deepcopy(default) if default is not None else cls()
        if "chunk_size" in data:
            base.chunk_size = int(data["chunk_size"])
        if "row_order" in data:
            base.row_order = normalize_row_order(data["row_order"])
        return base


def _load_from_path(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in {".json", ""}:
        return json.loads(text)
    raise ValueError(f"Unsupported encoder config file format: {path}")


def load_encoder_config(config: ConfigSource = None, overrides: Optional[Mapping[str, Any]] = None) -> EncoderConfig:
    if isinstance(config, EncoderConfig):
        cfg = config.copy()
    elif isinstance(config, Mapping):
        cfg = EncoderConfig.from_mapping(config)
    elif isinstance(config, (str, Path)):
        cfg = EncoderConfig.from_mapping(_load_from_path(Path(config)))
    elif config is None:
        cfg = EncoderConfig()
    else:
        raise TypeError("config must be EncoderConfig, mapping, path, or None")

    if overrides:
        cfg = EncoderConfig.from_mapping(overrides, cfg)
    cfg.validate()
    return cfg
