"""
Configuration Loader (``mess_config.loader``).

Responsibility
--------------
Loads YAML files, merges a user file over the packaged defaults and
parses the result into the frozen dataclasses of ``mess_config.schema``.
Runtime callers go through ``mess_config.get_active_config()``.

Invariants enforced
-------------------
* Unknown sections or keys are rejected, so a typo never silently falls
  back to a default.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the
  merged document.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong types, unknown keys, out-of-range values  -> ``InvalidConfigError``.
"""

from __future__ import annotations

import copy
import hashlib
import json
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from mess_config.schema import (
    LOG_LEVELS,
    AppConfig,
    InventoryConfig,
    LoggingConfig,
    ReportConfig,
    StorageConfig,
)
from mess_kernel.exceptions import InvalidConfigError

_SECTIONS: dict[str, type] = {
    "storage": StorageConfig,
    "report": ReportConfig,
    "inventory": InventoryConfig,
    "logging": LoggingConfig,
}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        InvalidConfigError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise InvalidConfigError(str(path), "top level must be a mapping")
    return data


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in, recursing into mappings."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _parse_section(name: str, data: Any) -> Any:
    cls = _SECTIONS[name]
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise InvalidConfigError(name, "must be a mapping")

    known = {f.name: f for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            raise InvalidConfigError(f"{name}.{key}", "unknown key")
        default = known[key].default
        # bool is an int subclass; compare exact types for scalars.
        if type(value) is not type(default):
            raise InvalidConfigError(
                f"{name}.{key}",
                f"expected {type(default).__name__}, got {type(value).__name__}",
            )
        kwargs[key] = value
    return cls(**kwargs)


def validate(config: AppConfig) -> None:
    """
    Check value ranges the types alone cannot express.

    Raises:
        InvalidConfigError: on the first violation found.
    """
    if not config.storage.database_url.strip():
        raise InvalidConfigError("storage.database_url", "must not be empty")
    for key in ("inventory_key", "summary_key", "ration_key"):
        if not getattr(config.storage, key).strip():
            raise InvalidConfigError(f"storage.{key}", "must not be empty")
    if config.report.display_precision < 0:
        raise InvalidConfigError("report.display_precision", "must be >= 0")
    if not config.report.file_prefix.strip():
        raise InvalidConfigError("report.file_prefix", "must not be empty")
    if not config.inventory.default_unit.strip():
        raise InvalidConfigError("inventory.default_unit", "must not be empty")
    if config.logging.level.upper() not in LOG_LEVELS:
        raise InvalidConfigError(
            "logging.level", f"expected one of {', '.join(LOG_LEVELS)}",
        )


def parse_config(data: dict[str, Any]) -> AppConfig:
    """Build and validate an AppConfig from a merged document."""
    for name in data:
        if name not in _SECTIONS:
            raise InvalidConfigError(name, "unknown section")

    config = AppConfig(
        storage=_parse_section("storage", data.get("storage")),
        report=_parse_section("report", data.get("report")),
        inventory=_parse_section("inventory", data.get("inventory")),
        logging=_parse_section("logging", data.get("logging")),
        checksum=compute_checksum(data),
    )
    validate(config)
    return config
