"""
mess_config -- single public entrypoint for application configuration.

Responsibility:
    Provides the only way to obtain configuration at runtime through
    ``get_active_config()``.  Other components receive an ``AppConfig``
    and never read configuration files themselves.

Architecture position:
    Configuration -- sits above ``mess_kernel`` and below
    ``mess_modules``.  The kernel and the engines never import it.

Failure modes:
    - ``FileNotFoundError`` -- the requested user file does not exist.
    - ``yaml.YAMLError`` -- the user file is not valid YAML.
    - ``InvalidConfigError`` -- unknown keys, wrong types or bad values.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``MESS_CONFIG_TRACE`` log entry with the source files and the
    checksum of the merged document.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mess_config.loader import deep_merge, load_yaml_file, parse_config
from mess_config.schema import (
    AppConfig,
    InventoryConfig,
    LoggingConfig,
    ReportConfig,
    StorageConfig,
)

_logger = logging.getLogger("mess_kernel.config")

DEFAULTS_FILE = Path(__file__).parent / "defaults.yaml"


def get_active_config(path: Path | str | None = None) -> AppConfig:
    """Load the packaged defaults, overlay ``path`` if given, validate.

    Args:
        path: Optional user YAML file.  Keys it sets replace the defaults;
            keys it omits keep them.

    Returns:
        A frozen, validated AppConfig.
    """
    data = load_yaml_file(DEFAULTS_FILE)
    sources = [str(DEFAULTS_FILE)]
    if path is not None:
        path = Path(path)
        data = deep_merge(data, load_yaml_file(path))
        sources.append(str(path))

    config = parse_config(data)

    _logger.info(
        "MESS_CONFIG_TRACE",
        extra={
            "trace_type": "MESS_CONFIG_TRACE",
            "sources": sources,
            "checksum": config.checksum,
            "database_url": config.storage.database_url,
            "log_level": config.logging.level,
        },
    )
    return config


__all__ = [
    "AppConfig",
    "InventoryConfig",
    "LoggingConfig",
    "ReportConfig",
    "StorageConfig",
    "get_active_config",
]
