"""
Application configuration schema.

Frozen dataclasses that the loader builds from YAML.  Nothing here reads
files; see ``mess_config.loader``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class StorageConfig:
    """Where documents live and the keys they are stored under."""

    database_url: str = "sqlite:///mess_inventory.db"
    inventory_key: str = "fifo-inventory"
    summary_key: str = "editable-summary"
    ration_key: str = "ration-settings"


@dataclass(frozen=True)
class ReportConfig:
    title: str = "FIFO INVENTORY MANAGEMENT SYSTEM"
    currency_symbol: str = "₹"
    display_precision: int = 2
    export_dir: str = "exports"
    file_prefix: str = "FIFO_Inventory"


@dataclass(frozen=True)
class InventoryConfig:
    default_unit: str = "KG"
    seed_sample_data: bool = True


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """
    Root configuration object.

    ``checksum`` is the SHA-256 of the merged source document; it is
    empty for configs built in code.
    """

    storage: StorageConfig = field(default_factory=StorageConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    checksum: str = ""

    @classmethod
    def with_defaults(cls) -> AppConfig:
        return cls()
