"""
Typed exception hierarchy for the mess kernel.

Every error has a typed class (catch by type, not message), a ``code``
class attribute (machine-readable), and structured attributes carrying
the data needed to report it.

    MessKernelError (base)
    |
    +-- InventoryError
    |   +-- ItemNotFoundError
    |   +-- BatchNotFoundError
    |   +-- InvalidBatchInputError
    |   +-- InvalidItemInputError
    |
    +-- StoreError
    |   +-- StoreNotInitializedError
    |   +-- CorruptDocumentError
    |
    +-- ReportError
    |   +-- InvalidMonthError
    |   +-- UnsupportedExportFormatError
    |
    +-- ConfigError
        +-- InvalidConfigError

Category   | Code                       | When Raised
-----------|----------------------------|------------------------------------
Inventory  | ITEM_NOT_FOUND             | Item id not in the collection
           | BATCH_NOT_FOUND            | Batch id not in the item's list
           | INVALID_BATCH_INPUT        | Batch qty/rate not strictly positive
           | INVALID_ITEM_INPUT         | Empty name, negative expenditure
-----------|----------------------------|------------------------------------
Store      | STORE_NOT_INITIALIZED      | Engine/session factory missing
           | CORRUPT_DOCUMENT           | Stored blob is not valid JSON/shape
-----------|----------------------------|------------------------------------
Report     | INVALID_MONTH              | Month selector is not YYYY-MM
           | UNSUPPORTED_EXPORT_FORMAT  | Export format other than xlsx/pdf
-----------|----------------------------|------------------------------------
Config     | INVALID_CONFIG             | YAML config fails validation

The FIFO engine itself raises none of these: it degrades to zero-valued
results. Validation of user input happens at the service boundary.
"""


class MessKernelError(Exception):
    """
    Base exception for all mess kernel errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "MESS_KERNEL_ERROR"


# Inventory exceptions


class InventoryError(MessKernelError):
    """Base exception for item and batch editing errors."""

    code: str = "INVENTORY_ERROR"


class ItemNotFoundError(InventoryError):
    """Item with given id was not found."""

    code: str = "ITEM_NOT_FOUND"

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")


class BatchNotFoundError(InventoryError):
    """Batch with given id was not found in the item's batch list."""

    code: str = "BATCH_NOT_FOUND"

    def __init__(self, item_id: int, category: str, batch_id: int):
        self.item_id = item_id
        self.category = category
        self.batch_id = batch_id
        super().__init__(
            f"Batch {batch_id} not found in {category} of item {item_id}"
        )


class InvalidBatchInputError(InventoryError):
    """Batch quantity or rate is not strictly positive."""

    code: str = "INVALID_BATCH_INPUT"

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Batch {field} must be greater than zero, got {value}")


class InvalidItemInputError(InventoryError):
    """Item attribute failed boundary validation."""

    code: str = "INVALID_ITEM_INPUT"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid item {field}: {reason}")


# Store exceptions


class StoreError(MessKernelError):
    """Base exception for key-value persistence errors."""

    code: str = "STORE_ERROR"


class StoreNotInitializedError(StoreError):
    """Store used before its session factory was provided."""

    code: str = "STORE_NOT_INITIALIZED"

    def __init__(self) -> None:
        super().__init__("Store not initialized. Call init_engine_from_url() first.")


class CorruptDocumentError(StoreError):
    """Stored document could not be decoded."""

    code: str = "CORRUPT_DOCUMENT"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Corrupt document under key {key!r}: {reason}")


# Report exceptions


class ReportError(MessKernelError):
    """Base exception for report building and export errors."""

    code: str = "REPORT_ERROR"


class InvalidMonthError(ReportError):
    """Month selector is not a YYYY-MM string."""

    code: str = "INVALID_MONTH"

    def __init__(self, month: str):
        self.month = month
        super().__init__(f"Invalid month {month!r}, expected YYYY-MM")


class UnsupportedExportFormatError(ReportError):
    """Requested export format is not supported."""

    code: str = "UNSUPPORTED_EXPORT_FORMAT"

    def __init__(self, export_format: str, supported: tuple[str, ...]):
        self.export_format = export_format
        self.supported = supported
        super().__init__(
            f"Unsupported export format {export_format!r}; "
            f"expected one of {', '.join(supported)}"
        )


# Config exceptions


class ConfigError(MessKernelError):
    """Base exception for configuration errors."""

    code: str = "CONFIG_ERROR"


class InvalidConfigError(ConfigError):
    """Configuration failed validation."""

    code: str = "INVALID_CONFIG"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration for {field}: {reason}")
