"""
Ration Module Service (``mess_modules.ration.service``).

Responsibility
--------------
Keeps the user-entered figures beside the inventory report: the
fresh-ration summary (stored under the editable-summary key) and the
ration deductions and attendance inputs (stored under the ration key),
and computes the derived sections from them.

Stored shapes use the field names the mess documents have always used::

    editable-summary: {"prevMonthFresh": 9000, "thisMonthPurchased": 8000,
                       "expendituresMonth": 12000}
    ration-settings:  {"casualDiet": 0, "riPerson": 0, "baraKhana": 0,
                       "totalAttendance": 450, "lessCasualAttendance": 0,
                       "lessRiAttendance": 0, "rmaPerMonth": 5000,
                       "recoveryFromJawans": 0}

Missing fields fall back to their defaults; a document that cannot be
read raises CorruptDocumentError.
"""

from __future__ import annotations

import dataclasses
from datetime import date
from typing import Any

from mess_config.schema import AppConfig
from mess_engines.ration import (
    AdditionalSummary,
    AdditionalSummaryInputs,
    AttendanceInputs,
    AttendanceResult,
    RationConsumption,
    RationDeductions,
    RationSettings,
    additional_summary,
    attendance,
    ration_consumption,
)
from mess_engines.summary import InventorySummary
from mess_kernel.exceptions import CorruptDocumentError, InvalidItemInputError
from mess_kernel.logging_config import get_logger
from mess_kernel.services.kv_store import KeyValueStore

logger = get_logger("modules.ration.service")

_SUMMARY_FIELDS = {
    "prev_month_fresh": "prevMonthFresh",
    "this_month_purchased": "thisMonthPurchased",
    "expenditures_month": "expendituresMonth",
}

_DEDUCTION_FIELDS = {
    "casual_diet": "casualDiet",
    "ri_person": "riPerson",
    "bara_khana": "baraKhana",
}

_ATTENDANCE_FIELDS = {
    "total_attendance": "totalAttendance",
    "less_casual_attendance": "lessCasualAttendance",
    "less_ri_attendance": "lessRiAttendance",
    "rma_per_month": "rmaPerMonth",
    "recovery_from_jawans": "recoveryFromJawans",
}


def _read(cls: type, document: dict[str, Any], names: dict[str, str]) -> Any:
    kwargs = {attr: document[key] for attr, key in names.items() if key in document}
    return cls(**kwargs)


def _write(obj: Any, names: dict[str, str]) -> dict[str, Any]:
    return {key: getattr(obj, attr) for attr, key in names.items()}


class RationService:
    """Loads, edits and evaluates the ration-side figures."""

    def __init__(self, store: KeyValueStore, config: AppConfig | None = None):
        self._store = store
        self._config = config or AppConfig.with_defaults()

    @property
    def _summary_key(self) -> str:
        return self._config.storage.summary_key

    @property
    def _ration_key(self) -> str:
        return self._config.storage.ration_key

    def _document(self, key: str) -> dict[str, Any]:
        document = self._store.get_json(key)
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise CorruptDocumentError(key, "expected an object")
        return document

    # =========================================================================
    # Editable fresh-ration summary
    # =========================================================================

    def summary_inputs(self) -> AdditionalSummaryInputs:
        document = self._document(self._summary_key)
        try:
            return _read(AdditionalSummaryInputs, document, _SUMMARY_FIELDS)
        except (TypeError, ValueError) as e:
            raise CorruptDocumentError(self._summary_key, str(e)) from e

    def save_summary_inputs(self, **changes: Any) -> AdditionalSummaryInputs:
        """Update some of the fresh-ration figures and store them."""
        current = self.summary_inputs()
        try:
            updated = dataclasses.replace(current, **changes)
        except (TypeError, ValueError) as e:
            raise InvalidItemInputError("summary", str(e)) from e
        self._store.set_json(self._summary_key, _write(updated, _SUMMARY_FIELDS))
        logger.info("additional_summary_saved", extra={"fields": sorted(changes)})
        return updated

    # =========================================================================
    # Deductions and attendance
    # =========================================================================

    def settings(self) -> RationSettings:
        document = self._document(self._ration_key)
        try:
            return RationSettings(
                deductions=_read(RationDeductions, document, _DEDUCTION_FIELDS),
                attendance=_read(AttendanceInputs, document, _ATTENDANCE_FIELDS),
            )
        except (TypeError, ValueError) as e:
            raise CorruptDocumentError(self._ration_key, str(e)) from e

    def save_settings(self, **changes: Any) -> RationSettings:
        """
        Update deduction and/or attendance fields by name and store them.

        Raises:
            InvalidItemInputError: For an unknown field or a bad value.
        """
        current = self.settings()
        deduction_changes = {k: v for k, v in changes.items() if k in _DEDUCTION_FIELDS}
        attendance_changes = {k: v for k, v in changes.items() if k in _ATTENDANCE_FIELDS}
        unknown = set(changes) - set(deduction_changes) - set(attendance_changes)
        if unknown:
            raise InvalidItemInputError("ration", f"unknown fields {sorted(unknown)}")

        try:
            updated = RationSettings(
                deductions=dataclasses.replace(current.deductions, **deduction_changes),
                attendance=dataclasses.replace(current.attendance, **attendance_changes),
            )
        except (TypeError, ValueError) as e:
            raise InvalidItemInputError("ration", str(e)) from e

        document = {
            **_write(updated.deductions, _DEDUCTION_FIELDS),
            **_write(updated.attendance, _ATTENDANCE_FIELDS),
        }
        self._store.set_json(self._ration_key, document)
        logger.info("ration_settings_saved", extra={"fields": sorted(changes)})
        return updated

    # =========================================================================
    # Derived sections
    # =========================================================================

    def evaluate(
        self,
        summary: InventorySummary,
        month: date,
    ) -> tuple[AdditionalSummary, RationConsumption, AttendanceResult]:
        """All three derived sections for ``month``."""
        fresh = self.summary_inputs()
        settings = self.settings()
        consumption = ration_consumption(summary, fresh, settings.deductions)
        return (
            additional_summary(fresh),
            consumption,
            attendance(settings.attendance, consumption, month),
        )
