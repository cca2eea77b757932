"""
Command-line entry point: ``mess-inventory``.

Usage:
    mess-inventory [--config FILE] [--db URL] <command> [options]

Examples:
    # List every item and its batches
    mess-inventory items

    # Record a receipt and this month's expenditure
    mess-inventory add-batch 1 received_this_month --qty 50 --rate 11.4
    mess-inventory set-expenditure 1 340

    # Summary and exports for October 2026
    mess-inventory summary --month 2026-10
    mess-inventory export xlsx --month 2026-10 --out exports/

Exit status is 0 on success and 1 when a command fails with a domain
error; the error code and message are printed to stderr.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from pathlib import Path
from uuid import uuid4

from mess_config import AppConfig, get_active_config
from mess_engines.rows import format_decimal
from mess_kernel.db.engine import create_tables, init_engine_from_url, make_session_factory
from mess_kernel.domain.clock import SystemClock
from mess_kernel.domain.values import BatchCategory
from mess_kernel.exceptions import MessKernelError
from mess_kernel.logging_config import LogContext, configure_logging, get_logger
from mess_kernel.services.kv_store import KeyValueStore
from mess_modules.inventory.repository import InventoryRepository
from mess_modules.inventory.service import InventoryService
from mess_modules.ration.service import RationService
from mess_modules.reporting.models import MonthlyReport, header_rows
from mess_modules.reporting.service import SUPPORTED_FORMATS, ReportingService

logger = get_logger("modules.cli")

_CATEGORIES = [c.value for c in BatchCategory]


def _decimal(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from e


@dataclasses.dataclass
class Services:
    config: AppConfig
    inventory: InventoryService
    ration: RationService
    reporting: ReportingService


def build_services(config: AppConfig, database_url: str | None = None) -> Services:
    """Wire the store and services for one invocation."""
    engine = init_engine_from_url(database_url or config.storage.database_url)
    create_tables(engine)
    store = KeyValueStore(make_session_factory(engine))

    inventory = InventoryService(
        InventoryRepository(store, config.storage.inventory_key), config,
    )
    ration = RationService(store, config)
    reporting = ReportingService(inventory, ration, config, SystemClock())
    return Services(config=config, inventory=inventory, ration=ration, reporting=reporting)


# =============================================================================
# Output
# =============================================================================


def _print_table(lines: Sequence[Sequence[str]], out) -> None:
    widths = [max(len(line[i]) for line in lines) for i in range(len(lines[0]))]
    for line in lines:
        cells = [
            value.ljust(width) if i < 3 else value.rjust(width)
            for i, (value, width) in enumerate(zip(line, widths))
        ]
        print("  ".join(cells).rstrip(), file=out)


def print_report(report: MonthlyReport, config: AppConfig, out=None) -> None:
    out = out or sys.stdout
    precision = config.report.display_precision
    symbol = config.report.currency_symbol

    print(config.report.title, file=out)
    print(f"Month: {report.label}", file=out)
    print(file=out)

    top, bottom = header_rows()
    lines = [top, bottom, *report.rendered_rows(precision)]
    lines.append(report.totals_row("GRAND TOTALS", precision))
    _print_table(lines, out)

    for item in report.shortfalls:
        print(
            f"warning: {item.item_name} expenditure {format_decimal(item.requested_qty, precision)}"
            f" exceeds stock by {format_decimal(item.shortfall, precision)}",
            file=out,
        )

    for title, section in report.sections():
        print(file=out)
        print(title, file=out)
        for label, value in section:
            shown = str(value) if isinstance(value, int) else f"{symbol}{format_decimal(value, precision)}"
            print(f"  {label:<28}{shown:>16}", file=out)


# =============================================================================
# Commands
# =============================================================================


def _cmd_seed(args, services: Services) -> int:
    items = services.inventory.seed_sample_data(force=args.force)
    print(f"{len(items)} items")
    return 0


def _cmd_items(args, services: Services) -> int:
    precision = services.config.report.display_precision
    for item in services.inventory.items():
        print(
            f"{item.id:>4}  {item.name}  ({item.unit})  "
            f"prev={len(item.prev_month)}  received={len(item.received_this_month)}  "
            f"expenditure={format_decimal(item.expenditure_qty, precision)}"
        )
        for category in BatchCategory:
            for batch in item.batches(category):
                print(
                    f"        {category.value:<20} #{batch.id:<4} "
                    f"qty={format_decimal(batch.qty, precision)}  "
                    f"rate={format_decimal(batch.rate, precision)}"
                )
    return 0


def _cmd_add_item(args, services: Services) -> int:
    item = services.inventory.add_item(args.name, unit=args.unit, expenditure_qty=args.expenditure)
    print(item.id)
    return 0


def _cmd_update_item(args, services: Services) -> int:
    with LogContext.bind(item_id=args.item_id):
        services.inventory.update_item(
            args.item_id, name=args.name, unit=args.unit, expenditure_qty=args.expenditure,
        )
    return 0


def _cmd_delete_item(args, services: Services) -> int:
    with LogContext.bind(item_id=args.item_id):
        services.inventory.delete_item(args.item_id)
    return 0


def _cmd_add_batch(args, services: Services) -> int:
    with LogContext.bind(item_id=args.item_id):
        batch = services.inventory.add_batch(args.item_id, args.category, args.qty, args.rate)
    print(batch.id)
    return 0


def _cmd_update_batch(args, services: Services) -> int:
    with LogContext.bind(item_id=args.item_id):
        services.inventory.update_batch(
            args.item_id, args.category, args.batch_id, qty=args.qty, rate=args.rate,
        )
    return 0


def _cmd_remove_batch(args, services: Services) -> int:
    with LogContext.bind(item_id=args.item_id):
        services.inventory.remove_batch(args.item_id, args.category, args.batch_id)
    return 0


def _cmd_set_expenditure(args, services: Services) -> int:
    with LogContext.bind(item_id=args.item_id):
        services.inventory.set_expenditure(args.item_id, args.qty)
    return 0


def _cmd_summary(args, services: Services) -> int:
    print_report(services.reporting.build_report(args.month), services.config)
    return 0


def _changes(args, names: Sequence[str]) -> dict:
    return {name: getattr(args, name) for name in names if getattr(args, name) is not None}


def _cmd_set_summary(args, services: Services) -> int:
    services.ration.save_summary_inputs(
        **_changes(args, ("prev_month_fresh", "this_month_purchased", "expenditures_month"))
    )
    return 0


def _cmd_set_ration(args, services: Services) -> int:
    services.ration.save_settings(**_changes(args, (
        "casual_diet",
        "ri_person",
        "bara_khana",
        "total_attendance",
        "less_casual_attendance",
        "less_ri_attendance",
        "rma_per_month",
        "recovery_from_jawans",
    )))
    return 0


def _cmd_export(args, services: Services) -> int:
    path = services.reporting.export(args.format, month=args.month, out_dir=args.out)
    print(path)
    return 0


# =============================================================================
# Parser
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mess-inventory",
        description="FIFO inventory costing for a mess.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", type=Path, help="YAML file merged over the defaults.")
    parser.add_argument("--db", help="Database URL (overrides storage.database_url).")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("seed", help="Store the sample items.")
    p.add_argument("--force", action="store_true", help="Replace existing items.")
    p.set_defaults(handler=_cmd_seed)

    p = sub.add_parser("items", help="List items and batches.")
    p.set_defaults(handler=_cmd_items)

    p = sub.add_parser("add-item", help="Add an item with no batches.")
    p.add_argument("name")
    p.add_argument("--unit")
    p.add_argument("--expenditure", type=_decimal, default=Decimal("0"))
    p.set_defaults(handler=_cmd_add_item)

    p = sub.add_parser("update-item", help="Rename an item or change its unit or expenditure.")
    p.add_argument("item_id", type=int)
    p.add_argument("--name")
    p.add_argument("--unit")
    p.add_argument("--expenditure", type=_decimal)
    p.set_defaults(handler=_cmd_update_item)

    p = sub.add_parser("delete-item", help="Delete an item and its batches.")
    p.add_argument("item_id", type=int)
    p.set_defaults(handler=_cmd_delete_item)

    p = sub.add_parser("add-batch", help="Append a batch to an item.")
    p.add_argument("item_id", type=int)
    p.add_argument("category", choices=_CATEGORIES)
    p.add_argument("--qty", type=_decimal, required=True)
    p.add_argument("--rate", type=_decimal, required=True)
    p.set_defaults(handler=_cmd_add_batch)

    p = sub.add_parser("update-batch", help="Change a batch's qty or rate.")
    p.add_argument("item_id", type=int)
    p.add_argument("category", choices=_CATEGORIES)
    p.add_argument("batch_id", type=int)
    p.add_argument("--qty", type=_decimal)
    p.add_argument("--rate", type=_decimal)
    p.set_defaults(handler=_cmd_update_batch)

    p = sub.add_parser("remove-batch", help="Remove a batch from an item.")
    p.add_argument("item_id", type=int)
    p.add_argument("category", choices=_CATEGORIES)
    p.add_argument("batch_id", type=int)
    p.set_defaults(handler=_cmd_remove_batch)

    p = sub.add_parser("set-expenditure", help="Set an item's expenditure quantity.")
    p.add_argument("item_id", type=int)
    p.add_argument("qty", type=_decimal)
    p.set_defaults(handler=_cmd_set_expenditure)

    p = sub.add_parser("summary", help="Print the monthly report.")
    p.add_argument("--month", help="YYYY-MM (default: current month).")
    p.set_defaults(handler=_cmd_summary)

    p = sub.add_parser("set-summary", help="Edit the fresh-ration summary.")
    p.add_argument("--prev-month-fresh", type=_decimal)
    p.add_argument("--this-month-purchased", type=_decimal)
    p.add_argument("--expenditures-month", type=_decimal)
    p.set_defaults(handler=_cmd_set_summary)

    p = sub.add_parser("set-ration", help="Edit ration deductions and attendance.")
    p.add_argument("--casual-diet", type=_decimal)
    p.add_argument("--ri-person", type=_decimal)
    p.add_argument("--bara-khana", type=_decimal)
    p.add_argument("--total-attendance", type=int)
    p.add_argument("--less-casual-attendance", type=int)
    p.add_argument("--less-ri-attendance", type=int)
    p.add_argument("--rma-per-month", type=_decimal)
    p.add_argument("--recovery-from-jawans", type=_decimal)
    p.set_defaults(handler=_cmd_set_ration)

    p = sub.add_parser("export", help="Write the monthly report to a file.")
    p.add_argument("format", choices=SUPPORTED_FORMATS)
    p.add_argument("--month", help="YYYY-MM (default: current month).")
    p.add_argument("--out", type=Path, help="Output directory (default: report.export_dir).")
    p.set_defaults(handler=_cmd_export)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = get_active_config(args.config)
    except MessKernelError as e:
        print(f"error: {e.code}: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"error: config file not found: {e.filename}", file=sys.stderr)
        return 1

    configure_logging(level=config.logging.level.upper())

    with LogContext.bind(command=args.command, correlation_id=str(uuid4())):
        try:
            services = build_services(config, args.db)
            return args.handler(args, services)
        except MessKernelError as e:
            logger.error("command_failed", exc_info=True)
            print(f"error: {e.code}: {e}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
