"""
Application entry point for the bonded store app.

Sets up settings, logging and the database, then runs one command against
the stored state.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from bonded_store_app.config.settings import Settings, init_logging
from bonded_store_app.repositories import database
from bonded_store_app.reports import (
    build_period_summary_text,
    export_inventory_to_pdf,
    export_payroll_to_pdf,
    export_period_to_excel,
    report_filename,
)
from bonded_store_app.services.backup_service import backup_filename
from bonded_store_app.services.errors import BackupFormatError, ValidationError
from bonded_store_app.services.rollover_service import next_period
from bonded_store_app.services.store_service import BondedStoreService


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bonded-store", description="Bonded store manager")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding the database and logs")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("summary", help="Print the current period summary")

    export = sub.add_parser("export", help="Export period reports")
    export.add_argument("--format", choices=("xlsx", "pdf"), default="xlsx")
    export.add_argument("--out", type=Path, default=Path("."))

    backup = sub.add_parser("backup", help="Write a full JSON backup")
    backup.add_argument("--out", type=Path, default=None)

    restore = sub.add_parser("restore", help="Replace all data from a JSON backup")
    restore.add_argument("file", type=Path)

    rollover = sub.add_parser("rollover", help="Close the month and open the next period")
    rollover.add_argument("--month", default=None)
    rollover.add_argument("--year", default=None)

    reset = sub.add_parser("hard-reset", help="Permanently delete ALL data")
    reset.add_argument("--yes", action="store_true", help="Confirm the reset")
    return parser


def run(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = Settings.for_data_dir(args.data_dir) if args.data_dir else Settings.default()
    init_logging(settings)
    session_factory = database.init_database(settings.db_path)

    with session_factory() as db:
        service = BondedStoreService(db)
        try:
            if args.command == "summary":
                print(build_period_summary_text(service.state))
            elif args.command == "export":
                args.out.mkdir(parents=True, exist_ok=True)
                if args.format == "xlsx":
                    path = args.out / report_filename("MonthlyReport", service.state, "xlsx")
                    export_period_to_excel(path, service.state)
                    print(path)
                else:
                    payroll = args.out / report_filename("Payroll", service.state, "pdf")
                    inventory = args.out / report_filename("Inventory", service.state, "pdf")
                    export_payroll_to_pdf(payroll, service.state)
                    export_inventory_to_pdf(inventory, service.state)
                    print(payroll)
                    print(inventory)
            elif args.command == "backup":
                path = args.out or settings.backup_dir / backup_filename()
                service.export_backup(path)
                print(path)
            elif args.command == "restore":
                state = service.restore_backup(args.file)
                print(f"Restored {len(state.crew)} crew, {len(state.products)} products, "
                      f"{len(state.transactions)} transactions")
            elif args.command == "rollover":
                month, year = next_period(service.settings.report_month, service.settings.report_year)
                result = service.rollover(args.month or month, args.year or year)
                s = result.state.settings
                print(f"Period is now {s.report_month}/{s.report_year}; "
                      f"{len(result.removed_crew)} signed-off crew removed")
            elif args.command == "hard-reset":
                if not service.hard_reset(confirmed=args.yes):
                    print("Nothing deleted: pass --yes to confirm.")
                    return 1
                print("All data deleted.")
        except (ValidationError, BackupFormatError) as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            return 2
    return 0


def main() -> None:
    """Bootstraps the bonded store application."""
    sys.exit(run())


if __name__ == "__main__":
    main()
