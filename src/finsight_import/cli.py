# FinSight Import - Spreadsheet import pipeline for the SMB financial dashboard
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for FinSight Import.

The CLI plays the part of the interactive surface around the importer: it
supplies the file, passes an update callback that saves the record into
the import store, and reports the outcome as a human-readable notification.
It does not implement any parsing or derivation logic itself.


Commands
--------

import FILE
    Import an Excel workbook.

        python -m finsight_import.cli import data/input/financials.xlsx
        python -m finsight_import.cli import shop.xlsx --industry ecommerce

    Options:
    - ``--industry TAG``: sector tag (defaults to [company].industry).
    - ``--display-mode table|json``: how to render the record.
    - ``--no-save``: do not save the record into the store.

    On success, the record is saved and a notification such as
    ``Import completed. Revenue: €150,000`` is printed. When the record is
    incomplete (no company name, no positive revenue) an
    ``Incomplete data: ...`` notice follows; the record is saved anyway.
    If the workbook cannot be decoded, an error notification is printed,
    nothing is saved and the exit status is 1.

template
    Write the Excel template for a sector.

        python -m finsight_import.cli template --industry consulting
        python -m finsight_import.cli template --output reports/templates

history
    List stored imports, or print one record.

        python -m finsight_import.cli history
        python -m finsight_import.cli history --show 3

sectors
    Show the sector template catalogue.


Configuration
-------------

By default the CLI reads ``finsight_import_config.toml`` in the current
working directory when it exists (see ``config.py``). Use ``--config PATH``
to point to another file.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

from . import __version__
from .config import DISPLAY_MODES, AppConfig, load_app_config
from .importer import WorkbookImportError, import_workbook
from .industries import get_industry_profile, list_sector_templates
from .record import FinancialRecord
from .store import list_imports, load_record, save_record
from .templates import write_template

IMPORT_ERROR_MESSAGE = (
    "Import error: the file could not be processed. Check the format."
)
INCOMPLETE_DATA_PREFIX = "Incomplete data:"


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="python -m finsight_import.cli",
        description=(
            "FinSight Import - imports financial spreadsheets for the SMB "
            "dashboard, derives missing metrics and generates Excel templates."
        ),
    )

    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of finsight_import and exit.",
    )
    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the TOML configuration file. If omitted, "
            "'finsight_import_config.toml' in the current directory is used "
            "when present."
        ),
    )

    subparsers = ap.add_subparsers(dest="command")

    # import
    import_parser = subparsers.add_parser(
        "import",
        help="Import an Excel workbook into a financial record.",
    )
    import_parser.add_argument("file", help="Path to the workbook (.xlsx).")
    import_parser.add_argument(
        "--industry",
        help="Sector tag (commerce, ecommerce, consulting, ...). "
        "Defaults to [company].industry from the configuration.",
    )
    import_parser.add_argument(
        "--display-mode",
        dest="display_mode",
        choices=list(DISPLAY_MODES),
        help="Override display.mode: 'table' or 'json'.",
    )
    import_parser.add_argument(
        "--no-save",
        dest="no_save",
        action="store_true",
        help="Do not save the imported record into the store.",
    )

    # template
    template_parser = subparsers.add_parser(
        "template",
        help="Write the Excel template for a sector.",
    )
    template_parser.add_argument(
        "--industry",
        help="Sector tag used in the file name. Defaults to the configuration.",
    )
    template_parser.add_argument(
        "--output",
        dest="output_dir",
        help="Output directory. Defaults to [templates].output_dir.",
    )

    # history
    history_parser = subparsers.add_parser(
        "history",
        help="List stored imports or show one of them.",
    )
    history_parser.add_argument(
        "--show",
        dest="show_id",
        type=int,
        metavar="ID",
        help="Print the stored record with this id.",
    )

    # sectors
    subparsers.add_parser("sectors", help="Show the sector template catalogue.")

    return ap


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _format_euro(value: float) -> str:
    return f"€{value:,.0f}"


def _render_record(record: FinancialRecord, display_mode: str) -> None:
    """Print a record as text tables or JSON."""
    if display_mode == "json":
        print(record.to_json())
        return

    data = record.to_dict()
    profile = get_industry_profile(record.industry)

    print()
    print(f"=== Financial data ({record.industry} / {profile.label}) ===")
    metrics = {
        k: v for k, v in data["financialData"].items() if k != "expenseBreakdown"
    }
    metrics_df = pd.DataFrame({"metric": list(metrics), "value": list(metrics.values())})
    print(metrics_df.to_string(index=False))

    if record.company_info:
        print()
        print("=== Company info ===")
        info_df = pd.DataFrame(
            {"field": list(record.company_info), "value": list(record.company_info.values())}
        )
        print(info_df.to_string(index=False))

    if record.monthly_data:
        print()
        print("=== Monthly data ===")
        print(pd.DataFrame(data["monthlyData"]).to_string(index=False))

    if record.financial_data.expense_breakdown:
        print()
        print("=== Expense breakdown ===")
        breakdown_df = pd.DataFrame(data["financialData"]["expenseBreakdown"])
        print(breakdown_df[["name", "value"]].to_string(index=False))


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _handle_import(args: argparse.Namespace, config: AppConfig) -> int:
    path = Path(args.file)
    industry = (args.industry or config.industry).strip().lower()
    display_mode = args.display_mode or config.display_mode

    saved_ids: list[int] = []

    def _on_data_update(record: FinancialRecord) -> None:
        if args.no_save:
            return
        saved_ids.append(
            save_record(config.store, record, source_label=str(path))
        )

    try:
        record = import_workbook(path, industry, on_data_update=_on_data_update)
    except WorkbookImportError:
        print(IMPORT_ERROR_MESSAGE, file=sys.stderr)
        return 1

    _render_record(record, display_mode)

    print()
    print(
        "Import completed. Revenue: "
        f"{_format_euro(record.financial_data.annual_revenue)}"
    )
    if record.warnings:
        print(f"{INCOMPLETE_DATA_PREFIX} {', '.join(record.warnings)}")
    if saved_ids:
        print(f"Saved as import #{saved_ids[0]} in {config.store.path}")
    return 0


def _handle_template(args: argparse.Namespace, config: AppConfig) -> int:
    industry = (args.industry or config.industry).strip().lower()
    output_dir = Path(args.output_dir) if args.output_dir else config.templates_dir
    path = write_template(output_dir, industry)
    print(f"Template written: {path}")
    return 0


def _handle_history(args: argparse.Namespace, config: AppConfig) -> int:
    if args.show_id is not None:
        record = load_record(config.store, args.show_id)
        if record is None:
            print(f"No import found with id {args.show_id}.", file=sys.stderr)
            return 1
        _render_record(record, config.display_mode)
        return 0

    df = list_imports(config.store)
    if df.empty:
        print("No imports stored yet.")
        return 0
    print(df.to_string(index=False))
    return 0


def _handle_sectors(config: AppConfig) -> int:
    for tpl, active in list_sector_templates(config.industry):
        marker = " (your sector)" if active else ""
        print(f"[{tpl.key}] {tpl.title}{marker}")
        print(f"    {tpl.description}")
        print(f"    Metrics: {', '.join(tpl.features)}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the FinSight Import CLI.

    Parses command-line arguments, loads the configuration and dispatches
    to the selected command. Returns the process exit status.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"finsight_import version {__version__}")
        return 0

    if args.command is None:
        parser.print_help()
        return 2

    config = load_app_config(args.config_path)

    if args.command == "import":
        return _handle_import(args, config)
    if args.command == "template":
        return _handle_template(args, config)
    if args.command == "history":
        return _handle_history(args, config)
    return _handle_sectors(config)


if __name__ == "__main__":
    sys.exit(main())
