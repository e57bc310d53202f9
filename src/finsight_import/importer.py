# FinSight Import - Spreadsheet import pipeline for the SMB financial dashboard
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Spreadsheet importer for FinSight Import.

This module turns an uploaded Excel workbook into a ``FinancialRecord``.

Pipeline
--------

1) Decode the workbook
   The file bytes are decoded with pandas (openpyxl engine) into an ordered
   mapping ``sheet name -> list of row arrays``. Empty cells become None and
   trailing empty cells are trimmed, so a row's length is the position of
   its last filled cell. A workbook that cannot be decoded at all raises
   ``WorkbookImportError``: no partial record is ever produced.

2) Classify sheets by name
   - a name containing "Dati Mensili" or "Monthly" marks a *monthly sheet*,
   - every other sheet is a *field sheet*.
   Field sheets whose name contains "Company Info" or "Informazioni
   Aziendali" are additionally read for company information.

3) Monthly sheets
   The header row is skipped. Each row with at least 4 cells becomes

       {month: cell[0], revenue: cell[1], expenses: cell[2],
        profit: cell[3], notes: cell[4] or ""}

   Shorter rows are dropped. Several monthly sheets are concatenated in
   workbook order.

4) Field sheets
   The header row is skipped. For each row with at least 2 cells, the first
   cell is the label and the second the value. The label is classified by
   ``fields.classify_label``; rows with no matching rule or with an empty
   value are ignored. Negative values are stored as 0. A later row feeding
   the same metric overwrites the earlier one.

5) Derived metrics (once, after all sheets)
   - annualRevenue, if unset, becomes the company turnover, or else the
     sum of the monthly revenues (only a positive source is used),
   - the sum of the monthly expenses, if positive, is split into an
     ``expenseBreakdown`` using the industry expense table.

6) Industry backfill
   See ``industries.apply_industry_backfill``.

7) Validation
   A missing company name or a missing or non-positive annual revenue is
   reported in ``record.warnings``. Warnings never block the import.

Lenient parsing
---------------
Short rows, unmatched labels and unparsable numbers never abort an import;
they are skipped silently (logged at DEBUG level only). Numbers go through
``parsing.parse_number`` (0 on failure).

The importer keeps no state between calls: each call builds a fresh record
and, on success, hands it to the optional ``on_data_update`` callback.
"""

import logging
import os
from collections.abc import Callable, Mapping
from io import BytesIO
from pathlib import Path
from typing import IO, Any, Optional, Union

import pandas as pd

from .fields import classify_company_label, classify_label
from .industries import (
    apply_industry_backfill,
    compute_expense_breakdown,
    normalize_industry,
)
from .parsing import cell_text, is_empty_cell, parse_number
from .record import FinancialData, FinancialRecord, MonthlyEntry

logger = logging.getLogger(__name__)

MONTHLY_SHEET_MARKERS: tuple[str, ...] = ("Dati Mensili", "Monthly")
COMPANY_SHEET_MARKERS: tuple[str, ...] = ("company info", "informazioni aziendali")

DEFAULT_INDUSTRY = "commerce"

MISSING_COMPANY_NAME = "Company name missing"
MISSING_REVENUE = "Annual revenue missing or not valid"

WorkbookSource = Union[str, "os.PathLike[str]", bytes, bytearray, IO[bytes]]
Row = list[Any]
Sheets = Mapping[str, list[Row]]


class WorkbookImportError(ValueError):
    """Raised when a workbook cannot be read or decoded at all."""


# ---------------------------------------------------------------------------
# Workbook decoding
# ---------------------------------------------------------------------------


def _read_source_bytes(source: WorkbookSource) -> bytes:
    """Return the raw bytes of a workbook source."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        return Path(source).read_bytes()
    data = source.read()
    if isinstance(data, str):
        raise TypeError("Workbook file objects must be opened in binary mode.")
    return data


def _trim_row(values: tuple) -> Row:
    """Convert a DataFrame row to a row array (None for empty cells)."""
    cells = [None if is_empty_cell(v) else v for v in values]
    while cells and cells[-1] is None:
        cells.pop()
    return cells


def read_workbook(source: WorkbookSource) -> dict[str, list[Row]]:
    """Decode a workbook into an ordered mapping of sheets to row arrays.

    Parameters
    ----------
    source:
        Path to the workbook, raw bytes, or a binary file object.

    Returns
    -------
    dict[str, list[list]]
        Sheets in workbook order. Each sheet is a list of rows; each row is
        a list of cell values with None for empty cells and trailing empty
        cells removed.

    Raises
    ------
    WorkbookImportError
        If the file cannot be read or is not a valid workbook.
    """
    try:
        content = _read_source_bytes(source)
        frames = pd.read_excel(
            BytesIO(content),
            sheet_name=None,
            header=None,
            dtype=object,
            keep_default_na=False,
            engine="openpyxl",
        )
    except Exception as exc:  # noqa: BLE001
        logger.debug("Workbook decoding failed: %s", exc)
        raise WorkbookImportError(
            "The file could not be processed. Check that it is a valid Excel "
            "workbook (.xlsx)."
        ) from exc

    sheets: dict[str, list[Row]] = {}
    for name, df in frames.items():
        sheets[str(name)] = [
            _trim_row(values) for values in df.itertuples(index=False, name=None)
        ]
    return sheets


# ---------------------------------------------------------------------------
# Sheet roles
# ---------------------------------------------------------------------------


def is_monthly_sheet(name: str) -> bool:
    """Return True if the sheet name marks the monthly-data sheet."""
    return any(marker in str(name) for marker in MONTHLY_SHEET_MARKERS)


def is_company_sheet(name: str) -> bool:
    """Return True if the sheet name marks a company information sheet."""
    lowered = str(name).lower()
    return any(marker in lowered for marker in COMPANY_SHEET_MARKERS)


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------


def parse_monthly_rows(rows: list[Row]) -> list[MonthlyEntry]:
    """Build monthly entries from the rows of a monthly sheet.

    The first row is treated as the header and skipped. Rows with fewer than
    4 cells are dropped.
    """
    entries: list[MonthlyEntry] = []
    for index, row in enumerate(rows[1:], start=2):
        if len(row) < 4:
            logger.debug("Monthly row %d skipped: %d cell(s)", index, len(row))
            continue
        entries.append(
            MonthlyEntry(
                month=cell_text(row[0]),
                revenue=parse_number(row[1]),
                expenses=parse_number(row[2]),
                profit=parse_number(row[3]),
                notes=cell_text(row[4]) if len(row) > 4 else "",
            )
        )
    return entries


def parse_field_rows(rows: list[Row], financial_data: FinancialData) -> None:
    """Feed financial metrics from the label/value rows of a field sheet.

    The first row is treated as the header and skipped. Matching rows write
    ``parse_number(value)``, floored at 0, into ``financial_data`` in place.
    """
    for index, row in enumerate(rows[1:], start=2):
        if len(row) < 2:
            continue
        key = classify_label(cell_text(row[0]))
        if key is None:
            logger.debug("Field row %d skipped: unknown label %r", index, row[0])
            continue
        if is_empty_cell(row[1]):
            continue
        # Financial metrics are never negative.
        financial_data.set(key, max(parse_number(row[1]), 0.0))


def parse_company_rows(rows: list[Row], company_info: dict[str, Any]) -> None:
    """Feed company attributes from the label/value rows of a company sheet."""
    for row in rows[1:]:
        if len(row) < 2 or is_empty_cell(row[1]):
            continue
        rule = classify_company_label(cell_text(row[0]))
        if rule is None:
            continue
        company_info[rule.target] = (
            max(parse_number(row[1]), 0.0) if rule.numeric else cell_text(row[1])
        )


# ---------------------------------------------------------------------------
# Record assembly
# ---------------------------------------------------------------------------


def apply_derived_metrics(record: FinancialRecord) -> None:
    """Fill annual revenue and expense breakdown from the other sheets.

    Annual revenue, when unset, is taken from the company turnover and
    otherwise from the monthly revenue sum. Neither source is used unless
    it is positive.
    """
    fd = record.financial_data

    if not fd.annual_revenue:
        turnover = record.company_info.get("annualTurnover", 0)
        if turnover > 0:
            fd.annual_revenue = turnover

    if not fd.annual_revenue and record.monthly_data:
        monthly_revenue = sum(m.revenue for m in record.monthly_data)
        if monthly_revenue > 0:
            fd.annual_revenue = monthly_revenue

    total_expenses = sum(m.expenses for m in record.monthly_data)
    if total_expenses > 0:
        fd.expense_breakdown = compute_expense_breakdown(
            total_expenses, record.industry
        )


def validate_record(record: FinancialRecord) -> list[str]:
    """Return the validation warnings of an imported record.

    Warnings describe incomplete data. They never block the import.
    """
    warnings: list[str] = []
    if not record.company_info.get("companyName"):
        warnings.append(MISSING_COMPANY_NAME)
    if record.financial_data.annual_revenue <= 0:
        warnings.append(MISSING_REVENUE)
    return warnings


def build_financial_record(
    sheets: Sheets, industry: str = DEFAULT_INDUSTRY
) -> FinancialRecord:
    """Build a financial record from decoded sheets.

    Parameters
    ----------
    sheets:
        Output of :func:`read_workbook` (or any mapping of sheet name to
        row arrays).
    industry:
        Sector tag used for the expense breakdown and the backfill rules.
        It is stored stripped and lower-cased.

    Returns
    -------
    FinancialRecord
        A fresh record; never raises on malformed rows.
    """
    record = FinancialRecord(industry=normalize_industry(industry))

    for name, rows in sheets.items():
        if is_monthly_sheet(name):
            record.monthly_data.extend(parse_monthly_rows(rows))
            continue

        parse_field_rows(rows, record.financial_data)
        if is_company_sheet(name):
            parse_company_rows(rows, record.company_info)

    apply_derived_metrics(record)
    apply_industry_backfill(record.financial_data, record.industry)
    record.warnings = validate_record(record)
    return record


def import_workbook(
    source: WorkbookSource,
    industry: str = DEFAULT_INDUSTRY,
    on_data_update: Optional[Callable[[FinancialRecord], None]] = None,
) -> FinancialRecord:
    """Import a workbook and return the normalized financial record.

    Parameters
    ----------
    source:
        Path to the workbook, raw bytes, or a binary file object.
    industry:
        Sector tag supplied by the caller. It is not validated against the
        file content; unknown tags use the default expense split and no
        backfill.
    on_data_update:
        Optional callback receiving the record after a successful import.
        It is not called when the import fails. Validation warnings do not
        count as a failure.

    Returns
    -------
    FinancialRecord

    Raises
    ------
    WorkbookImportError
        If the workbook cannot be decoded.
    """
    sheets = read_workbook(source)
    record = build_financial_record(sheets, industry)

    logger.debug(
        "Imported %d sheet(s), %d month(s) for industry %r",
        len(sheets),
        len(record.monthly_data),
        record.industry,
    )
    if record.warnings:
        logger.info("Incomplete data: %s", "; ".join(record.warnings))

    if on_data_update is not None:
        on_data_update(record)
    return record
