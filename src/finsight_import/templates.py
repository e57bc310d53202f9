# FinSight Import - Spreadsheet import pipeline for the SMB financial dashboard
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Excel template generator for FinSight Import.

Users download this template, fill it in and upload it back through the
importer. The workbook has four sheets with fixed layouts:

- ``P&L``:           income statement lines plus the key dashboard metrics,
- ``Balance Sheet``: assets, liabilities and equity,
- ``Dati Mensili``:  one row per month (Month, Revenue, Expenses, Profit,
                     Notes), recognized by the importer as the monthly sheet,
- ``Company Info``:  company attributes (name, VAT number, sector, ...).

Labels are chosen so that each metric row is classified by exactly the
intended rule of ``fields.FIELD_RULES``.

The generator is stateless: the industry tag only appears in the output file
name (``FinSight_Template_<industry>_<YYYY-MM-DD>.xlsx``).
"""

from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd

SheetRows = list[list[Any]]

MONTHS: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_PL_ROWS: SheetRows = [
    ["Revenue", "Amount", "Notes"],
    ["Retail Sales Revenue", 0, "Revenue generated from the sale of goods through own stores."],
    ["Total Revenue", 0, ""],
    ["", "", ""],
    ["Cost of Goods Sold (COGS)", 0, "Cost of acquiring or manufacturing the goods."],
    ["Gross Profit", 0, "Total Revenue - Cost of Goods Sold"],
    ["", "", ""],
    ["Operating Expenses", "", ""],
    ["Selling & Marketing Expenses", 0, "Retail staff, advertising, promotions, store supplies."],
    ["Rent Expenses (for leased stores)", 0, "Cost of leasing retail space."],
    ["General & Administrative (G&A) Expenses", 0, "Corporate overhead, legal and accounting fees, IT."],
    ["Depreciation & Amortization", 0, "Store fixtures, equipment, leasehold improvements."],
    ["Total Operating Expenses", 0, ""],
    ["", "", ""],
    ["Operating Income (EBIT)", 0, "Gross Profit - Total Operating Expenses"],
    ["Interest Expense", 0, "Cost of borrowing money."],
    ["Interest Income", 0, "Income from cash deposits."],
    ["Earnings Before Taxes (EBT)", 0, "Operating Income + Net Other Income/Expense"],
    ["Income Tax Expense", 0, "Estimated taxes on earnings."],
    ["Net Income", 0, "Earnings Before Taxes - Income Tax Expense"],
    ["", "", ""],
    ["Key Metrics", "", ""],
    ["Number of Sales", 0, "Commerce: receipts issued over the year."],
    ["Orders Received", 0, "E-commerce: orders over the year."],
    ["Active Customers", 0, "Customers with at least one purchase."],
    ["Invoices Issued", 0, "Consulting: amount invoiced over the year."],
    ["Client Credits", 0, "Outstanding amounts owed by clients."],
    ["Costo Merce", 0, "Cost of merchandise sold."],
    ["Gross Margin (%)", 0, ""],
    ["Conversion Rate (%)", 0, "E-commerce: orders / visits."],
]

_BALANCE_SHEET_ROWS: SheetRows = [
    ["Balance Sheet", "Amount (€)", "Notes"],
    ["Assets", "", ""],
    ["Cash & Cash Equivalents", 0, "Highly liquid assets."],
    ["Accounts Receivable", 0, "Money owed by debtors."],
    ["Inventory", 0, "Goods held for sale."],
    ["Prepaid Expenses", 0, "Expenses paid in advance (insurance, advertising)."],
    ["Total Current Assets", 0, ""],
    ["Property & Equipment", 0, "Store fixtures, office equipment, vehicles."],
    ["Accumulated Depreciation", 0, "Total depreciation recorded to date."],
    ["Intangible Assets (e.g., Trademarks)", 0, "Brand names, intellectual property."],
    ["Total Non-Current Assets", 0, ""],
    ["Total Assets", 0, ""],
    ["", "", ""],
    ["Liabilities", "", ""],
    ["Accounts Payable", 0, "Money owed to suppliers."],
    ["Accrued Expenses", 0, "Expenses incurred but not yet paid."],
    ["Deferred Income", 0, "Gift card balances, prepayments received."],
    ["Total Current Liabilities", 0, ""],
    ["Long-Term Debt", 0, "Loans not due within the next 12 months."],
    ["Total Non-Current Liabilities", 0, ""],
    ["Total Liabilities", 0, ""],
    ["", "", ""],
    ["Equity", "", ""],
    ["Common Stock", 0, "Value of shares issued to owners."],
    ["Retained Earnings", 0, "Accumulated undistributed net income."],
    ["Total Equity", 0, ""],
    ["Total Liabilities & Equity", 0, "Must equal Total Assets"],
]

_COMPANY_INFO_ROWS: SheetRows = [
    ["Field", "Value", "Note"],
    ["Company Name", "", "Full company name"],
    ["Tax Code", "", "Company tax code"],
    ["VAT Number", "", "VAT number with country prefix"],
    ["Sector of Activity", "", "Main sector of activity"],
    ["Number of Employees", "", "Current employees"],
    ["Year of Establishment", "", "Year of foundation"],
    ["Region/Province", "", "Headquarters location"],
    ["Annual Turnover", "", "Last year's turnover in euro"],
    ["Company Email", "", "Main email"],
    ["Phone", "", "Phone number"],
]

# Column widths (characters) applied to columns A, B, C of every sheet.
_COLUMN_WIDTHS: tuple[int, ...] = (40, 15, 55)


def _monthly_rows() -> SheetRows:
    rows: SheetRows = [["Month", "Revenue", "Expenses", "Profit", "Notes"]]
    rows.extend([month, 0, 0, 0, ""] for month in MONTHS)
    return rows


def build_template_sheets() -> dict[str, SheetRows]:
    """Return the template content as an ordered mapping sheet -> rows."""
    return {
        "P&L": [list(r) for r in _PL_ROWS],
        "Balance Sheet": [list(r) for r in _BALANCE_SHEET_ROWS],
        "Dati Mensili": _monthly_rows(),
        "Company Info": [list(r) for r in _COMPANY_INFO_ROWS],
    }


def template_file_name(industry: str, today: Optional[date] = None) -> str:
    """Return the download file name for a sector template."""
    day = today or date.today()
    return f"FinSight_Template_{industry}_{day.isoformat()}.xlsx"


def write_template(
    output_dir: Union[str, Path],
    industry: str,
    today: Optional[date] = None,
) -> Path:
    """Write the Excel template into ``output_dir`` and return its path.

    The directory is created if needed. An existing file with the same name
    is overwritten.
    """
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / template_file_name(industry, today)

    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, rows in build_template_sheets().items():
            pd.DataFrame(rows).to_excel(
                writer, sheet_name=sheet_name, header=False, index=False
            )
            worksheet = writer.sheets[sheet_name]
            for letter, width in zip("ABC", _COLUMN_WIDTHS):
                worksheet.column_dimensions[letter].width = width

    return path
