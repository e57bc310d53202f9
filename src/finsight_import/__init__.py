# FinSight Import - Spreadsheet import pipeline for the SMB financial dashboard
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
FinSight Import
---------------

Spreadsheet import pipeline feeding the FinSight financial dashboard for
Small and Medium-sized Businesses (SMBs). The package turns user-supplied
Excel workbooks into a normalized financial record and back-fills missing
metrics with industry-specific rules.

Main capabilities:
- workbook decoding (xlsx) into labeled sheets of row arrays,
- lenient keyword-based classification of label/value rows,
- monthly revenue / expenses / profit extraction,
- derived metrics (annual revenue from monthly data, expense breakdown),
- industry-specific backfill (commerce, e-commerce, consulting),
- company information extraction and non-fatal validation warnings,
- downloadable Excel template generation,
- a SQLite store for imported records and a thin command-line interface.

The importer itself has no side effect: it returns a fresh record and hands
it to an optional caller-supplied callback. Persistence belongs to the
caller (see ``store.py`` and ``cli.py``).


Version: 0.2.0

Usage:
    python -m finsight_import.cli --help
"""

__all__ = ["importer", "fields", "industries", "templates", "store"]

__version__ = "0.2.0"
