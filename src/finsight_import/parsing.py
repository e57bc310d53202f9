# FinSight Import - Spreadsheet import pipeline for the SMB financial dashboard
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Cell parsing helpers for FinSight Import.

User spreadsheets are messy: amounts may be typed as text, suffixed with a
currency symbol, left empty or filled with free text. The importer accepts
all of them and never fails on a single cell. The rules are:

- ``parse_number``: "parse as float, default 0 on failure".
  Numbers are returned as floats. Strings are parsed on their leading
  numeric prefix (``"120 €"`` → 120.0, ``"1.5e3"`` → 1500.0), anything that
  does not start with a number (``"€120"``, ``"n/a"``, ``""``) yields 0.0.
  Thousands separators are not interpreted (``"1,200"`` → 1.0).
- ``round_half_up``: rounding used by every derivation rule. Halves are
  rounded toward +infinity (2.5 → 3, -2.5 → -2), unlike Python's built-in
  ``round`` which rounds halves to even.
- ``cell_text``: textual rendering of a cell for labels, months and notes.
"""

import math
import re
from typing import Any

import pandas as pd

# Optional sign, digits with an optional fractional part (or a bare fraction),
# optional exponent. Anchored at the start of the (stripped) string.
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def is_empty_cell(value: Any) -> bool:
    """Return True for cells that carry no value (None, NaN, blank string)."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_number(value: Any) -> float:
    """Convert a cell value to float, returning 0.0 when it cannot be parsed.

    Args:
        value: Raw cell value (int, float, numpy scalar, str, None, ...).

    Returns:
        The parsed float. Never NaN or infinite.
    """
    if is_empty_cell(value) or isinstance(value, bool):
        return 0.0

    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value.strip())
        if match is None:
            return 0.0
        number = float(match.group(0))
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0

    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return int(math.floor(value + 0.5))


def cell_text(value: Any) -> str:
    """Render a cell value as text ('' for empty cells).

    Integral floats are rendered without the trailing '.0' so that a year
    or a phone number typed as a number reads naturally.
    """
    if is_empty_cell(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
