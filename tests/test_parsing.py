import math

import numpy as np
import pytest

from finsight_import.parsing import cell_text, is_empty_cell, parse_number, round_half_up


@pytest.mark.parametrize(
    "value, expected",
    [
        (100, 100.0),
        (12.5, 12.5),
        (np.int64(7), 7.0),
        ("150000", 150000.0),
        ("  42.5 ", 42.5),
        ("120 €", 120.0),
        ("1.5e3", 1500.0),
        ("-30", -30.0),
        (".5", 0.5),
    ],
)
def test_parse_number_accepts_numbers_and_numeric_prefixes(value, expected) -> None:
    """Numbers and strings starting with a number are parsed as floats."""
    assert parse_number(value) == pytest.approx(expected)


@pytest.mark.parametrize(
    "value",
    [None, "", "   ", "n/a", "€120", float("nan"), np.nan, True, object()],
)
def test_parse_number_defaults_to_zero(value) -> None:
    """Anything that cannot be parsed yields 0.0 instead of raising."""
    assert parse_number(value) == 0.0


def test_parse_number_ignores_thousands_separator() -> None:
    """'1,200' reads as 1 (only the leading numeric prefix is parsed)."""
    assert parse_number("1,200") == 1.0


def test_parse_number_never_returns_infinity() -> None:
    assert parse_number(float("inf")) == 0.0
    assert not math.isnan(parse_number("nan"))


def test_round_half_up_rounds_halves_toward_positive_infinity() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(1000.4) == 1000


def test_cell_text_and_is_empty_cell() -> None:
    assert cell_text(None) == ""
    assert cell_text(float("nan")) == ""
    assert cell_text(2017.0) == "2017"
    assert cell_text("Gennaio") == "Gennaio"
    assert is_empty_cell("  ")
    assert not is_empty_cell(0)
