import pytest

from finsight_import.industries import (
    DEFAULT_PROFILE,
    PROFILES,
    apply_industry_backfill,
    compute_expense_breakdown,
    get_industry_profile,
    list_sector_templates,
    normalize_industry,
)
from finsight_import.parsing import round_half_up
from finsight_import.record import FinancialData


def test_commerce_breakdown_matches_fixed_percentages() -> None:
    """Commerce splits expenses into 5 categories with fixed percentages."""
    breakdown = compute_expense_breakdown(100000, "commerce")

    pcts = (0.5, 0.15, 0.2, 0.08, 0.07)
    assert len(breakdown) == 5
    assert [item.value for item in breakdown] == [
        round_half_up(100000 * p) for p in pcts
    ]
    assert breakdown[0].name == "Costo Merci"
    assert all(item.color.startswith("#") for item in breakdown)


def test_unknown_industry_uses_two_category_default_split() -> None:
    breakdown = compute_expense_breakdown(1000, "space-mining")

    assert [(i.name, i.value) for i in breakdown] == [
        ("Costi Operativi", 700),
        ("Altri Costi", 300),
    ]
    assert get_industry_profile("space-mining") is DEFAULT_PROFILE
    assert get_industry_profile(None) is DEFAULT_PROFILE


def test_independent_rounding_discrepancy_is_preserved() -> None:
    """Rounded parts may not sum to the total; nothing reconciles them."""
    breakdown = compute_expense_breakdown(10, "commerce")

    # 5 + 1.5 + 2 + 0.8 + 0.7 → 5 + 2 + 2 + 1 + 1
    assert [i.value for i in breakdown] == [5, 2, 2, 1, 1]
    assert sum(i.value for i in breakdown) == 11


@pytest.mark.parametrize("total", [0, -50])
def test_no_breakdown_without_positive_expenses(total) -> None:
    assert compute_expense_breakdown(total, "commerce") == []


def test_five_industries_have_complete_splits() -> None:
    assert set(PROFILES) == {
        "commerce",
        "ecommerce",
        "consulting",
        "restaurant",
        "manufacturing",
    }
    for profile in PROFILES.values():
        assert sum(s.pct for s in profile.expense_split) == pytest.approx(1.0)


def test_commerce_backfill_number_of_sales() -> None:
    fd = FinancialData(annual_revenue=150000)
    apply_industry_backfill(fd, "commerce")
    assert fd.number_of_sales == 1000


def test_ecommerce_backfill_orders_then_customers() -> None:
    fd = FinancialData(annual_revenue=85000)
    apply_industry_backfill(fd, "ecommerce")
    assert fd.orders_received == 1000
    assert fd.active_customers == 700


def test_ecommerce_backfill_keeps_explicit_values() -> None:
    """Explicit orders are kept and feed the customers estimate."""
    fd = FinancialData(annual_revenue=85000, orders_received=200)
    apply_industry_backfill(fd, "ecommerce")
    assert fd.orders_received == 200
    assert fd.active_customers == 140

    fd = FinancialData(annual_revenue=85000, active_customers=42)
    apply_industry_backfill(fd, "ecommerce")
    assert fd.active_customers == 42


def test_consulting_backfill_copies_revenue() -> None:
    fd = FinancialData(annual_revenue=123456.78)
    apply_industry_backfill(fd, "consulting")
    assert fd.invoices_issued == 123456.78


def test_backfill_requires_known_revenue() -> None:
    fd = FinancialData()
    apply_industry_backfill(fd, "commerce")
    apply_industry_backfill(fd, "ecommerce")
    assert fd.number_of_sales == 0
    assert fd.orders_received == 0
    assert fd.active_customers == 0


@pytest.mark.parametrize("industry", ["commerce", "ecommerce", "consulting"])
def test_backfill_skips_negative_revenue(industry) -> None:
    fd = FinancialData(annual_revenue=-850)
    apply_industry_backfill(fd, industry)
    assert fd.number_of_sales == 0
    assert fd.orders_received == 0
    assert fd.active_customers == 0
    assert fd.invoices_issued == 0


def test_other_industries_have_no_backfill() -> None:
    fd = FinancialData(annual_revenue=150000)
    apply_industry_backfill(fd, "restaurant")
    assert fd.to_dict() == FinancialData(annual_revenue=150000).to_dict()


def test_list_sector_templates_flags_active_sector() -> None:
    listing = list_sector_templates("ecommerce")
    assert [tpl.key for tpl, _ in listing] == ["commerce", "ecommerce", "consulting"]
    assert [active for _, active in listing] == [False, True, False]


def test_industry_tags_are_normalized() -> None:
    assert normalize_industry("  E-Commerce ") == "e-commerce"
    assert normalize_industry(None) == ""
    assert get_industry_profile("Commerce ") is PROFILES["commerce"]
