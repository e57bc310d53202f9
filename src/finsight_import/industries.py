# FinSight Import - Spreadsheet import pipeline for the SMB financial dashboard
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Industry profiles for FinSight Import.

Each supported sector is described by an ``IndustryProfile`` carrying:

1. Expense split
   --------------
   A fixed table of (category, percentage, color) used to decompose the
   total monthly expenses into an ``expenseBreakdown`` for display. Each
   category value is rounded independently:

       value = round_half_up(total_expenses * pct)

   so the parts may not add up exactly to the total. The discrepancy is
   kept as is.

2. Backfill rule
   --------------
   A function estimating missing metrics from the annual revenue:

   - commerce:   numberOfSales   = round(annualRevenue / 150)
   - ecommerce:  ordersReceived  = round(annualRevenue / 85),
                 activeCustomers = round(ordersReceived * 0.7)
   - consulting: invoicesIssued  = annualRevenue

   Backfill only writes metrics that are still unset (zero), and only when
   the annual revenue is positive, so no rule ever produces a negative
   estimate.

Sector tags are supplied by the caller and never validated against the file
content: any unknown tag falls back to ``DEFAULT_PROFILE`` (70/30 split, no
backfill).

The module also exposes the sector template catalogue shown next to the
template download (title, description and sector-specific metrics).
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from .parsing import round_half_up
from .record import ExpenseItem, FinancialData

Backfill = Callable[[FinancialData], None]


@dataclass(frozen=True)
class ExpenseShare:
    """One category of an industry expense split."""

    name: str
    pct: float
    color: str


@dataclass(frozen=True)
class IndustryProfile:
    """Constants and rules attached to a sector tag."""

    key: str
    label: str
    expense_split: tuple[ExpenseShare, ...]
    backfill: Optional[Backfill] = None


# ---------------------------------------------------------------------------
# Backfill rules
# ---------------------------------------------------------------------------


def _backfill_commerce(fd: FinancialData) -> None:
    if not fd.is_set("numberOfSales"):
        fd.number_of_sales = float(round_half_up(fd.annual_revenue / 150))


def _backfill_ecommerce(fd: FinancialData) -> None:
    if not fd.is_set("ordersReceived"):
        fd.orders_received = float(round_half_up(fd.annual_revenue / 85))
    if not fd.is_set("activeCustomers"):
        fd.active_customers = float(round_half_up(fd.orders_received * 0.7))


def _backfill_consulting(fd: FinancialData) -> None:
    # A copy of the revenue, not an estimate of the invoice count.
    if not fd.is_set("invoicesIssued"):
        fd.invoices_issued = fd.annual_revenue


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

PROFILES: dict[str, IndustryProfile] = {
    "commerce": IndustryProfile(
        key="commerce",
        label="Retail & Commerce",
        expense_split=(
            ExpenseShare("Costo Merci", 0.50, "#ef4444"),
            ExpenseShare("Stipendi", 0.15, "#10b981"),
            ExpenseShare("Affitto", 0.20, "#3b82f6"),
            ExpenseShare("Marketing", 0.08, "#f59e0b"),
            ExpenseShare("Altri Costi", 0.07, "#6b7280"),
        ),
        backfill=_backfill_commerce,
    ),
    "ecommerce": IndustryProfile(
        key="ecommerce",
        label="E-commerce",
        expense_split=(
            ExpenseShare("Costo Prodotti", 0.40, "#ef4444"),
            ExpenseShare("Marketing Digitale", 0.25, "#3b82f6"),
            ExpenseShare("Logistica & Spedizioni", 0.20, "#10b981"),
            ExpenseShare("Piattaforma", 0.08, "#f59e0b"),
            ExpenseShare("Altri Costi", 0.07, "#6b7280"),
        ),
        backfill=_backfill_ecommerce,
    ),
    "consulting": IndustryProfile(
        key="consulting",
        label="Consulting & Services",
        expense_split=(
            ExpenseShare("Stipendi & Benefit", 0.60, "#3b82f6"),
            ExpenseShare("Spese Generali", 0.15, "#10b981"),
            ExpenseShare("Marketing & BD", 0.10, "#f59e0b"),
            ExpenseShare("Formazione", 0.08, "#8b5cf6"),
            ExpenseShare("Tecnologia", 0.07, "#ef4444"),
        ),
        backfill=_backfill_consulting,
    ),
    "restaurant": IndustryProfile(
        key="restaurant",
        label="Restaurants & Food Service",
        expense_split=(
            ExpenseShare("Materie Prime", 0.35, "#ef4444"),
            ExpenseShare("Personale", 0.30, "#10b981"),
            ExpenseShare("Affitto", 0.15, "#3b82f6"),
            ExpenseShare("Utenze", 0.10, "#f59e0b"),
            ExpenseShare("Altri Costi", 0.10, "#6b7280"),
        ),
    ),
    "manufacturing": IndustryProfile(
        key="manufacturing",
        label="Manufacturing",
        expense_split=(
            ExpenseShare("Materie Prime", 0.40, "#ef4444"),
            ExpenseShare("Personale", 0.25, "#10b981"),
            ExpenseShare("Energia", 0.15, "#f59e0b"),
            ExpenseShare("Ammortamenti", 0.10, "#8b5cf6"),
            ExpenseShare("Altri Costi", 0.10, "#6b7280"),
        ),
    ),
}

DEFAULT_PROFILE = IndustryProfile(
    key="other",
    label="Other",
    expense_split=(
        ExpenseShare("Costi Operativi", 0.70, "#3b82f6"),
        ExpenseShare("Altri Costi", 0.30, "#6b7280"),
    ),
)


def normalize_industry(industry: Optional[str]) -> str:
    """Return the canonical form of a sector tag (stripped, lower-case)."""
    if industry is None:
        return ""
    return str(industry).strip().lower()


def get_industry_profile(industry: Optional[str]) -> IndustryProfile:
    """Return the profile for a sector tag (default profile when unknown)."""
    return PROFILES.get(normalize_industry(industry), DEFAULT_PROFILE)


def compute_expense_breakdown(
    total_expenses: float, industry: Optional[str]
) -> list[ExpenseItem]:
    """Split total expenses into display categories for a sector.

    Args:
        total_expenses: Sum of the monthly expenses.
        industry: Sector tag supplied by the caller.

    Returns:
        One ExpenseItem per category of the sector split, in table order.
        An empty list when ``total_expenses`` is not positive.
    """
    if total_expenses <= 0:
        return []
    profile = get_industry_profile(industry)
    return [
        ExpenseItem(
            name=share.name,
            value=round_half_up(total_expenses * share.pct),
            color=share.color,
        )
        for share in profile.expense_split
    ]


def apply_industry_backfill(fd: FinancialData, industry: Optional[str]) -> None:
    """Estimate missing metrics in place from the annual revenue.

    Nothing happens when the annual revenue is unknown or not positive, or
    when the sector has no backfill rule.
    """
    if fd.annual_revenue <= 0:
        return
    profile = get_industry_profile(industry)
    if profile.backfill is not None:
        profile.backfill(fd)


# ---------------------------------------------------------------------------
# Sector template catalogue
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SectorTemplate:
    """Presentation metadata for a sector-specific template."""

    key: str
    title: str
    description: str
    features: tuple[str, ...]


SECTOR_TEMPLATES: tuple[SectorTemplate, ...] = (
    SectorTemplate(
        key="commerce",
        title="Retail & Commerce",
        description="Physical stores, retail and traditional commerce.",
        features=("Inventory management", "Sales analysis", "Operating costs", "Product margins"),
    ),
    SectorTemplate(
        key="ecommerce",
        title="E-commerce",
        description="Online stores, marketplaces and digital sales.",
        features=("Conversion rate", "CAC & LTV", "Logistics", "Digital marketing"),
    ),
    SectorTemplate(
        key="consulting",
        title="Consulting & Services",
        description="Consulting, professional services and agencies.",
        features=("Billable hours", "Active projects", "Service margins", "Resource utilization"),
    ),
)


def list_sector_templates(
    active_industry: Optional[str] = None,
) -> list[tuple[SectorTemplate, bool]]:
    """Return the sector catalogue with a flag marking the active sector."""
    active = normalize_industry(active_industry)
    return [(tpl, tpl.key == active) for tpl in SECTOR_TEMPLATES]
