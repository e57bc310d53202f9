# FinSight Import - Spreadsheet import pipeline for the SMB financial dashboard
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Financial record produced by the importer.

The record mirrors the structure consumed by the dashboard front-end:

    {
        "companyInfo":   {...free-form attributes...},
        "financialData": {
            "annualRevenue": 0, "numberOfSales": 0, "ordersReceived": 0,
            "activeCustomers": 0, "invoicesIssued": 0, "clientCredits": 0,
            "merchandiseCost": 0, "grossMargin": 0, "conversionRate": 0,
            "expenseBreakdown": [{"name": ..., "value": ..., "color": ...}],
        },
        "monthlyData":   [{"month": ..., "revenue": ..., "expenses": ...,
                           "profit": ..., "notes": ...}, ...],
        "industry":      "commerce",
        "warnings":      ["Company name missing", ...],
    }

Python attributes use snake_case; ``to_dict()`` / ``from_dict()`` convert
to and from the camelCase wire structure. Serialization is deterministic so
that importing the same file twice yields byte-identical JSON.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any

# snake_case attribute -> camelCase key of the numeric financial metrics.
METRIC_KEYS: dict[str, str] = {
    "annual_revenue": "annualRevenue",
    "number_of_sales": "numberOfSales",
    "orders_received": "ordersReceived",
    "active_customers": "activeCustomers",
    "invoices_issued": "invoicesIssued",
    "client_credits": "clientCredits",
    "merchandise_cost": "merchandiseCost",
    "gross_margin": "grossMargin",
    "conversion_rate": "conversionRate",
}

_ATTR_BY_KEY: dict[str, str] = {v: k for k, v in METRIC_KEYS.items()}


@dataclass(frozen=True)
class ExpenseItem:
    """One category of the expense breakdown (value in currency units)."""

    name: str
    value: int
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "color": self.color}


@dataclass(frozen=True)
class MonthlyEntry:
    """One row of the monthly sheet."""

    month: str
    revenue: float
    expenses: float
    profit: float
    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "revenue": self.revenue,
            "expenses": self.expenses,
            "profit": self.profit,
            "notes": self.notes,
        }


@dataclass
class FinancialData:
    """Normalized financial metrics.

    Every numeric metric defaults to 0.0. A metric equal to 0 is considered
    *unset* by the derivation and backfill rules.
    """

    annual_revenue: float = 0.0
    number_of_sales: float = 0.0
    orders_received: float = 0.0
    active_customers: float = 0.0
    invoices_issued: float = 0.0
    client_credits: float = 0.0
    merchandise_cost: float = 0.0
    gross_margin: float = 0.0
    conversion_rate: float = 0.0
    expense_breakdown: list[ExpenseItem] = field(default_factory=list)

    def get(self, key: str) -> float:
        """Return a metric by its camelCase key (e.g. 'annualRevenue')."""
        return getattr(self, _ATTR_BY_KEY[key])

    def set(self, key: str, value: float) -> None:
        """Set a metric by its camelCase key."""
        setattr(self, _ATTR_BY_KEY[key], value)

    def is_set(self, key: str) -> bool:
        """Return True if the metric holds a non-zero value."""
        return bool(self.get(key))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            key: getattr(self, attr) for attr, key in METRIC_KEYS.items()
        }
        out["expenseBreakdown"] = [item.to_dict() for item in self.expense_breakdown]
        return out


@dataclass
class FinancialRecord:
    """Output of one import call.

    Attributes:
        industry: Sector tag supplied by the caller (never inferred).
        company_info: Free-form company attributes.
        financial_data: Normalized metrics.
        monthly_data: Monthly rows, in source order.
        warnings: Non-fatal validation messages about incomplete data.
    """

    industry: str
    company_info: dict[str, Any] = field(default_factory=dict)
    financial_data: FinancialData = field(default_factory=FinancialData)
    monthly_data: list[MonthlyEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase structure consumed by the dashboard."""
        return {
            "companyInfo": dict(self.company_info),
            "financialData": self.financial_data.to_dict(),
            "monthlyData": [m.to_dict() for m in self.monthly_data],
            "industry": self.industry,
            "warnings": list(self.warnings),
        }

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize the record to JSON (stable key order, UTF-8 text)."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FinancialRecord:
        """Rebuild a record from the structure returned by ``to_dict``.

        Raises:
            ValueError: if the structure is not a record mapping.
        """
        if not isinstance(data, dict):
            raise ValueError("Financial record must be a mapping.")

        raw_fd = data.get("financialData") or {}
        financial_data = FinancialData()
        for attr, key in METRIC_KEYS.items():
            if key in raw_fd:
                setattr(financial_data, attr, float(raw_fd[key]))
        financial_data.expense_breakdown = [
            ExpenseItem(name=str(e["name"]), value=int(e["value"]), color=str(e["color"]))
            for e in raw_fd.get("expenseBreakdown") or []
        ]

        monthly_fields = {f.name for f in fields(MonthlyEntry)}
        monthly = [
            MonthlyEntry(**{k: v for k, v in m.items() if k in monthly_fields})
            for m in data.get("monthlyData") or []
        ]

        return cls(
            industry=str(data.get("industry", "")),
            company_info=dict(data.get("companyInfo") or {}),
            financial_data=financial_data,
            monthly_data=monthly,
            warnings=[str(w) for w in data.get("warnings") or []],
        )

    @classmethod
    def from_json(cls, text: str) -> FinancialRecord:
        return cls.from_dict(json.loads(text))
