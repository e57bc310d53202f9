# FinSight Import - Spreadsheet import pipeline for the SMB financial dashboard
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Label classification rules for FinSight Import.

Field sheets are made of label/value rows ("Ricavi 2024 | 150000"). This
module decides which financial metric a label feeds, using a small ordered
table of keyword rules. Labels are lower-cased and matched by substring;
the first rule that matches wins.

Priority order (fixed, documented):

    1. ricavi | revenue          → annualRevenue
    2. vendite | sales           → numberOfSales
    3. ordini | orders           → ordersReceived
    4. clienti | customers       → activeCustomers
    5. fatture | invoices        → invoicesIssued
    6. crediti | credits         → clientCredits
    7. costo AND merce           → merchandiseCost
    8. margine | margin          → grossMargin
    9. conversione | conversion  → conversionRate

So "Revenue per customer" feeds ``annualRevenue`` (rule 1 beats rule 4)
and "Costo merce venduta" feeds ``merchandiseCost``.

A second, independent table classifies company information labels
("Company Name", "Partita IVA", ...) into ``companyInfo`` attributes.

This module exposes:
- FieldRule:               one keyword rule.
- FIELD_RULES:             the ordered financial rule table.
- COMPANY_RULES:           the ordered company information rule table.
- classify_label:          label → financial metric key (or None).
- classify_company_label:  label → company rule (or None).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FieldRule:
    """Definition of a single keyword rule.

    Attributes:
        target: Key written when the rule matches (e.g. 'annualRevenue').
        any_of: The rule matches if the label contains at least one of
            these fragments.
        all_of: The rule matches if the label contains every one of these
            fragments. Used for multi-word labels such as "costo merce".
        numeric: Whether the matched value is parsed as a number. Always
            True for financial rules; some company attributes are text.
    """

    target: str
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()
    numeric: bool = True

    def matches(self, label: str) -> bool:
        """Return True if the (already lower-cased) label matches this rule."""
        if self.all_of and not all(fragment in label for fragment in self.all_of):
            return False
        if self.any_of and not any(fragment in label for fragment in self.any_of):
            return False
        return bool(self.any_of or self.all_of)


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("annualRevenue", any_of=("ricavi", "revenue")),
    FieldRule("numberOfSales", any_of=("vendite", "sales")),
    FieldRule("ordersReceived", any_of=("ordini", "orders")),
    FieldRule("activeCustomers", any_of=("clienti", "customers")),
    FieldRule("invoicesIssued", any_of=("fatture", "invoices")),
    FieldRule("clientCredits", any_of=("crediti", "credits")),
    FieldRule("merchandiseCost", all_of=("costo", "merce")),
    FieldRule("grossMargin", any_of=("margine", "margin")),
    FieldRule("conversionRate", any_of=("conversione", "conversion")),
)

COMPANY_RULES: tuple[FieldRule, ...] = (
    FieldRule("companyName", any_of=("company name", "ragione sociale"), numeric=False),
    FieldRule("taxCode", any_of=("tax code", "codice fiscale"), numeric=False),
    FieldRule("vatNumber", any_of=("vat", "partita iva"), numeric=False),
    FieldRule("sector", any_of=("sector", "settore"), numeric=False),
    FieldRule("employees", any_of=("employees", "dipendenti")),
    FieldRule("yearEstablished", any_of=("establishment", "costituzione"), numeric=False),
    FieldRule("region", any_of=("region", "regione"), numeric=False),
    FieldRule("annualTurnover", any_of=("turnover", "fatturato")),
    FieldRule("email", any_of=("email",), numeric=False),
    FieldRule("phone", any_of=("phone", "telefono"), numeric=False),
)


def _first_match(label: Optional[str], rules: tuple[FieldRule, ...]) -> Optional[FieldRule]:
    """Return the first rule matching the label, or None."""
    if label is None:
        return None
    normalized = str(label).strip().lower()
    if not normalized:
        return None
    for rule in rules:
        if rule.matches(normalized):
            return rule
    return None


def classify_label(label: Optional[str]) -> Optional[str]:
    """Return the financial metric key fed by a row label.

    Args:
        label: Raw label from the first cell of a field-sheet row.

    Returns:
        The target key (e.g. 'ordersReceived') or None when no rule matches.
    """
    rule = _first_match(label, FIELD_RULES)
    return rule.target if rule is not None else None


def classify_company_label(label: Optional[str]) -> Optional[FieldRule]:
    """Return the company information rule matching a row label, or None."""
    return _first_match(label, COMPANY_RULES)
