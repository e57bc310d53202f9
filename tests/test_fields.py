import pytest

from finsight_import.fields import FIELD_RULES, classify_company_label, classify_label


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Ricavi annui", "annualRevenue"),
        ("TOTAL REVENUE", "annualRevenue"),
        ("Numero vendite", "numberOfSales"),
        ("Number of Sales", "numberOfSales"),
        ("Ordini ricevuti", "ordersReceived"),
        ("Active customers", "activeCustomers"),
        ("Fatture emesse", "invoicesIssued"),
        ("Client credits", "clientCredits"),
        ("Costo merce venduta", "merchandiseCost"),
        ("Margine lordo", "grossMargin"),
        ("Tasso di conversione", "conversionRate"),
        ("Conversion Rate (%)", "conversionRate"),
    ],
)
def test_classify_label_maps_keywords_to_metrics(label, expected) -> None:
    """Labels are matched case-insensitively by substring."""
    assert classify_label(label) == expected


def test_classify_label_first_rule_wins() -> None:
    """When several rules could match, the earlier rule in the table wins."""
    # 'revenue' (rule 1) beats 'customers' (rule 4)
    assert classify_label("Revenue per customers") == "annualRevenue"
    # 'clienti' (rule 4) beats 'crediti' (rule 6)
    assert classify_label("Crediti verso clienti") == "activeCustomers"
    # 'vendite' (rule 2) beats 'costo' + 'merce' (rule 7)
    assert classify_label("Costo merce vendite") == "numberOfSales"


def test_costo_merce_requires_both_words() -> None:
    """The merchandise cost rule needs both 'costo' and 'merce'."""
    assert classify_label("Costo del personale") is None
    assert classify_label("Merce in magazzino") is None


@pytest.mark.parametrize("label", [None, "", "   ", "Net Income", "Cash"])
def test_classify_label_returns_none_for_unknown_labels(label) -> None:
    assert classify_label(label) is None


def test_field_rules_priority_order_is_fixed() -> None:
    assert [r.target for r in FIELD_RULES] == [
        "annualRevenue",
        "numberOfSales",
        "ordersReceived",
        "activeCustomers",
        "invoicesIssued",
        "clientCredits",
        "merchandiseCost",
        "grossMargin",
        "conversionRate",
    ]


def test_classify_company_label() -> None:
    """Company labels map to companyInfo attributes with a numeric flag."""
    name_rule = classify_company_label("Company Name")
    assert name_rule is not None
    assert name_rule.target == "companyName"
    assert name_rule.numeric is False

    employees_rule = classify_company_label("Numero Dipendenti")
    assert employees_rule is not None
    assert employees_rule.target == "employees"
    assert employees_rule.numeric is True

    assert classify_company_label("Partita IVA").target == "vatNumber"
    assert classify_company_label("Favourite colour") is None
