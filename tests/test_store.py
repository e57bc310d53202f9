import pytest

from finsight_import.importer import build_financial_record
from finsight_import.store import (
    StoreConfig,
    init_store,
    list_imports,
    load_record,
    save_record,
)


def make_tmp_store_cfg(tmp_path) -> StoreConfig:
    """Helper to build a StoreConfig pointing to a temporary SQLite file."""
    return StoreConfig(engine="sqlite", path=tmp_path / "db" / "imports.sqlite")


def _sample_record():
    sheets = {
        "Company Info": [["Field", "Value"], ["Company Name", "Rossi Srl"]],
        "P&L": [["Voce", "Importo"], ["Ricavi", 85000]],
        "Dati Mensili": [
            ["Mese", "Ricavi", "Costi", "Utile", "Note"],
            ["Gen", 40000, 30000, 10000, "saldi"],
            ["Feb", 45000, 32000, 13000],
        ],
    }
    return build_financial_record(sheets, "ecommerce")


def test_init_store_creates_file_and_is_idempotent(tmp_path):
    cfg = make_tmp_store_cfg(tmp_path)

    assert not cfg.path.exists()
    init_store(cfg)
    init_store(cfg)
    assert cfg.path.exists()
    assert list_imports(cfg).empty


def test_save_and_load_record_round_trip(tmp_path):
    cfg = make_tmp_store_cfg(tmp_path)
    record = _sample_record()

    import_id = save_record(cfg, record, source_label="shop.xlsx")
    loaded = load_record(cfg, import_id)

    assert loaded == record
    assert loaded.to_json() == record.to_json()


def test_warnings_survive_the_store(tmp_path):
    cfg = make_tmp_store_cfg(tmp_path)
    record = build_financial_record({"KPI": [["Field", "Value"]]}, "commerce")
    assert record.warnings

    loaded = load_record(cfg, save_record(cfg, record, source_label="empty.xlsx"))

    assert loaded.warnings == record.warnings


def test_list_imports_most_recent_first(tmp_path):
    cfg = make_tmp_store_cfg(tmp_path)
    record = _sample_record()

    first = save_record(cfg, record, source_label="a.xlsx")
    second = save_record(cfg, record, source_label="b.xlsx")

    df = list_imports(cfg)
    assert list(df["id"]) == [second, first]
    assert set(df.columns) == {
        "id",
        "created_at",
        "source_label",
        "industry",
        "annual_revenue",
        "months",
    }
    assert df.loc[0, "industry"] == "ecommerce"
    assert df.loc[0, "annual_revenue"] == 85000
    assert df.loc[0, "months"] == 2


def test_load_record_missing_id_returns_none(tmp_path):
    cfg = make_tmp_store_cfg(tmp_path)
    assert load_record(cfg, 42) is None


def test_unsupported_engine_is_rejected(tmp_path):
    cfg = StoreConfig(engine="postgres", path=tmp_path / "x.db")
    with pytest.raises(ValueError, match="Unsupported database engine"):
        init_store(cfg)
