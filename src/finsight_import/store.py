# FinSight Import - Spreadsheet import pipeline for the SMB financial dashboard
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.


"""
Import store for FinSight Import.

The importer never persists anything: it hands each record to a caller
callback. This module is the data store used by the CLI for that callback.
Each successful import is saved as one row, in a single transaction, so a
failed import leaves the store unchanged.

------------------------------------------------------------------------------
Schema
------------------------------------------------------------------------------

imports
    One row per successful import.

    Columns:
    - id              INTEGER PRIMARY KEY AUTOINCREMENT
    - created_at      TEXT    NOT NULL (ISO datetime, UTC)
    - source_label    TEXT    NOT NULL  -- file path or upload name
    - industry        TEXT    NOT NULL
    - annual_revenue  REAL    NOT NULL  -- denormalized for listings
    - months          INTEGER NOT NULL  -- number of monthly rows
    - record_json     TEXT    NOT NULL  -- FinancialRecord.to_json()

------------------------------------------------------------------------------
SQLite Notes
------------------------------------------------------------------------------

- All timestamps are stored as ISO-8601 text (UTC).
- ``init_store`` is idempotent and called by every public function.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from .record import FinancialRecord

_LIST_COLUMNS = ["id", "created_at", "source_label", "industry", "annual_revenue", "months"]


@dataclass(frozen=True)
class StoreConfig:
    """
    Store configuration.

    Attributes
    ----------
    engine:
        Database engine identifier. Only "sqlite" is supported.
    path:
        Path to the SQLite database file.
    """

    engine: str
    path: Path


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _ensure_sqlite(cfg: StoreConfig) -> None:
    """Raise if the configuration does not refer to a supported engine."""
    if cfg.engine.lower() != "sqlite":
        msg = (
            f"Unsupported database engine: {cfg.engine!r}. "
            "Only 'sqlite' is supported for now."
        )
        raise ValueError(msg)


def _connect(cfg: StoreConfig) -> sqlite3.Connection:
    """
    Open a SQLite connection.

    The caller is responsible for closing the connection.
    """
    _ensure_sqlite(cfg)
    return sqlite3.connect(cfg.path)


def _now_utc_iso() -> str:
    """Return the current UTC datetime as ISO string."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def init_store(cfg: StoreConfig) -> None:
    """
    Create the SQLite file and the ``imports`` table if needed.

    Raises
    ------
    ValueError
        If cfg.engine is not supported.
    sqlite3.Error
        If schema creation fails.
    """
    _ensure_sqlite(cfg)
    cfg.path.parent.mkdir(parents=True, exist_ok=True)

    conn = _connect(cfg)
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS imports (
                id              INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at      TEXT    NOT NULL,
                source_label    TEXT    NOT NULL,
                industry        TEXT    NOT NULL,
                annual_revenue  REAL    NOT NULL DEFAULT 0,
                months          INTEGER NOT NULL DEFAULT 0,
                record_json     TEXT    NOT NULL
            );
            """
        )
        conn.commit()
    finally:
        conn.close()


def save_record(
    cfg: StoreConfig,
    record: FinancialRecord,
    *,
    source_label: str,
    imported_at: datetime | None = None,
) -> int:
    """
    Save an imported record and return its id.

    Parameters
    ----------
    cfg:
        Store configuration.
    record:
        Record returned by the importer.
    source_label:
        Human-readable origin, e.g. the uploaded file path.
    imported_at:
        Timestamp of the import. Defaults to the current UTC time.
    """
    init_store(cfg)

    if imported_at is None:
        imported_at_iso = _now_utc_iso()
    else:
        imported_at_iso = imported_at.isoformat(timespec="seconds")

    conn = _connect(cfg)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            INSERT INTO imports (
                created_at,
                source_label,
                industry,
                annual_revenue,
                months,
                record_json
            )
            VALUES (?, ?, ?, ?, ?, ?);
            """,
            (
                imported_at_iso,
                source_label,
                record.industry,
                float(record.financial_data.annual_revenue),
                len(record.monthly_data),
                record.to_json(indent=None),
            ),
        )
        conn.commit()
        return int(cur.lastrowid)
    finally:
        conn.close()


def list_imports(cfg: StoreConfig) -> pd.DataFrame:
    """
    Return the stored imports, most recent first.

    Columns:
    - id
    - created_at
    - source_label
    - industry
    - annual_revenue
    - months
    """
    init_store(cfg)

    conn = _connect(cfg)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            SELECT id, created_at, source_label, industry, annual_revenue, months
              FROM imports
             ORDER BY id DESC;
            """
        )
        rows = cur.fetchall()
    finally:
        conn.close()

    if not rows:
        return pd.DataFrame(columns=_LIST_COLUMNS)

    df = pd.DataFrame(rows, columns=_LIST_COLUMNS)
    df["created_at"] = pd.to_datetime(df["created_at"])
    return df


def load_record(cfg: StoreConfig, import_id: int) -> FinancialRecord | None:
    """Return the record saved under ``import_id``, or None if missing."""
    init_store(cfg)

    conn = _connect(cfg)
    try:
        cur = conn.cursor()
        cur.execute("SELECT record_json FROM imports WHERE id = ?;", (import_id,))
        row = cur.fetchone()
    finally:
        conn.close()

    if row is None:
        return None
    return FinancialRecord.from_json(row[0])
