# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.


"""
Database layer for FinanTech.

FinanTech persists its state as key-value snapshots: each entity list
(payables, receivables, contacts, ...) is serialized as a whole JSON array
and stored under a fixed key after every mutation. There is no partial or
incremental persistence and no referential integrity across keys; deletion
guards are enforced by the service layer (see `workspace.py`).

------------------------------------------------------------------------------
Schema Overview
------------------------------------------------------------------------------

snapshots
   One row per key.

   Columns:
   - key         TEXT PRIMARY KEY   -- e.g. "finantech_payables"
   - payload     TEXT NOT NULL      -- JSON document (array or object)
   - updated_at  TEXT NOT NULL      -- ISO datetime, UTC

------------------------------------------------------------------------------
SQLite Notes
------------------------------------------------------------------------------

- All timestamps are stored as ISO-8601 text (UTC).
- Writes are single-statement upserts; a snapshot is either fully written or
  left untouched.
- The schema is not versioned: `init_database` only creates what is missing.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Snapshot keys
# ---------------------------------------------------------------------------

KEY_PAYABLES = "finantech_payables"
KEY_RECEIVABLES = "finantech_receivables"
KEY_CONTACTS = "finantech_contacts"
KEY_PROPERTIES = "finantech_properties"
KEY_PROJECTS = "finantech_projects"
KEY_PROPOSALS = "finantech_proposals"
KEY_BANK_ACCOUNTS = "finantech_bank_accounts"
KEY_BANK_TRANSACTIONS = "finantech_bank_transactions"
KEY_SYSTEM_TRANSACTIONS = "finantech_system_transactions"
KEY_ADJUSTMENT_INDEXES = "finantech_adjustment_indexes"
KEY_SELECTED_COMPANY = "finantech_selected_company"


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Database configuration for FinanTech.

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


def _ensure_sqlite(cfg: DatabaseConfig) -> None:
    """Raise if the configuration does not refer to a supported engine."""
    if cfg.engine.lower() != "sqlite":
        msg = (
            f"Unsupported database engine: {cfg.engine!r}. "
            "Only 'sqlite' is supported for now."
        )
        raise ValueError(msg)


def _connect(cfg: DatabaseConfig) -> sqlite3.Connection:
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


def init_database(cfg: DatabaseConfig) -> None:
    """
    Initialize the database schema if needed.

    - Creates the SQLite file (and its parent directory) if missing.
    - Creates the `snapshots` table if missing.
    - Idempotent: calling it multiple times is safe.

    Raises
    ------
    ValueError
        If cfg.engine is not supported.
    sqlite3.Error
        If schema creation fails.
    """
    cfg.path.parent.mkdir(parents=True, exist_ok=True)

    conn = _connect(cfg)
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS snapshots (
                key         TEXT PRIMARY KEY,
                payload     TEXT NOT NULL,
                updated_at  TEXT NOT NULL
            );
            """
        )
        conn.commit()
    finally:
        conn.close()


def save_snapshot(cfg: DatabaseConfig, key: str, value: Any) -> None:
    """
    Store `value` as a JSON document under `key`, replacing any previous one.

    Parameters
    ----------
    cfg:
        Database configuration.
    key:
        Snapshot key (see the KEY_* constants).
    value:
        JSON-serializable value, typically a list of dictionaries.

    Raises
    ------
    TypeError
        If `value` is not JSON-serializable.
    sqlite3.Error
        If the write fails.
    """
    payload = json.dumps(value, ensure_ascii=False)
    init_database(cfg)

    conn = _connect(cfg)
    try:
        conn.execute(
            """
            INSERT INTO snapshots (key, payload, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                payload    = excluded.payload,
                updated_at = excluded.updated_at;
            """,
            (key, payload, _now_utc_iso()),
        )
        conn.commit()
    finally:
        conn.close()

    logger.debug("Saved snapshot %s (%d bytes)", key, len(payload))


def load_snapshot(cfg: DatabaseConfig, key: str, default: Any = None) -> Any:
    """
    Load the JSON document stored under `key`.

    Returns `default` when the key does not exist or when the stored payload
    cannot be decoded (the latter is logged as a warning).
    """
    init_database(cfg)

    conn = _connect(cfg)
    try:
        cur = conn.execute("SELECT payload FROM snapshots WHERE key = ?;", (key,))
        row = cur.fetchone()
    finally:
        conn.close()

    if row is None:
        return default

    try:
        return json.loads(row[0])
    except json.JSONDecodeError:
        logger.warning("Failed to decode snapshot %s, using default value.", key)
        return default


def list_snapshot_keys(cfg: DatabaseConfig) -> list[str]:
    """Return the stored snapshot keys, sorted alphabetically."""
    init_database(cfg)

    conn = _connect(cfg)
    try:
        cur = conn.execute("SELECT key FROM snapshots ORDER BY key;")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
