import sqlite3

import pytest

from finantech.db import (
    KEY_PAYABLES,
    KEY_SELECTED_COMPANY,
    DatabaseConfig,
    init_database,
    list_snapshot_keys,
    load_snapshot,
    save_snapshot,
)


def make_tmp_db_cfg(tmp_path) -> DatabaseConfig:
    """Helper to build a DatabaseConfig pointing to a temporary SQLite file."""
    db_path = tmp_path / "db" / "test_db.sqlite"
    return DatabaseConfig(engine="sqlite", path=db_path)


def test_init_database_creates_file_and_is_idempotent(tmp_path):
    """init_database should create the SQLite file and be safe to call twice."""
    cfg = make_tmp_db_cfg(tmp_path)

    assert not cfg.path.exists()
    init_database(cfg)
    init_database(cfg)
    assert cfg.path.exists()
    assert list_snapshot_keys(cfg) == []


def test_save_and_load_snapshot(tmp_path):
    """A saved value is read back unchanged."""
    cfg = make_tmp_db_cfg(tmp_path)
    records = [{"id": "t1", "description": "Aluguel", "amount": 1500.0}]

    save_snapshot(cfg, KEY_PAYABLES, records)

    assert load_snapshot(cfg, KEY_PAYABLES) == records
    assert list_snapshot_keys(cfg) == [KEY_PAYABLES]


def test_save_snapshot_replaces_whole_value(tmp_path):
    """Saving under an existing key replaces the previous document."""
    cfg = make_tmp_db_cfg(tmp_path)

    save_snapshot(cfg, KEY_PAYABLES, [{"id": "a"}, {"id": "b"}])
    save_snapshot(cfg, KEY_PAYABLES, [{"id": "c"}])

    assert load_snapshot(cfg, KEY_PAYABLES) == [{"id": "c"}]


def test_load_snapshot_missing_key_returns_default(tmp_path):
    """Unknown keys fall back to the given default."""
    cfg = make_tmp_db_cfg(tmp_path)

    assert load_snapshot(cfg, KEY_SELECTED_COMPANY) is None
    assert load_snapshot(cfg, KEY_PAYABLES, default=[]) == []


def test_load_snapshot_corrupted_payload_returns_default(tmp_path):
    """Undecodable payloads are ignored with the default value."""
    cfg = make_tmp_db_cfg(tmp_path)
    init_database(cfg)

    conn = sqlite3.connect(cfg.path)
    try:
        conn.execute(
            "INSERT INTO snapshots (key, payload, updated_at) VALUES (?, ?, ?);",
            (KEY_PAYABLES, "{not json", "2024-01-01T00:00:00+00:00"),
        )
        conn.commit()
    finally:
        conn.close()

    assert load_snapshot(cfg, KEY_PAYABLES, default=[]) == []


def test_unicode_is_preserved(tmp_path):
    """Accented text survives the JSON round-trip."""
    cfg = make_tmp_db_cfg(tmp_path)

    save_snapshot(cfg, KEY_SELECTED_COMPANY, "Construções São João")

    assert load_snapshot(cfg, KEY_SELECTED_COMPANY) == "Construções São João"


def test_unsupported_engine_is_rejected(tmp_path):
    """Only the sqlite engine is supported."""
    cfg = DatabaseConfig(engine="postgres", path=tmp_path / "x.sqlite")

    with pytest.raises(ValueError, match="Unsupported database engine"):
        init_database(cfg)
