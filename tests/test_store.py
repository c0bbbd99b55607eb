"""Tests for the record store backends."""

from __future__ import annotations

import json
import sqlite3
from types import SimpleNamespace

import httpx
import pytest

from teamhealth.records.errors import StoreError
from teamhealth.records.models import HealthCheckRecord, NewHealthCheck
from teamhealth.records.store import (
    SQLiteRecordStore,
    SupabaseRecordStore,
    build_store,
)


def _check(name: str = "Ana", feeling: str = "Good") -> NewHealthCheck:
    return NewHealthCheck(name=name, feeling=feeling, date="2024-06-01T09:30:00.000Z")


# ── SQLite ───────────────────────────────────────────────────────────────────


class TestSQLiteRecordStore:
    def test_insert_assigns_id_and_created_at(self, store) -> None:
        record = store.insert(_check())
        assert isinstance(record, HealthCheckRecord)
        assert record.id
        assert record.created_at
        assert record.name == "Ana"
        assert record.date == "2024-06-01T09:30:00.000Z"

    def test_ids_are_unique(self, store) -> None:
        ids = {store.insert(_check()).id for _ in range(5)}
        assert len(ids) == 5

    def test_empty_store(self, store) -> None:
        assert store.select_all() == []

    def test_newest_first(self, store) -> None:
        for name in ("t1", "t2", "t3"):
            store.insert(_check(name=name))
        assert [r.name for r in store.select_all()] == ["t3", "t2", "t1"]

    def test_select_only_record_columns(self, store) -> None:
        store.insert(_check())
        assert set(store.select_all()[0].to_dict()) == {"id", "name", "feeling", "date", "created_at"}

    def test_persists_across_instances(self, tmp_path) -> None:
        path = tmp_path / "shared.db"
        SQLiteRecordStore(path).insert(_check())
        assert len(SQLiteRecordStore(path).select_all()) == 1

    def test_custom_table(self, tmp_path) -> None:
        path = tmp_path / "custom.db"
        s = SQLiteRecordStore(path, table="checks")
        s.insert(_check())
        with sqlite3.connect(path) as conn:
            assert conn.execute('SELECT COUNT(*) FROM "checks"').fetchone()[0] == 1

    def test_sqlite_error_becomes_store_error(self, tmp_path) -> None:
        path = tmp_path / "broken.db"
        s = SQLiteRecordStore(path)
        with sqlite3.connect(path) as conn:
            conn.execute('DROP TABLE "team-health"')
        with pytest.raises(StoreError, match="no such table"):
            s.select_all()
        with pytest.raises(StoreError):
            s.insert(_check())


# ── Supabase ─────────────────────────────────────────────────────────────────


def _supabase(handler) -> SupabaseRecordStore:
    return SupabaseRecordStore(
        "https://example.supabase.co/",
        "anon-key",
        transport=httpx.MockTransport(handler),
    )


ROW = {
    "id": 7,
    "name": "Ana",
    "feeling": "Good",
    "date": "2024-06-01T09:30:00+00:00",
    "created_at": "2024-06-01T09:31:02.123456+00:00",
}


class TestSupabaseRecordStore:
    def test_insert(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json=[ROW])

        record = _supabase(handler).insert(_check())
        assert record.id == 7
        assert record.created_at == ROW["created_at"]

        req = seen[0]
        assert req.method == "POST"
        assert req.url.path == "/rest/v1/team-health"
        assert req.headers["apikey"] == "anon-key"
        assert req.headers["Authorization"] == "Bearer anon-key"
        assert req.headers["Prefer"] == "return=representation"
        assert json.loads(req.content) == [_check().to_dict()]

    def test_select_all(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[ROW, {**ROW, "id": 6}])

        records = _supabase(handler).select_all()
        assert [r.id for r in records] == [7, 6]
        params = seen[0].url.params
        assert params["select"] == "id,name,feeling,date,created_at"
        assert params["order"] == "created_at.desc"

    def test_select_all_empty(self) -> None:
        store = _supabase(lambda request: httpx.Response(200, json=[]))
        assert store.select_all() == []

    def test_error_message_from_store(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400, json={"code": "42P01", "message": 'relation "team-health" does not exist'}
            )

        with pytest.raises(StoreError, match="does not exist"):
            _supabase(handler).select_all()

    def test_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(StoreError, match="unreachable"):
            _supabase(handler).insert(_check())

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(StoreError, match="timed out"):
            _supabase(handler).select_all()

    def test_insert_without_row(self) -> None:
        store = _supabase(lambda request: httpx.Response(201, json=[]))
        with pytest.raises(StoreError):
            store.insert(_check())


# ── build_store ──────────────────────────────────────────────────────────────


def _settings(**overrides) -> SimpleNamespace:
    base = {
        "store_backend": "sqlite",
        "store_table": "team-health",
        "sqlite_path": "",
        "supabase_url": "",
        "supabase_key": "",
        "store_timeout": 5.0,
    }
    base.update(overrides)
    return SimpleNamespace(**base)


class TestBuildStore:
    def test_sqlite(self, tmp_path) -> None:
        store = build_store(_settings(sqlite_path=str(tmp_path / "x.db")))
        assert isinstance(store, SQLiteRecordStore)

    def test_supabase(self) -> None:
        store = build_store(_settings(
            store_backend="Supabase", supabase_url="https://x.supabase.co", supabase_key="k",
        ))
        assert isinstance(store, SupabaseRecordStore)
        store.close()

    def test_supabase_needs_credentials(self) -> None:
        with pytest.raises(ValueError, match="SUPABASE_URL"):
            build_store(_settings(store_backend="supabase"))

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown store backend"):
            build_store(_settings(store_backend="mongo"))
