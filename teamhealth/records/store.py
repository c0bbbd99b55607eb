"""Record storage — the table that holds team health checks.

Two backends share the ``RecordStore`` interface:

  SQLiteRecordStore    local SQLite file, table created on first use
  SupabaseRecordStore  hosted Postgres table reached over PostgREST

Both raise ``StoreError`` with the store's own message when an operation is
rejected. Neither retries.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx

from teamhealth.records.errors import StoreError
from teamhealth.records.models import COLUMNS, HealthCheckRecord, NewHealthCheck

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "team-health"


class RecordStore:
    """Interface shared by the store backends."""

    name = "abstract"

    def insert(self, record: NewHealthCheck) -> HealthCheckRecord:
        raise NotImplementedError

    def select_all(self) -> list[HealthCheckRecord]:
        """All records, newest ``created_at`` first."""
        raise NotImplementedError

    def close(self) -> None:
        pass


# ── SQLite ───────────────────────────────────────────────────────────────────


class SQLiteRecordStore(RecordStore):
    """SQLite-backed record storage."""

    name = "sqlite"

    def __init__(self, db_path: Path | str, table: str = DEFAULT_TABLE) -> None:
        self._db_path = Path(db_path)
        self._table = table.replace('"', '""')
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS "{self._table}" (
                    id          INTEGER PRIMARY KEY AUTOINCREMENT,
                    name        TEXT NOT NULL,
                    feeling     TEXT NOT NULL,
                    date        TEXT NOT NULL,
                    created_at  TEXT NOT NULL
                )
            """)
            conn.execute(f"""
                CREATE INDEX IF NOT EXISTS "idx_{self._table}_created_at"
                ON "{self._table}" (created_at)
            """)

    def insert(self, record: NewHealthCheck) -> HealthCheckRecord:
        row = record.to_dict()
        row["created_at"] = datetime.now(timezone.utc).isoformat(timespec="microseconds")
        try:
            with self._conn() as conn:
                cursor = conn.execute(f"""
                    INSERT INTO "{self._table}" (name, feeling, date, created_at)
                    VALUES (:name, :feeling, :date, :created_at)
                """, row)
                new_id = cursor.lastrowid
                stored = conn.execute(
                    f'SELECT {", ".join(COLUMNS)} FROM "{self._table}" WHERE id = ?',
                    (new_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        if stored is None:
            raise StoreError("Inserted row could not be read back")
        return HealthCheckRecord.from_row(dict(stored))

    def select_all(self) -> list[HealthCheckRecord]:
        try:
            with self._conn() as conn:
                rows = conn.execute(
                    f'SELECT {", ".join(COLUMNS)} FROM "{self._table}" '
                    "ORDER BY created_at DESC, id DESC"
                ).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return [HealthCheckRecord.from_row(dict(r)) for r in rows]

    def close(self) -> None:
        """No-op — connections are created per-call."""
        pass


# ── Supabase (PostgREST) ─────────────────────────────────────────────────────


class SupabaseRecordStore(RecordStore):
    """Hosted table reached through the Supabase REST endpoint.

    One httpx client is held for the store's lifetime; call ``close()`` at
    shutdown.
    """

    name = "supabase"

    def __init__(
        self,
        url: str,
        key: str,
        table: str = DEFAULT_TABLE,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._path = f"/rest/v1/{table}"
        self._client = httpx.Client(
            base_url=url.rstrip("/"),
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return resp.text or f"HTTP {resp.status_code}"
        if isinstance(body, dict):
            return str(body.get("message") or body.get("error") or body)
        return str(body)

    def _request(self, method: str, **kwargs: Any) -> Any:
        try:
            resp = self._client.request(method, self._path, **kwargs)
        except httpx.TimeoutException as exc:
            raise StoreError("Store request timed out") from exc
        except httpx.HTTPError as exc:
            raise StoreError(f"Store unreachable: {exc}") from exc
        if resp.status_code >= 400:
            raise StoreError(self._error_message(resp))
        return resp.json()

    def insert(self, record: NewHealthCheck) -> HealthCheckRecord:
        data = self._request(
            "POST",
            json=[record.to_dict()],
            params={"select": "*"},
            headers={"Prefer": "return=representation"},
        )
        if not isinstance(data, list) or len(data) != 1:
            raise StoreError("Expected exactly one inserted row")
        return HealthCheckRecord.from_row(data[0])

    def select_all(self) -> list[HealthCheckRecord]:
        data = self._request(
            "GET",
            params={"select": ",".join(COLUMNS), "order": "created_at.desc"},
        )
        if not data:
            return []
        return [HealthCheckRecord.from_row(r) for r in data]

    def close(self) -> None:
        self._client.close()


def build_store(settings: Any) -> RecordStore:
    """Construct the backend named by ``settings.store_backend``."""
    backend = settings.store_backend.lower()
    if backend == "sqlite":
        return SQLiteRecordStore(settings.sqlite_path, table=settings.store_table)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError("supabase backend needs SUPABASE_URL and SUPABASE_KEY")
        return SupabaseRecordStore(
            settings.supabase_url,
            settings.supabase_key,
            table=settings.store_table,
            timeout=settings.store_timeout,
        )
    raise ValueError(f"Unknown store backend: {settings.store_backend}")
