from __future__ import annotations

import json
from typing import Any, Mapping, Protocol, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall


class SettingsRepository(Protocol):
    """Free-form key -> JSON document store (table `settings`)."""

    def list_documents(self) -> Sequence[Mapping[str, Any]]:
        raise NotImplementedError

    def upsert(self, key: str, value: Mapping[str, Any]) -> None:
        raise NotImplementedError


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_documents(self) -> Sequence[Mapping[str, Any]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT `key`, value FROM settings ORDER BY `key`")
            return [json.loads(r["value"]) for r in fetchall(cur) if r.get("value")]

    def upsert(self, key: str, value: Mapping[str, Any]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(`key`, value) VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE value=VALUES(value)
                """,
                (key, json.dumps(dict(value))),
            )


class InMemorySettingsRepository(SettingsRepository):
    def __init__(self):
        self._docs: dict[str, dict[str, Any]] = {}

    def list_documents(self) -> Sequence[Mapping[str, Any]]:
        return [dict(self._docs[k]) for k in sorted(self._docs)]

    def upsert(self, key: str, value: Mapping[str, Any]) -> None:
        self._docs[key] = dict(value)
