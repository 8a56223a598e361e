from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import UNKNOWN_AUTHOR
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewsItem
from .repository import NewsRepository

_SELECT = """
    SELECT n.news_id, n.title, n.content, n.author_id, n.created_at, u.name AS author
    FROM news n
    LEFT JOIN users u ON u.user_id = n.author_id
"""


def _to_item(r: dict) -> NewsItem:
    return NewsItem(
        news_id=int(r["news_id"]),
        title=r["title"],
        content=r["content"],
        author_id=int(r["author_id"]),
        author=r.get("author") or UNKNOWN_AUTHOR,
        created_at=r["created_at"],
    )


class MySQLNewsRepository(NewsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, news_id: int) -> Optional[NewsItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE n.news_id=%s", (int(news_id),))
            r = fetchone(cur)
            return _to_item(r) if r else None

    def list_all(self) -> Sequence[NewsItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY n.created_at DESC, n.news_id DESC")
            return [_to_item(r) for r in fetchall(cur)]

    def create_news(self, *, title: str, content: str, author_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO news(title, content, author_id) VALUES(%s,%s,%s)",
                (title, content, int(author_id)),
            )
            return int(cur.lastrowid)

    def update_news(self, *, news_id: int, title: str, content: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE news SET title=%s, content=%s WHERE news_id=%s",
                (title, content, int(news_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, news_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM news WHERE news_id=%s", (int(news_id),))
            return cur.rowcount > 0
