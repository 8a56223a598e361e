from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import UNKNOWN_AUTHOR
from ..users.repository import UserRepository
from .model import NewsItem
from .repository import NewsRepository


@dataclass(frozen=True)
class _StoredNews:
    news_id: int
    title: str
    content: str
    author_id: int
    created_at: datetime


class InMemoryNewsRepository(NewsRepository):
    """Stores author ids only; names come from the user repository on read."""

    def __init__(self, users: UserRepository, *, clock: Callable[[], datetime] = now_utc):
        self._users = users
        self._clock = clock
        self._by_id: dict[int, _StoredNews] = {}
        self._next_id = 1

    def _resolve(self, row: _StoredNews) -> NewsItem:
        author = self._users.get_by_id(row.author_id)
        return NewsItem(
            news_id=row.news_id,
            title=row.title,
            content=row.content,
            author_id=row.author_id,
            author=author.name if author else UNKNOWN_AUTHOR,
            created_at=row.created_at,
        )

    def get_by_id(self, news_id: int) -> Optional[NewsItem]:
        row = self._by_id.get(int(news_id))
        return self._resolve(row) if row else None

    def list_all(self) -> Sequence[NewsItem]:
        rows = sorted(self._by_id.values(), key=lambda r: (r.created_at, r.news_id), reverse=True)
        return [self._resolve(r) for r in rows]

    def create_news(
        self,
        *,
        title: str,
        content: str,
        author_id: int,
        created_at: Optional[datetime] = None,
    ) -> int:
        nid = self._next_id
        self._next_id += 1
        self._by_id[nid] = _StoredNews(
            news_id=nid,
            title=title,
            content=content,
            author_id=int(author_id),
            created_at=created_at or self._clock(),
        )
        return nid

    def update_news(self, *, news_id: int, title: str, content: str) -> bool:
        row = self._by_id.get(int(news_id))
        if not row:
            return False
        self._by_id[row.news_id] = replace(row, title=title, content=content)
        return True

    def delete_by_id(self, news_id: int) -> bool:
        return self._by_id.pop(int(news_id), None) is not None
