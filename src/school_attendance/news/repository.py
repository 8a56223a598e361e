from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewsItem


class NewsRepository(Protocol):
    def get_by_id(self, news_id: int) -> Optional[NewsItem]:
        raise NotImplementedError

    def list_all(self) -> Sequence[NewsItem]:
        """Newest first, author names joined in."""

        raise NotImplementedError

    def create_news(self, *, title: str, content: str, author_id: int) -> int:
        raise NotImplementedError

    def update_news(self, *, news_id: int, title: str, content: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, news_id: int) -> bool:
        raise NotImplementedError
