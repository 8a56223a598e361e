from __future__ import annotations

from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from ..users.repository import UserRepository
from .model import NewsItem
from .repository import NewsRepository


class NewsService:
    """Use case: bulletin board. Posts reference their author by user id."""

    def __init__(self, news: NewsRepository, users: UserRepository):
        self._news = news
        self._users = users

    def list_news(self) -> Sequence[NewsItem]:
        return self._news.list_all()

    def get_news(self, news_id: int) -> NewsItem:
        item = self._news.get_by_id(int(news_id))
        if not item:
            raise NotFoundError("News item not found")
        return item

    def create_news(self, *, title: str, content: str, author_id: int) -> NewsItem:
        title = require_non_empty(title, "Title")
        content = require_non_empty(content, "Content")
        if not self._users.get_by_id(int(author_id)):
            raise NotFoundError("Author not found")

        news_id = self._news.create_news(title=title, content=content, author_id=int(author_id))
        return self.get_news(news_id)

    def update_news(self, *, news_id: int, title: str, content: str) -> NewsItem:
        """Overwrite title and content in place; author and date are kept."""
        self.get_news(news_id)
        self._news.update_news(
            news_id=int(news_id),
            title=require_non_empty(title, "Title"),
            content=require_non_empty(content, "Content"),
        )
        return self.get_news(news_id)

    def delete_news(self, news_id: int) -> None:
        if not self._news.delete_by_id(int(news_id)):
            raise NotFoundError("News item not found")
