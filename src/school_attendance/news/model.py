from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class NewsItem:
    """Bulletin post; `author` is the author's display name resolved at read time."""

    news_id: int
    title: str
    content: str
    author_id: int
    author: str
    created_at: datetime
