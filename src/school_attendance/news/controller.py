from __future__ import annotations

from flask import Flask

from ..common.web import current_user_id, json_body, login_required, ok, preceptor_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/news", methods=["GET"], endpoint="list_news")
    @login_required
    def list_news():
        return ok(container.news_service.list_news())

    @app.route("/api/news", methods=["POST"], endpoint="create_news")
    @preceptor_required
    def create_news():
        body = json_body()
        item = container.news_service.create_news(
            title=body.get("title", ""),
            content=body.get("content", ""),
            author_id=current_user_id(),
        )
        return ok(item, message="News item created", status=201)

    @app.route("/api/news/<int:news_id>", methods=["PUT"], endpoint="update_news")
    @preceptor_required
    def update_news(news_id: int):
        body = json_body()
        item = container.news_service.update_news(
            news_id=news_id,
            title=body.get("title", ""),
            content=body.get("content", ""),
        )
        return ok(item, message="News item updated")

    @app.route("/api/news/<int:news_id>", methods=["DELETE"], endpoint="delete_news")
    @preceptor_required
    def delete_news(news_id: int):
        container.news_service.delete_news(news_id)
        return ok({"id": news_id}, message="News item deleted")
