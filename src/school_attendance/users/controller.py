from __future__ import annotations

from flask import Flask, session

from ..common.serialization import to_payload
from ..common.web import admin_required, current_user_id, json_body, login_required, ok, preceptor_required
from ..container import Container
from .service import SessionUser


def _session_payload(user: SessionUser) -> dict:
    payload = to_payload(user)
    payload.update(
        isAuthenticated=True,
        isAdmin=user.is_admin,
        isPreceptor=user.is_preceptor,
        isStudent=user.is_student,
    )
    return payload


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        s_user = container.auth_service.login(str(body.get("document") or ""))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return ok(_session_payload(s_user), message="Logged in")

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Logged out")

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(_session_payload(container.auth_service.current_user(current_user_id())))

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        return ok(container.user_service.list_users())

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @admin_required
    def create_user():
        body = json_body()
        user = container.user_service.create_user(
            name=body.get("name", ""),
            document=body.get("document", ""),
            role=body.get("role", ""),
            course=body.get("course"),
            avatar_url=body.get("avatar_url"),
        )
        return ok(user, message="User created", status=201)

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @admin_required
    def update_user(user_id: int):
        body = json_body()
        user = container.user_service.update_user(
            user_id=user_id,
            name=body.get("name", ""),
            document=body.get("document", ""),
            role=body.get("role", ""),
            course=body.get("course"),
            avatar_url=body.get("avatar_url"),
        )
        return ok(user, message="User updated")

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        container.user_service.delete_user(user_id)
        return ok({"id": user_id}, message="User deleted")

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @preceptor_required
    def list_students():
        return ok(container.user_service.list_students())

    @app.route("/api/course-groups", methods=["GET"], endpoint="list_course_groups")
    @preceptor_required
    def list_course_groups():
        return ok(list(container.user_service.list_course_groups()))
