from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_user_id, json_body, ok, preceptor_required, student_required
from ..container import Container


def _course_fields(body: dict) -> dict:
    return {
        "name": body.get("name", ""),
        "subject": body.get("subject", ""),
        "classroom": body.get("classroom"),
        "schedule": body.get("schedule"),
        "max_absences": body.get("max_absences"),
        "students": body.get("students") or [],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/courses", methods=["GET"], endpoint="list_courses")
    @preceptor_required
    def list_courses():
        return ok(container.course_service.list_courses())

    @app.route("/api/courses/<int:course_id>", methods=["GET"], endpoint="get_course")
    @preceptor_required
    def get_course(course_id: int):
        return ok(container.course_service.get_course(course_id))

    @app.route("/api/courses", methods=["POST"], endpoint="create_course")
    @admin_required
    def create_course():
        course = container.course_service.create_course(**_course_fields(json_body()))
        return ok(course, message="Course created", status=201)

    @app.route("/api/courses/<int:course_id>", methods=["PUT"], endpoint="update_course")
    @admin_required
    def update_course(course_id: int):
        body = json_body()
        course = container.course_service.update_course(
            course_id=course_id,
            icon_url=body.get("icon_url"),
            **_course_fields(body),
        )
        return ok(course, message="Course updated")

    @app.route("/api/courses/<int:course_id>", methods=["DELETE"], endpoint="delete_course")
    @admin_required
    def delete_course(course_id: int):
        container.course_service.delete_course(course_id)
        return ok({"id": course_id}, message="Course deleted")

    @app.route("/api/subjects", methods=["GET"], endpoint="list_subjects")
    @preceptor_required
    def list_subjects():
        return ok(list(container.course_service.list_subject_names()))

    @app.route("/api/me/courses", methods=["GET"], endpoint="my_courses")
    @student_required
    def my_courses():
        return ok(container.course_service.get_courses_for_student(current_user_id()))
