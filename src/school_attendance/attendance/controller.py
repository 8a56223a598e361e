from __future__ import annotations

from flask import Flask

from ..common.web import current_user_id, json_body, ok, preceptor_required, query_arg, student_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_for_date")
    @preceptor_required
    def attendance_for_date():
        on_date = query_arg("date", required=True)
        return ok(container.attendance_service.get_attendance_for_date(on_date))

    @app.route("/api/attendance", methods=["POST"], endpoint="set_attendance")
    @preceptor_required
    def set_attendance():
        body = json_body()
        if body.get("student_id") in (None, ""):
            raise ValidationError("studentId is required")
        try:
            student_id = int(body["student_id"])
            course_id = int(body["course_id"]) if body.get("course_id") not in (None, "") else None
        except (TypeError, ValueError):
            raise ValidationError("studentId and courseId must be integers")

        records = container.attendance_service.set_attendance(
            student_id,
            body.get("date"),
            body.get("status"),
            course_id,
        )
        return ok(records, message="Attendance saved")

    @app.route("/api/attendance/roster", methods=["GET"], endpoint="daily_roster")
    @preceptor_required
    def daily_roster():
        on_date = query_arg("date", required=True)
        group = query_arg("group")
        return ok(container.attendance_service.get_daily_roster(on_date, group))

    @app.route("/api/attendance/roster", methods=["POST"], endpoint="save_daily_roster")
    @preceptor_required
    def save_daily_roster():
        body = json_body()
        statuses = body.get("statuses")
        if not isinstance(statuses, dict):
            raise ValidationError("statuses must map student ids to present/absent")
        try:
            desired = {int(sid): status for sid, status in statuses.items()}
        except (TypeError, ValueError):
            raise ValidationError("statuses must map student ids to present/absent")

        changed = container.attendance_service.save_daily_roster(body.get("date"), desired)
        message = "Attendance saved" if changed else "No changes to save"
        return ok({"changed": changed}, message=message)

    @app.route("/api/me/attendance", methods=["GET"], endpoint="my_attendance")
    @student_required
    def my_attendance():
        return ok(container.attendance_service.get_attendance_for_student(current_user_id()))

    @app.route("/api/me/absences", methods=["GET"], endpoint="my_absences")
    @student_required
    def my_absences():
        return ok(container.attendance_service.get_absences_for_student(current_user_id()))

    @app.route("/api/me/summary", methods=["GET"], endpoint="my_summary")
    @student_required
    def my_summary():
        return ok(container.attendance_service.get_course_summaries(current_user_id()))
