from __future__ import annotations

from flask import Flask

from ..common.validators import require_int
from ..common.web import ok, preceptor_required, query_arg
from ..container import Container
from ..core.constants import DEFAULT_TOP_ABSENTEES


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/absences", methods=["GET"], endpoint="absence_summary")
    @preceptor_required
    def absence_summary():
        return ok(container.report_service.get_attendance_summary_for_all_students())

    @app.route("/api/reports/top", methods=["GET"], endpoint="top_absentees")
    @preceptor_required
    def top_absentees():
        limit = require_int(query_arg("limit") or DEFAULT_TOP_ABSENTEES, "limit", minimum=1)
        return ok(container.report_service.get_top_absentees(limit))
