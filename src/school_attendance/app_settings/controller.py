from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="get_settings")
    @login_required
    def get_settings():
        return ok(container.settings_service.get_settings())

    @app.route("/api/settings", methods=["PUT"], endpoint="update_settings")
    @admin_required
    def update_settings():
        # Stored verbatim: keys are not converted.
        values = request.get_json(silent=True)
        return ok(container.settings_service.update_settings(values), message="Settings saved")
