from __future__ import annotations

from flask import Flask, abort, request, send_from_directory

from ..common.web import current_user_id, json_body, ok, preceptor_required, student_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import CertificateUpload
from .storage import LocalCertificateStorage


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<int:attendance_id>/certificate", methods=["POST"], endpoint="upload_certificate")
    @student_required
    def upload_certificate(attendance_id: int):
        file = request.files.get("file")
        if file is None or not file.filename:
            raise ValidationError("No file was sent")

        upload = CertificateUpload(
            filename=file.filename,
            content_type=file.mimetype or "",
            data=file.read(),
        )
        url = container.certificate_service.upload_certificate(
            attendance_id, upload, student_id=current_user_id()
        )
        return ok(
            {"certificateUrl": url},
            message="Certificate uploaded. Pending verification.",
            status=201,
        )

    @app.route("/api/certificates/pending", methods=["GET"], endpoint="pending_certificates")
    @preceptor_required
    def pending_certificates():
        return ok(container.certificate_service.get_pending_certificates())

    @app.route("/api/certificates/queue", methods=["GET"], endpoint="certificate_queue")
    @preceptor_required
    def certificate_queue():
        return ok(container.certificate_service.get_review_queue())

    @app.route("/api/certificates/<int:attendance_id>/approve", methods=["POST"], endpoint="approve_certificate")
    @preceptor_required
    def approve_certificate(attendance_id: int):
        record = container.certificate_service.approve_certificate(attendance_id, current_user_id())
        return ok(record, message="Certificate approved")

    @app.route("/api/certificates/<int:attendance_id>/reject", methods=["POST"], endpoint="reject_certificate")
    @preceptor_required
    def reject_certificate(attendance_id: int):
        reason = str(json_body().get("reason") or "")
        record = container.certificate_service.reject_certificate(attendance_id, current_user_id(), reason)
        return ok(record, message="Certificate rejected")

    prefix = app.config.get("UPLOAD_URL_PREFIX", "/uploads").rstrip("/")

    @app.route(f"{prefix}/<path:path>", methods=["GET"], endpoint="uploaded_file")
    def uploaded_file(path: str):
        storage = container.storage
        if not isinstance(storage, LocalCertificateStorage):
            abort(404)
        return send_from_directory(storage.root, path)
