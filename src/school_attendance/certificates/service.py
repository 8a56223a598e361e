from __future__ import annotations

import io
import logging
import time
from typing import Callable, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc
from ..core.constants import CERTIFICATE_CONTENT_TYPES, CERTIFICATE_PREFIX, MAX_CERTIFICATE_BYTES
from ..core.enums import AttendanceStatus, CertificateStatus
from ..core.exceptions import AuthorizationError, NotFoundError, StorageError, ValidationError
from ..courses.repository import CourseRepository
from ..users.repository import UserRepository
from .model import CertificateUpload, ReviewQueueItem
from .storage import CertificateStorage

logger = logging.getLogger(__name__)

# Certificates can be attached only to these statuses.
CERTIFIABLE_STATUSES = (AttendanceStatus.ABSENT, AttendanceStatus.LATE)


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def validate_upload(upload: CertificateUpload) -> str:
    """Check type, size and content of a certificate file; return its extension."""
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    ext = CERTIFICATE_CONTENT_TYPES.get(content_type)
    if not ext:
        raise ValidationError("Invalid format. Only images (JPG, PNG) or PDF are allowed")
    if upload.size == 0:
        raise ValidationError("The file is empty")
    if upload.size > MAX_CERTIFICATE_BYTES:
        raise ValidationError("The file is too large. Maximum 5MB")

    if ext == "pdf":
        if not upload.data.startswith(b"%PDF-"):
            raise ValidationError("The file is not a valid PDF")
    else:
        try:
            with Image.open(io.BytesIO(upload.data)) as img:
                img.verify()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError):
            raise ValidationError("The file is not a valid image")
    return ext


class CertificateService:
    """Use case: certificate upload (student) and review (preceptor/admin).

    no certificate -> pending -> approved (attendance becomes justified)
                              -> rejected (student may upload again)
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        storage: CertificateStorage,
        users: UserRepository,
        courses: CourseRepository,
        *,
        clock: Callable = now_utc,
        millis: Callable[[], int] = epoch_millis,
    ):
        self._attendance = attendance
        self._storage = storage
        self._users = users
        self._courses = courses
        self._clock = clock
        self._millis = millis

    def _get_record(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def upload_certificate(
        self,
        attendance_id: int,
        upload: CertificateUpload,
        *,
        student_id: Optional[int] = None,
    ) -> str:
        """Store the file and mark the certificate pending; returns its public URL."""
        ext = validate_upload(upload)

        record = self._get_record(attendance_id)
        if student_id is not None and record.student_id != int(student_id):
            raise AuthorizationError("This absence belongs to another student")
        if record.status not in CERTIFIABLE_STATUSES:
            raise ValidationError("Certificates can only be attached to absences or lates")
        if record.certificate_status in (CertificateStatus.PENDING, CertificateStatus.APPROVED):
            raise ValidationError("A certificate was already submitted for this absence")

        path = f"{CERTIFICATE_PREFIX}/{record.attendance_id}_{self._millis()}.{ext}"
        self._storage.upload(path, upload.data, upload.content_type)
        url = self._storage.public_url(path)
        if not url:
            raise StorageError("Could not resolve the file URL")

        self._attendance.attach_certificate(attendance_id=record.attendance_id, certificate_url=url)
        logger.info("Certificate uploaded for attendance %s", record.attendance_id)
        return url

    def approve_certificate(self, attendance_id: int, verifier_id: int) -> AttendanceRecord:
        record = self._get_record(attendance_id)
        self._attendance.decide_certificate(
            attendance_id=record.attendance_id,
            certificate_status=CertificateStatus.APPROVED,
            verified_by=int(verifier_id),
            verified_at=self._clock(),
            status=AttendanceStatus.JUSTIFIED,
        )
        logger.info("Certificate approved: attendance=%s verifier=%s", record.attendance_id, verifier_id)
        return self._get_record(record.attendance_id)

    def reject_certificate(self, attendance_id: int, verifier_id: int, reason: str) -> AttendanceRecord:
        if not reason or not reason.strip():
            raise ValidationError("A rejection reason is required")

        record = self._get_record(attendance_id)
        self._attendance.decide_certificate(
            attendance_id=record.attendance_id,
            certificate_status=CertificateStatus.REJECTED,
            verified_by=int(verifier_id),
            verified_at=self._clock(),
            rejection_reason=reason.strip(),
        )
        logger.info("Certificate rejected: attendance=%s verifier=%s", record.attendance_id, verifier_id)
        return self._get_record(record.attendance_id)

    def get_pending_certificates(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_certificate_status(CertificateStatus.PENDING)

    def get_review_queue(self) -> list[ReviewQueueItem]:
        pending = self.get_pending_certificates()
        if not pending:
            return []

        users = {u.user_id: u for u in self._users.list_all()}
        courses = {c.course_id: c for c in self._courses.list_by_ids(sorted({r.course_id for r in pending}))}

        out: list[ReviewQueueItem] = []
        for r in pending:
            student = users.get(r.student_id)
            course = courses.get(r.course_id)
            out.append(
                ReviewQueueItem(
                    attendance_id=r.attendance_id,
                    student_id=r.student_id,
                    student_name=student.name if student else "Unknown student",
                    course_id=r.course_id,
                    course_name=course.name if course else "Unknown course",
                    date=r.date,
                    status=r.status,
                    certificate_url=r.certificate_url,
                    certificate_status=r.certificate_status,
                    student_course=student.course if student else None,
                )
            )
        return out
