from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, CertificateStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, on_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(
        self,
        student_id: int,
        *,
        statuses: Optional[Sequence[AttendanceStatus]] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest date first."""

        raise NotImplementedError

    def upsert_status(
        self,
        *,
        student_id: int,
        course_id: int,
        on_date: date,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        """Insert, or overwrite the status of, the (student, course, date) record.

        Certificate fields of an existing record are kept.
        """

        raise NotImplementedError

    def delete_for_student_date(self, *, student_id: int, on_date: date, course_ids: Sequence[int]) -> int:
        raise NotImplementedError

    def delete_for_course(self, course_id: int) -> int:
        raise NotImplementedError

    def count_for_student(self, student_id: int, status: AttendanceStatus) -> int:
        """Count-only query, no rows fetched."""

        raise NotImplementedError

    def attach_certificate(self, *, attendance_id: int, certificate_url: str) -> bool:
        """Set the file URL, mark it PENDING and clear any earlier decision."""

        raise NotImplementedError

    def decide_certificate(
        self,
        *,
        attendance_id: int,
        certificate_status: CertificateStatus,
        verified_by: int,
        verified_at: datetime,
        rejection_reason: Optional[str] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> bool:
        """Record a review decision; `status` overrides the attendance status when given."""

        raise NotImplementedError

    def list_by_certificate_status(self, certificate_status: CertificateStatus) -> Sequence[AttendanceRecord]:
        """Records holding a certificate file in the given state, newest date first."""

        raise NotImplementedError
