from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, CertificateStatus


@dataclass(frozen=True)
class CertificateUpload:
    """A file received from the client, before validation."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ReviewQueueItem:
    """Pending certificate joined with student and course names (reviewer screen)."""

    attendance_id: int
    student_id: int
    student_name: str
    course_id: int
    course_name: str
    date: date
    status: AttendanceStatus
    certificate_url: str
    certificate_status: CertificateStatus
    student_course: Optional[str] = None
