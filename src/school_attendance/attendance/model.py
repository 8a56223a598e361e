from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, CertificateStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one non-present mark for (student, course, date).

    Certificate fields only carry meaning while status is ABSENT or LATE,
    or JUSTIFIED after an approval.
    """

    attendance_id: int
    student_id: int
    course_id: int
    date: date
    status: AttendanceStatus
    certificate_url: Optional[str] = None
    certificate_status: Optional[CertificateStatus] = None
    verified_by: Optional[int] = None
    verified_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None


@dataclass(frozen=True)
class DailyRosterRow:
    """Read-model for the daily "take attendance" screen."""

    student_id: int
    name: str
    status: AttendanceStatus
    course: Optional[str] = None
    avatar_url: Optional[str] = None


@dataclass(frozen=True)
class CourseAttendanceSummary:
    """Read-model for the student dashboard, one per enrolled course."""

    course_id: int
    course_name: str
    absences: int
    justified: int
    lates: int
    max_absences: int
    usage_percent: float
    level: str
