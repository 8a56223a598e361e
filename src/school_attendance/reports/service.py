from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_TOP_ABSENTEES, LATE_WEIGHT
from ..core.enums import AttendanceStatus, Role
from ..users.repository import UserRepository


@dataclass(frozen=True)
class StudentAbsenceSummary:
    student_id: int
    name: str
    absence_count: float
    course: Optional[str] = None


def weighted_absences(absent: int, late: int) -> float:
    """Each late arrival counts as half an absence."""
    return absent + LATE_WEIGHT * late


class ReportService:
    """Absence leaderboard across all students."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def get_attendance_summary_for_all_students(self) -> list[StudentAbsenceSummary]:
        out: list[StudentAbsenceSummary] = []
        for student in self._users.list_by_role(Role.STUDENT):
            absent = self._attendance.count_for_student(student.user_id, AttendanceStatus.ABSENT)
            late = self._attendance.count_for_student(student.user_id, AttendanceStatus.LATE)
            out.append(
                StudentAbsenceSummary(
                    student_id=student.user_id,
                    name=student.name,
                    absence_count=weighted_absences(absent, late),
                    course=student.course,
                )
            )
        return out

    def get_top_absentees(self, limit: int = DEFAULT_TOP_ABSENTEES) -> list[StudentAbsenceSummary]:
        ranked = sorted(
            self.get_attendance_summary_for_all_students(),
            key=lambda s: s.absence_count,
            reverse=True,
        )
        return [s for s in ranked if s.absence_count > 0][: max(int(limit), 0)]
