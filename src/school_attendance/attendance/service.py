from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DANGER_USAGE_PERCENT, WARNING_USAGE_PERCENT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import BackendError, DomainError, NotFoundError, ValidationError
from ..courses.repository import CourseRepository, MembershipRepository
from ..users.repository import UserRepository
from .model import AttendanceRecord, CourseAttendanceSummary, DailyRosterRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

SETTABLE_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE)


def parse_settable_status(value) -> AttendanceStatus:
    try:
        status = AttendanceStatus(value)
    except ValueError:
        raise ValidationError("Invalid attendance status")
    if status not in SETTABLE_STATUSES:
        raise ValidationError("Status must be present, absent or late")
    return status


def derive_daily_status(
    records: Iterable[AttendanceRecord],
    student_ids: Iterable[int],
) -> dict[int, AttendanceStatus]:
    """Collapse course-level records of one day into one flag per student.

    Any record (absent, late or justified) in any course marks the student
    ABSENT for the whole day; no record means PRESENT.
    """
    marked = {r.student_id for r in records}
    return {
        int(sid): AttendanceStatus.ABSENT if int(sid) in marked else AttendanceStatus.PRESENT
        for sid in student_ids
    }


def usage_level(percent: float) -> str:
    if percent >= DANGER_USAGE_PERCENT:
        return "danger"
    if percent >= WARNING_USAGE_PERCENT:
        return "warning"
    return "ok"


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        memberships: MembershipRepository,
        users: UserRepository,
        courses: CourseRepository,
    ):
        self._attendance = attendance
        self._memberships = memberships
        self._users = users
        self._courses = courses

    def set_attendance(
        self,
        student_id: int,
        on_date,
        status,
        course_id: Optional[int] = None,
    ) -> list[AttendanceRecord]:
        """Mark a student present/absent/late for a day.

        With `course_id` only that course is touched; without it the mark applies
        to every course the student is enrolled in. PRESENT deletes records,
        ABSENT/LATE upsert them.
        """
        on_date = parse_iso_date(on_date)
        status = parse_settable_status(status)

        if not self._users.get_by_id(int(student_id)):
            raise NotFoundError("Student not found")

        if course_id is not None:
            course_ids = [int(course_id)]
        else:
            course_ids = list(self._memberships.list_course_ids(int(student_id)))

        if status == AttendanceStatus.PRESENT:
            self._attendance.delete_for_student_date(
                student_id=int(student_id), on_date=on_date, course_ids=course_ids
            )
            return []

        return [
            self._attendance.upsert_status(
                student_id=int(student_id), course_id=cid, on_date=on_date, status=status
            )
            for cid in course_ids
        ]

    def get_attendance_for_date(self, on_date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(parse_iso_date(on_date))

    def get_attendance_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_student(int(student_id))

    def get_absences_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        """Absent/late records, the ones a certificate can be attached to."""
        return self._attendance.list_for_student(
            int(student_id), statuses=[AttendanceStatus.ABSENT, AttendanceStatus.LATE]
        )

    def _students_in_group(self, course_group: Optional[str]):
        students = self._users.list_by_role(Role.STUDENT)
        if course_group:
            students = [s for s in students if s.course == course_group]
        return students

    def get_daily_roster(self, on_date, course_group: Optional[str] = None) -> list[DailyRosterRow]:
        students = self._students_in_group(course_group)
        flags = derive_daily_status(self.get_attendance_for_date(on_date), [s.user_id for s in students])
        return [
            DailyRosterRow(
                student_id=s.user_id,
                name=s.name,
                status=flags[s.user_id],
                course=s.course,
                avatar_url=s.avatar_url,
            )
            for s in students
        ]

    def save_daily_roster(self, on_date, desired: Mapping[int, str]) -> int:
        """Apply the changed daily flags; returns how many students changed.

        Every change is attempted even if an earlier one fails. Writes that
        succeeded are kept; any failure is reported once at the end.
        """
        on_date = parse_iso_date(on_date)
        wanted = {int(sid): parse_settable_status(status) for sid, status in desired.items()}

        current = derive_daily_status(self._attendance.list_for_date(on_date), wanted.keys())
        changes = {sid: status for sid, status in wanted.items() if status != current[sid]}

        failures: list[int] = []
        for sid, status in changes.items():
            try:
                self.set_attendance(sid, on_date, status)
            except DomainError:
                logger.exception("Failed to save attendance for student %s on %s", sid, on_date)
                failures.append(sid)

        if failures:
            raise BackendError(
                f"Could not save attendance for {len(failures)} of {len(changes)} students"
            )
        return len(changes)

    def get_course_summaries(self, student_id: int) -> list[CourseAttendanceSummary]:
        course_ids = self._memberships.list_course_ids(int(student_id))
        courses = self._courses.list_by_ids(course_ids)
        records = self._attendance.list_for_student(int(student_id))

        out: list[CourseAttendanceSummary] = []
        for course in courses:
            mine = [r for r in records if r.course_id == course.course_id]
            absences = sum(1 for r in mine if r.status == AttendanceStatus.ABSENT)
            percent = absences / course.max_absences * 100 if course.max_absences > 0 else 0.0
            out.append(
                CourseAttendanceSummary(
                    course_id=course.course_id,
                    course_name=course.name,
                    absences=absences,
                    justified=sum(1 for r in mine if r.status == AttendanceStatus.JUSTIFIED),
                    lates=sum(1 for r in mine if r.status == AttendanceStatus.LATE),
                    max_absences=course.max_absences,
                    usage_percent=round(percent, 1),
                    level=usage_level(percent),
                )
            )
        return out
