from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import optional_text, require_int, require_non_empty, require_positive_int
from ..core.constants import DEFAULT_COURSE_ICON
from ..core.exceptions import NotFoundError, ValidationError
from .model import Course, CourseRow, assemble_course
from .repository import CourseRepository, MembershipRepository


class CourseService:
    """Use case: course administration and enrolment."""

    def __init__(
        self,
        courses: CourseRepository,
        memberships: MembershipRepository,
        attendance: AttendanceRepository,
    ):
        self._courses = courses
        self._memberships = memberships
        self._attendance = attendance

    def _assemble(self, row: CourseRow) -> Course:
        return assemble_course(row, self._memberships.list_student_ids(row.course_id))

    def list_courses(self) -> list[Course]:
        return [self._assemble(row) for row in self._courses.list_all()]

    def get_course(self, course_id: int) -> Course:
        row = self._courses.get_by_id(int(course_id))
        if not row:
            raise NotFoundError("Course not found")
        return self._assemble(row)

    def get_courses_for_student(self, student_id: int) -> list[Course]:
        course_ids = self._memberships.list_course_ids(int(student_id))
        return [self._assemble(row) for row in self._courses.list_by_ids(course_ids)]

    def list_subject_names(self) -> Sequence[str]:
        return self._courses.list_subject_names()

    @staticmethod
    def _clean(*, name, subject, classroom, schedule, max_absences, students) -> dict:
        try:
            student_ids = sorted({int(s) for s in (students or [])})
        except (TypeError, ValueError):
            raise ValidationError("Students must be a list of user ids")
        return {
            "name": require_non_empty(name, "Name"),
            "subject": require_non_empty(subject, "Subject"),
            "classroom": optional_text(classroom) or "",
            "schedule": require_int(schedule if schedule not in (None, "") else 0, "Schedule", minimum=0),
            "max_absences": require_positive_int(max_absences, "Max absences"),
            "students": student_ids,
        }

    def create_course(
        self,
        *,
        name: str,
        subject: str,
        max_absences: int,
        classroom: Optional[str] = None,
        schedule: Optional[int] = None,
        students: Iterable[int] = (),
    ) -> Course:
        data = self._clean(
            name=name,
            subject=subject,
            classroom=classroom,
            schedule=schedule,
            max_absences=max_absences,
            students=students,
        )
        course_id = self._courses.create_course(
            name=data["name"],
            subject=data["subject"],
            classroom=data["classroom"],
            schedule=data["schedule"],
            max_absences=data["max_absences"],
            icon_url=DEFAULT_COURSE_ICON,
        )
        if data["students"]:
            self._memberships.replace_members(course_id, data["students"])
        return self.get_course(course_id)

    def update_course(
        self,
        *,
        course_id: int,
        name: str,
        subject: str,
        max_absences: int,
        classroom: Optional[str] = None,
        schedule: Optional[int] = None,
        students: Iterable[int] = (),
        icon_url: Optional[str] = None,
    ) -> Course:
        """Overwrite the course and fully replace its membership set."""
        current = self.get_course(course_id)
        data = self._clean(
            name=name,
            subject=subject,
            classroom=classroom,
            schedule=schedule,
            max_absences=max_absences,
            students=students,
        )
        self._courses.update_course(
            course_id=current.course_id,
            name=data["name"],
            subject=data["subject"],
            classroom=data["classroom"],
            schedule=data["schedule"],
            max_absences=data["max_absences"],
            icon_url=optional_text(icon_url) or current.icon_url or DEFAULT_COURSE_ICON,
        )
        self._memberships.replace_members(current.course_id, data["students"])
        return self.get_course(current.course_id)

    def delete_course(self, course_id: int) -> None:
        """Delete a course with its attendance rows and memberships.

        Three separate writes; a failure part-way leaves the earlier ones applied.
        """
        self.get_course(course_id)
        self._attendance.delete_for_course(int(course_id))
        self._memberships.delete_for_course(int(course_id))
        self._courses.delete_by_id(int(course_id))
