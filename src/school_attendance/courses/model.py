from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..core.constants import DEFAULT_COURSE_ICON


@dataclass(frozen=True)
class CourseRow:
    """Persistence shape of a course (table `courses`), without its students."""

    course_id: int
    name: str
    subject: str
    classroom: str
    schedule: int
    max_absences: int
    icon_url: str = DEFAULT_COURSE_ICON


@dataclass(frozen=True)
class Course:
    """Domain aggregate: a course with its enrolled student ids.

    `schedule` is the weekly workload in hours. `students` comes from the
    `student_courses` relation, never from the course row itself.
    """

    course_id: int
    name: str
    subject: str
    classroom: str
    schedule: int
    max_absences: int
    students: tuple[int, ...]
    icon_url: str = DEFAULT_COURSE_ICON


def assemble_course(row: CourseRow, student_ids: Iterable[int]) -> Course:
    """Join step: course row + membership relation -> aggregate."""
    return Course(
        course_id=row.course_id,
        name=row.name,
        subject=row.subject,
        classroom=row.classroom,
        schedule=row.schedule,
        max_absences=row.max_absences,
        students=tuple(sorted({int(s) for s in student_ids})),
        icon_url=row.icon_url,
    )
