from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import CourseRow


class CourseRepository(Protocol):
    def get_by_id(self, course_id: int) -> Optional[CourseRow]:
        raise NotImplementedError

    def list_all(self) -> Sequence[CourseRow]:
        """All courses ordered by name."""

        raise NotImplementedError

    def list_by_ids(self, course_ids: Sequence[int]) -> Sequence[CourseRow]:
        raise NotImplementedError

    def create_course(
        self,
        *,
        name: str,
        subject: str,
        classroom: str,
        schedule: int,
        max_absences: int,
        icon_url: str,
    ) -> int:
        raise NotImplementedError

    def update_course(
        self,
        *,
        course_id: int,
        name: str,
        subject: str,
        classroom: str,
        schedule: int,
        max_absences: int,
        icon_url: str,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, course_id: int) -> bool:
        raise NotImplementedError

    def list_subject_names(self) -> Sequence[str]:
        raise NotImplementedError


class MembershipRepository(Protocol):
    """Student <-> course relation (table `student_courses`)."""

    def list_student_ids(self, course_id: int) -> Sequence[int]:
        raise NotImplementedError

    def list_course_ids(self, student_id: int) -> Sequence[int]:
        raise NotImplementedError

    def replace_members(self, course_id: int, student_ids: Iterable[int]) -> None:
        """Delete every membership of the course, then insert the given set."""

        raise NotImplementedError

    def delete_for_course(self, course_id: int) -> int:
        raise NotImplementedError
