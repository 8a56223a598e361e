from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Sequence

from .model import CourseRow
from .repository import CourseRepository, MembershipRepository


class InMemoryCourseRepository(CourseRepository):
    def __init__(self):
        self._by_id: dict[int, CourseRow] = {}
        self._next_id = 1

    def get_by_id(self, course_id: int) -> Optional[CourseRow]:
        return self._by_id.get(int(course_id))

    def list_all(self) -> Sequence[CourseRow]:
        return sorted(self._by_id.values(), key=lambda c: c.name)

    def list_by_ids(self, course_ids: Sequence[int]) -> Sequence[CourseRow]:
        wanted = {int(c) for c in course_ids}
        return [c for c in self.list_all() if c.course_id in wanted]

    def create_course(
        self,
        *,
        name: str,
        subject: str,
        classroom: str,
        schedule: int,
        max_absences: int,
        icon_url: str,
        course_id: Optional[int] = None,
    ) -> int:
        cid = int(course_id) if course_id is not None else self._next_id
        self._next_id = max(self._next_id, cid) + 1
        self._by_id[cid] = CourseRow(
            course_id=cid,
            name=name,
            subject=subject,
            classroom=classroom,
            schedule=int(schedule),
            max_absences=int(max_absences),
            icon_url=icon_url,
        )
        return cid

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
        current = self._by_id.get(int(course_id))
        if not current:
            return False
        self._by_id[current.course_id] = replace(
            current,
            name=name,
            subject=subject,
            classroom=classroom,
            schedule=int(schedule),
            max_absences=int(max_absences),
            icon_url=icon_url,
        )
        return True

    def delete_by_id(self, course_id: int) -> bool:
        return self._by_id.pop(int(course_id), None) is not None

    def list_subject_names(self) -> Sequence[str]:
        return sorted({c.subject for c in self._by_id.values()})


class InMemoryMembershipRepository(MembershipRepository):
    def __init__(self):
        self._pairs: set[tuple[int, int]] = set()

    def list_student_ids(self, course_id: int) -> Sequence[int]:
        return sorted(s for s, c in self._pairs if c == int(course_id))

    def list_course_ids(self, student_id: int) -> Sequence[int]:
        return sorted(c for s, c in self._pairs if s == int(student_id))

    def replace_members(self, course_id: int, student_ids: Iterable[int]) -> None:
        self.delete_for_course(course_id)
        self._pairs.update((int(s), int(course_id)) for s in student_ids)

    def delete_for_course(self, course_id: int) -> int:
        doomed = {p for p in self._pairs if p[1] == int(course_id)}
        self._pairs -= doomed
        return len(doomed)
