from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.constants import DEFAULT_COURSE_ICON
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import CourseRow
from .repository import CourseRepository, MembershipRepository

_COLUMNS = "course_id, name, subject, classroom, schedule, max_absences, icon_url"


def _to_row(r: dict) -> CourseRow:
    return CourseRow(
        course_id=int(r["course_id"]),
        name=r["name"],
        subject=r["subject"],
        classroom=r.get("classroom") or "",
        schedule=int(r.get("schedule") or 0),
        max_absences=int(r["max_absences"]),
        icon_url=r.get("icon_url") or DEFAULT_COURSE_ICON,
    )


class MySQLCourseRepository(CourseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, course_id: int) -> Optional[CourseRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM courses WHERE course_id=%s", (int(course_id),))
            r = fetchone(cur)
            return _to_row(r) if r else None

    def list_all(self) -> Sequence[CourseRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM courses ORDER BY name")
            return [_to_row(r) for r in fetchall(cur)]

    def list_by_ids(self, course_ids: Sequence[int]) -> Sequence[CourseRow]:
        ids = [int(c) for c in course_ids]
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM courses WHERE course_id IN ({placeholders(ids)}) ORDER BY name",
                tuple(ids),
            )
            return [_to_row(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO courses(name, subject, classroom, schedule, max_absences, icon_url)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, subject, classroom, int(schedule), int(max_absences), icon_url),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE courses
                SET name=%s, subject=%s, classroom=%s, schedule=%s, max_absences=%s, icon_url=%s
                WHERE course_id=%s
                """,
                (name, subject, classroom, int(schedule), int(max_absences), icon_url, int(course_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, course_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM courses WHERE course_id=%s", (int(course_id),))
            return cur.rowcount > 0

    def list_subject_names(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT subject FROM courses ORDER BY subject")
            return [r["subject"] for r in fetchall(cur)]


class MySQLMembershipRepository(MembershipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_student_ids(self, course_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_id FROM student_courses WHERE course_id=%s ORDER BY student_id",
                (int(course_id),),
            )
            return [int(r["student_id"]) for r in fetchall(cur)]

    def list_course_ids(self, student_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT course_id FROM student_courses WHERE student_id=%s ORDER BY course_id",
                (int(student_id),),
            )
            return [int(r["course_id"]) for r in fetchall(cur)]

    def replace_members(self, course_id: int, student_ids: Iterable[int]) -> None:
        rows = [(int(s), int(course_id)) for s in sorted(set(student_ids))]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM student_courses WHERE course_id=%s", (int(course_id),))
            if rows:
                cur.executemany(
                    "INSERT INTO student_courses(student_id, course_id) VALUES(%s,%s)",
                    rows,
                )

    def delete_for_course(self, course_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM student_courses WHERE course_id=%s", (int(course_id),))
            return int(cur.rowcount)
