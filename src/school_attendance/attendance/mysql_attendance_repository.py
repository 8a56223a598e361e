from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, CertificateStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, student_id, course_id, `date`, status,
    certificate_url, certificate_status, verified_by, verified_at, rejection_reason
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        course_id=int(r["course_id"]),
        date=r["date"],
        status=AttendanceStatus(r["status"]),
        certificate_url=r.get("certificate_url") or None,
        certificate_status=CertificateStatus(r["certificate_status"]) if r.get("certificate_status") else None,
        verified_by=int(r["verified_by"]) if r.get("verified_by") is not None else None,
        verified_at=r.get("verified_at"),
        rejection_reason=r.get("rejection_reason") or None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_date(self, on_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE `date`=%s ORDER BY student_id, course_id",
                (on_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student(
        self,
        student_id: int,
        *,
        statuses: Optional[Sequence[AttendanceStatus]] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["student_id=%s"]
        params: list[object] = [int(student_id)]
        if statuses:
            clauses.append(f"status IN ({placeholders(statuses)})")
            params.extend(s.value for s in statuses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE {" AND ".join(clauses)}
                ORDER BY `date` DESC, course_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert_status(
        self,
        *,
        student_id: int,
        course_id: int,
        on_date: date,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(student_id, course_id, `date`, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (int(student_id), int(course_id), on_date, status.value),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE student_id=%s AND course_id=%s AND `date`=%s",
                (int(student_id), int(course_id), on_date),
            )
            return _to_record(fetchone(cur))

    def delete_for_student_date(self, *, student_id: int, on_date: date, course_ids: Sequence[int]) -> int:
        ids = [int(c) for c in course_ids]
        if not ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                DELETE FROM attendance
                WHERE student_id=%s AND `date`=%s AND course_id IN ({placeholders(ids)})
                """,
                (int(student_id), on_date, *ids),
            )
            return int(cur.rowcount)

    def delete_for_course(self, course_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE course_id=%s", (int(course_id),))
            return int(cur.rowcount)

    def count_for_student(self, student_id: int, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM attendance WHERE student_id=%s AND status=%s",
                (int(student_id), status.value),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def attach_certificate(self, *, attendance_id: int, certificate_url: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET certificate_url=%s, certificate_status=%s,
                    verified_by=NULL, verified_at=NULL, rejection_reason=NULL
                WHERE attendance_id=%s
                """,
                (certificate_url, CertificateStatus.PENDING.value, int(attendance_id)),
            )
            return cur.rowcount > 0

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
        sets = ["certificate_status=%s", "verified_by=%s", "verified_at=%s", "rejection_reason=%s"]
        params: list[object] = [certificate_status.value, int(verified_by), verified_at, rejection_reason]
        if status is not None:
            sets.append("status=%s")
            params.append(status.value)
        params.append(int(attendance_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance SET {', '.join(sets)} WHERE attendance_id=%s",
                tuple(params),
            )
            return cur.rowcount > 0

    def list_by_certificate_status(self, certificate_status: CertificateStatus) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE certificate_status=%s AND certificate_url IS NOT NULL
                ORDER BY `date` DESC, attendance_id DESC
                """,
                (certificate_status.value,),
            )
            return [_to_record(r) for r in fetchall(cur)]
