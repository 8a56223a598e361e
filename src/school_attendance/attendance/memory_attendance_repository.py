from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, CertificateStatus
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _newest_first(records) -> list[AttendanceRecord]:
    return sorted(records, key=lambda r: (-r.date.toordinal(), r.course_id, r.attendance_id))


class InMemoryAttendanceRepository(AttendanceRepository):
    """Attendance rows kept in a dict keyed by id, unique on (student, course, date)."""

    def __init__(self):
        self._by_id: dict[int, AttendanceRecord] = {}
        self._next_id = 1

    def _find(self, student_id: int, course_id: int, on_date: date) -> Optional[AttendanceRecord]:
        return next(
            (
                r
                for r in self._by_id.values()
                if r.student_id == int(student_id) and r.course_id == int(course_id) and r.date == on_date
            ),
            None,
        )

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(int(attendance_id))

    def list_for_date(self, on_date: date) -> Sequence[AttendanceRecord]:
        items = [r for r in self._by_id.values() if r.date == on_date]
        return sorted(items, key=lambda r: (r.student_id, r.course_id))

    def list_for_student(
        self,
        student_id: int,
        *,
        statuses: Optional[Sequence[AttendanceStatus]] = None,
    ) -> Sequence[AttendanceRecord]:
        items = [
            r
            for r in self._by_id.values()
            if r.student_id == int(student_id) and (not statuses or r.status in statuses)
        ]
        return _newest_first(items)

    def upsert_status(
        self,
        *,
        student_id: int,
        course_id: int,
        on_date: date,
        status: AttendanceStatus,
        attendance_id: Optional[int] = None,
    ) -> AttendanceRecord:
        existing = self._find(student_id, course_id, on_date)
        if existing:
            record = replace(existing, status=status)
        else:
            # attendance_id lets seed data keep well-known ids.
            rid = int(attendance_id) if attendance_id is not None else self._next_id
            self._next_id = max(self._next_id, rid) + 1
            record = AttendanceRecord(
                attendance_id=rid,
                student_id=int(student_id),
                course_id=int(course_id),
                date=on_date,
                status=status,
            )
        self._by_id[record.attendance_id] = record
        return record

    def delete_for_student_date(self, *, student_id: int, on_date: date, course_ids: Sequence[int]) -> int:
        wanted = {int(c) for c in course_ids}
        doomed = [
            rid
            for rid, r in self._by_id.items()
            if r.student_id == int(student_id) and r.date == on_date and r.course_id in wanted
        ]
        for rid in doomed:
            del self._by_id[rid]
        return len(doomed)

    def delete_for_course(self, course_id: int) -> int:
        doomed = [rid for rid, r in self._by_id.items() if r.course_id == int(course_id)]
        for rid in doomed:
            del self._by_id[rid]
        return len(doomed)

    def count_for_student(self, student_id: int, status: AttendanceStatus) -> int:
        return sum(1 for r in self._by_id.values() if r.student_id == int(student_id) and r.status == status)

    def attach_certificate(self, *, attendance_id: int, certificate_url: str) -> bool:
        current = self._by_id.get(int(attendance_id))
        if not current:
            return False
        self._by_id[current.attendance_id] = replace(
            current,
            certificate_url=certificate_url,
            certificate_status=CertificateStatus.PENDING,
            verified_by=None,
            verified_at=None,
            rejection_reason=None,
        )
        return True

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
        current = self._by_id.get(int(attendance_id))
        if not current:
            return False
        self._by_id[current.attendance_id] = replace(
            current,
            certificate_status=certificate_status,
            verified_by=int(verified_by),
            verified_at=verified_at,
            rejection_reason=rejection_reason,
            status=status if status is not None else current.status,
        )
        return True

    def list_by_certificate_status(self, certificate_status: CertificateStatus) -> Sequence[AttendanceRecord]:
        items = [
            r
            for r in self._by_id.values()
            if r.certificate_status == certificate_status and r.certificate_url
        ]
        return sorted(items, key=lambda r: (-r.date.toordinal(), -r.attendance_id))
