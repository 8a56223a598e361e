from datetime import date

import pytest

from school_attendance.core.enums import AttendanceStatus
from school_attendance.reports.service import weighted_absences

from factories import DB_ID, JUAN_ID, MARTINA_ID, REDES_ID, SOFIA_ID


@pytest.mark.parametrize("absent, late, expected", [(0, 0, 0), (2, 0, 2), (0, 1, 0.5), (3, 3, 4.5)])
def test_late_counts_as_half_an_absence(absent, late, expected):
    assert weighted_absences(absent, late) == expected


def test_summary_includes_students_without_absences(container):
    summary = {s.student_id: s.absence_count for s in container.report_service.get_attendance_summary_for_all_students()}

    assert summary == {MARTINA_ID: 2, JUAN_ID: 0.5, SOFIA_ID: 0}


def test_justified_records_do_not_count(container):
    container.attendance_repo.upsert_status(
        student_id=SOFIA_ID, course_id=DB_ID, on_date=date(2024, 8, 1), status=AttendanceStatus.JUSTIFIED
    )

    summary = {s.student_id: s.absence_count for s in container.report_service.get_attendance_summary_for_all_students()}

    assert summary[SOFIA_ID] == 0


def test_top_absentees_sorted_and_limited(container):
    container.attendance_service.set_attendance(JUAN_ID, "2024-08-03", "absent", course_id=REDES_ID)
    container.attendance_service.set_attendance(JUAN_ID, "2024-08-04", "absent", course_id=REDES_ID)

    top = container.report_service.get_top_absentees()
    assert [(s.student_id, s.absence_count) for s in top] == [(JUAN_ID, 2.5), (MARTINA_ID, 2)]

    assert [s.student_id for s in container.report_service.get_top_absentees(limit=1)] == [JUAN_ID]
    assert container.report_service.get_top_absentees(limit=0) == []
