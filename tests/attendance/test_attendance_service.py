from datetime import date

import pytest

from school_attendance.attendance.service import derive_daily_status, usage_level
from school_attendance.core.enums import AttendanceStatus
from school_attendance.core.exceptions import BackendError, NotFoundError, ValidationError

from factories import GROUP_A, GROUP_B, JUAN_ID, MARTINA_ID, MATH_ID, REDES_ID, SOFIA_ID


def _statuses(container, on_date):
    return {(r.student_id, r.course_id): r.status for r in container.attendance_repo.list_for_date(on_date)}


def test_absent_without_course_marks_every_enrolled_course(container):
    svc = container.attendance_service

    records = svc.set_attendance(MARTINA_ID, "2024-09-02", "absent")

    assert sorted(r.course_id for r in records) == [REDES_ID, MATH_ID]
    assert _statuses(container, date(2024, 9, 2)) == {
        (MARTINA_ID, REDES_ID): AttendanceStatus.ABSENT,
        (MARTINA_ID, MATH_ID): AttendanceStatus.ABSENT,
    }


def test_present_deletes_records_for_that_day_only(container):
    svc = container.attendance_service

    svc.set_attendance(MARTINA_ID, "2024-08-01", "present")

    assert _statuses(container, date(2024, 8, 1)) == {}
    # The other absence of the same student is untouched.
    assert _statuses(container, date(2024, 8, 5)) == {(MARTINA_ID, REDES_ID): AttendanceStatus.ABSENT}
    roster = {row.student_id: row.status for row in svc.get_daily_roster("2024-08-01", GROUP_A)}
    assert roster[MARTINA_ID] == AttendanceStatus.PRESENT


def test_present_with_course_only_touches_that_course(container):
    svc = container.attendance_service
    svc.set_attendance(MARTINA_ID, "2024-09-03", "absent")

    svc.set_attendance(MARTINA_ID, "2024-09-03", "present", course_id=REDES_ID)

    assert _statuses(container, date(2024, 9, 3)) == {(MARTINA_ID, MATH_ID): AttendanceStatus.ABSENT}


def test_set_attendance_is_idempotent(container):
    svc = container.attendance_service

    first = svc.set_attendance(JUAN_ID, "2024-09-04", "late", course_id=REDES_ID)
    second = svc.set_attendance(JUAN_ID, "2024-09-04", "late", course_id=REDES_ID)

    assert first[0].attendance_id == second[0].attendance_id
    assert len(container.attendance_repo.list_for_date(date(2024, 9, 4))) == 1


def test_upsert_keeps_one_record_per_student_course_day(container):
    svc = container.attendance_service

    svc.set_attendance(JUAN_ID, "2024-08-02", "absent", course_id=REDES_ID)

    rows = container.attendance_repo.list_for_date(date(2024, 8, 2))
    assert [(r.student_id, r.status) for r in rows] == [(JUAN_ID, AttendanceStatus.ABSENT)]


@pytest.mark.parametrize("status", ["justified", "sick", ""])
def test_only_present_absent_late_can_be_set(container, status):
    with pytest.raises(ValidationError):
        container.attendance_service.set_attendance(MARTINA_ID, "2024-09-02", status)


def test_invalid_date_is_rejected(container):
    with pytest.raises(ValidationError):
        container.attendance_service.set_attendance(MARTINA_ID, "02/09/2024", "absent")


def test_unknown_student_is_rejected(container):
    with pytest.raises(NotFoundError):
        container.attendance_service.set_attendance(999, "2024-09-02", "absent")


def test_student_without_courses_gets_no_records(container):
    uid = container.user_service.create_user(name="Nuevo", document="555", role="Student").user_id

    assert container.attendance_service.set_attendance(uid, "2024-09-02", "absent") == []


def test_absences_for_student_exclude_justified(container):
    svc = container.attendance_service
    container.attendance_repo.upsert_status(
        student_id=MARTINA_ID, course_id=MATH_ID, on_date=date(2024, 8, 6), status=AttendanceStatus.JUSTIFIED
    )

    absences = svc.get_absences_for_student(MARTINA_ID)
    history = svc.get_attendance_for_student(MARTINA_ID)

    assert [r.date for r in absences] == [date(2024, 8, 5), date(2024, 8, 1)]
    assert len(history) == 3
    assert history[0].date == date(2024, 8, 6)


def test_derive_daily_status_any_record_means_absent(container):
    records = container.attendance_repo.list_for_date(date(2024, 8, 2))

    flags = derive_daily_status(records, [MARTINA_ID, JUAN_ID])

    # Juan was only late, but the daily view collapses that to absent.
    assert flags == {MARTINA_ID: AttendanceStatus.PRESENT, JUAN_ID: AttendanceStatus.ABSENT}


def test_daily_roster_filters_by_group(container):
    roster = container.attendance_service.get_daily_roster("2024-08-01", GROUP_A)

    assert {row.student_id: row.status for row in roster} == {
        MARTINA_ID: AttendanceStatus.ABSENT,
        JUAN_ID: AttendanceStatus.PRESENT,
    }
    assert all(row.course == GROUP_A for row in roster)


def test_daily_roster_without_group_lists_all_students(container):
    roster = container.attendance_service.get_daily_roster("2024-08-01")

    assert {row.student_id for row in roster} == {MARTINA_ID, JUAN_ID, SOFIA_ID}


def test_save_daily_roster_applies_only_changes(container):
    svc = container.attendance_service

    changed = svc.save_daily_roster(
        "2024-08-01",
        {MARTINA_ID: "absent", JUAN_ID: "absent", SOFIA_ID: "present"},
    )

    assert changed == 1
    assert _statuses(container, date(2024, 8, 1)) == {
        (MARTINA_ID, REDES_ID): AttendanceStatus.ABSENT,
        (JUAN_ID, REDES_ID): AttendanceStatus.ABSENT,
    }


def test_save_daily_roster_present_clears_the_day(container):
    changed = container.attendance_service.save_daily_roster("2024-08-01", {MARTINA_ID: "present"})

    assert changed == 1
    assert _statuses(container, date(2024, 8, 1)) == {}


def test_save_daily_roster_keeps_successful_writes_and_reports_failures(container):
    with pytest.raises(BackendError) as excinfo:
        container.attendance_service.save_daily_roster("2024-09-10", {999: "absent", SOFIA_ID: "absent"})

    assert "1 of 2" in str(excinfo.value)
    assert {r.student_id for r in container.attendance_repo.list_for_date(date(2024, 9, 10))} == {SOFIA_ID}


def test_course_summaries_for_student(container):
    summaries = {s.course_id: s for s in container.attendance_service.get_course_summaries(MARTINA_ID)}

    redes = summaries[REDES_ID]
    assert redes.absences == 2
    assert redes.max_absences == 20
    assert redes.usage_percent == 10.0
    assert redes.level == "ok"
    assert summaries[MATH_ID].absences == 0


@pytest.mark.parametrize(
    "percent, level",
    [(0, "ok"), (49.9, "ok"), (50, "warning"), (79.9, "warning"), (80, "danger"), (120, "danger")],
)
def test_usage_level_thresholds(percent, level):
    assert usage_level(percent) == level


def test_group_b_roster_is_separate(container):
    roster = container.attendance_service.get_daily_roster("2024-08-01", GROUP_B)

    assert [(row.student_id, row.status) for row in roster] == [(SOFIA_ID, AttendanceStatus.PRESENT)]
