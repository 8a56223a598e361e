from datetime import date

import pytest

from school_attendance.core.constants import DEFAULT_COURSE_ICON
from school_attendance.core.exceptions import NotFoundError, ValidationError

from factories import JUAN_ID, MARTINA_ID, MATH_ID, REDES_ID, SOFIA_ID


def test_create_course_with_students(container):
    course = container.course_service.create_course(
        name="Programación - 5to A",
        subject="Programación",
        classroom="Lab 2",
        schedule="4",
        max_absences="12",
        students=[JUAN_ID, MARTINA_ID, JUAN_ID],
    )

    assert course.students == (MARTINA_ID, JUAN_ID)
    assert course.schedule == 4
    assert course.max_absences == 12
    assert course.icon_url == DEFAULT_COURSE_ICON
    assert course.course_id in [c.course_id for c in container.course_service.get_courses_for_student(JUAN_ID)]


@pytest.mark.parametrize("max_absences", [0, -3, "many", None])
def test_max_absences_must_be_positive(container, max_absences):
    with pytest.raises(ValidationError):
        container.course_service.create_course(name="X", subject="Y", max_absences=max_absences)


def test_name_and_subject_required(container):
    with pytest.raises(ValidationError):
        container.course_service.create_course(name=" ", subject="Y", max_absences=10)
    with pytest.raises(ValidationError):
        container.course_service.create_course(name="X", subject="", max_absences=10)


def test_update_replaces_membership(container):
    course = container.course_service.update_course(
        course_id=REDES_ID,
        name="Redes de Datos",
        subject="Redes",
        classroom="Lab",
        schedule=3,
        max_absences=25,
        students=[SOFIA_ID],
    )

    assert course.students == (SOFIA_ID,)
    assert course.max_absences == 25
    assert REDES_ID not in [c.course_id for c in container.course_service.get_courses_for_student(MARTINA_ID)]


def test_update_unknown_course(container):
    with pytest.raises(NotFoundError):
        container.course_service.update_course(course_id=999, name="X", subject="Y", max_absences=1)


def test_delete_course_cascades(container):
    container.course_service.delete_course(REDES_ID)

    with pytest.raises(NotFoundError):
        container.course_service.get_course(REDES_ID)
    assert container.memberships_repo.list_student_ids(REDES_ID) == []
    assert container.attendance_repo.list_for_date(date(2024, 8, 1)) == []
    assert [c.course_id for c in container.course_service.get_courses_for_student(MARTINA_ID)] == [MATH_ID]


def test_delete_unknown_course(container):
    with pytest.raises(NotFoundError):
        container.course_service.delete_course(999)


def test_subject_names_are_distinct_and_sorted(container):
    container.course_service.create_course(name="Redes 5to B", subject="Redes", max_absences=10)

    assert list(container.course_service.list_subject_names()) == ["Bases de Datos", "Matemática", "Redes"]
