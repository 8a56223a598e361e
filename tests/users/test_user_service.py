import pytest

from school_attendance.core.enums import AttendanceStatus, Role
from school_attendance.core.exceptions import NotFoundError, ValidationError

from factories import ADMIN_ID, GROUP_A, GROUP_B, MARTINA_ID, PRECEPTOR_ID


def test_login_by_document_returns_role_flags(container):
    admin = container.auth_service.login("111")
    preceptor = container.auth_service.login(" 222 ")
    student = container.auth_service.login("101")

    assert (admin.user_id, admin.is_admin, admin.is_preceptor, admin.is_student) == (ADMIN_ID, True, True, False)
    assert (preceptor.user_id, preceptor.is_admin, preceptor.is_preceptor) == (PRECEPTOR_ID, False, True)
    assert (student.user_id, student.is_student, student.is_preceptor) == (MARTINA_ID, True, False)
    assert student.course == GROUP_A


@pytest.mark.parametrize("document", ["999", "", "   "])
def test_login_unknown_document(container, document):
    with pytest.raises(NotFoundError):
        container.auth_service.login(document)


def test_current_user_after_deletion(container):
    container.user_service.delete_user(MARTINA_ID)

    with pytest.raises(NotFoundError):
        container.auth_service.current_user(MARTINA_ID)


def test_create_user_trims_and_persists(container):
    user = container.user_service.create_user(
        name="  Mateo González ", document=" 104 ", role="Student", course=GROUP_B
    )

    assert user.name == "Mateo González"
    assert user.document == "104"
    assert user.role == Role.STUDENT
    assert container.auth_service.login("104").user_id == user.user_id


def test_course_group_is_dropped_for_staff(container):
    user = container.user_service.create_user(name="Otro Preceptor", document="333", role="Preceptor", course=GROUP_A)

    assert user.course is None


def test_duplicate_document_is_rejected(container):
    with pytest.raises(ValidationError):
        container.user_service.create_user(name="Copy", document="101", role="Student")


@pytest.mark.parametrize(
    "name, document, role",
    [("", "500", "Student"), ("Ana", "", "Student"), ("Ana", "500", "Teacher")],
)
def test_create_user_validation(container, name, document, role):
    with pytest.raises(ValidationError):
        container.user_service.create_user(name=name, document=document, role=role)


def test_update_user_keeps_own_document(container):
    user = container.user_service.update_user(
        user_id=MARTINA_ID, name="Martina R.", document="101", role="Student", course=GROUP_B
    )

    assert user.name == "Martina R."
    assert user.course == GROUP_B


def test_update_user_cannot_take_another_document(container):
    with pytest.raises(ValidationError):
        container.user_service.update_user(user_id=MARTINA_ID, name="Martina", document="102", role="Student")


def test_update_unknown_user(container):
    with pytest.raises(NotFoundError):
        container.user_service.update_user(user_id=999, name="X", document="999", role="Student")


def test_delete_user_leaves_attendance_in_place(container):
    container.user_service.delete_user(MARTINA_ID)

    assert container.attendance_repo.count_for_student(MARTINA_ID, AttendanceStatus.ABSENT) == 2
    with pytest.raises(NotFoundError):
        container.user_service.delete_user(MARTINA_ID)


def test_students_and_groups(container):
    assert [u.name for u in container.user_service.list_students()] == [
        "Juan Pérez",
        "Martina Rodríguez",
        "Sofía López",
    ]
    assert list(container.user_service.list_course_groups()) == [GROUP_A, GROUP_B]


def test_numeric_document_is_stored_as_text(container):
    user = container.user_service.create_user(name="Nuevo", document=55555, role="Student")

    assert user.document == "55555"
    assert container.auth_service.login(55555).user_id == user.user_id
