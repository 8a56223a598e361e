import io

import pytest

from school_attendance.core.enums import CertificateStatus

from factories import DB_ID, GROUP_A, JUAN_ID, MARTINA_ID, MATH_ID, PRECEPTOR_ID, REDES_ID, SOFIA_ID, login


def _pdf_file(size: int = 1024):
    head = b"%PDF-1.4\n"
    return io.BytesIO(head + b"0" * (size - len(head))), "cert.pdf", "application/pdf"


def test_login_returns_camel_case_session(client):
    data = login(client, "101")

    assert data["id"] == MARTINA_ID
    assert data["role"] == "Student"
    assert data["isStudent"] is True
    assert data["isPreceptor"] is False
    assert data["course"] == GROUP_A
    assert "avatarUrl" not in data

    me = client.get("/api/me").get_json()
    assert me["data"]["id"] == MARTINA_ID


def test_login_unknown_document(client):
    resp = client.post("/api/login", json={"document": "000"})

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "User not found"}


def test_logout_clears_session(client):
    login(client, "111")
    client.post("/api/logout")

    assert client.get("/api/me").status_code == 401


@pytest.mark.parametrize(
    "method, url",
    [
        ("get", "/api/users"),
        ("get", "/api/attendance?date=2024-08-01"),
        ("get", "/api/certificates/pending"),
        ("get", "/api/reports/top"),
        ("get", "/api/news"),
    ],
)
def test_anonymous_requests_are_unauthorized(client, method, url):
    assert getattr(client, method)(url).status_code == 401


def test_role_gates(client):
    login(client, "101")
    assert client.get("/api/attendance/roster?date=2024-08-01").status_code == 403
    assert client.get("/api/users").status_code == 403

    login(client, "222")
    assert client.get("/api/attendance/roster?date=2024-08-01").status_code == 200
    assert client.get("/api/users").status_code == 403
    assert client.get("/api/me/absences").status_code == 403

    login(client, "111")
    assert client.get("/api/users").status_code == 200
    assert client.get("/api/certificates/queue").status_code == 200


def test_scenario_absent_then_present_for_single_course(client):
    login(client, "222")

    resp = client.post(
        "/api/attendance",
        json={"studentId": MARTINA_ID, "date": "2024-08-01", "status": "present", "courseId": REDES_ID},
    )
    assert resp.status_code == 200

    day = client.get("/api/attendance?date=2024-08-01").get_json()["data"]
    assert [r for r in day if r["studentId"] == MARTINA_ID and r["courseId"] == REDES_ID] == []

    other = client.get("/api/attendance?date=2024-08-05").get_json()["data"]
    assert [(r["studentId"], r["courseId"], r["status"]) for r in other] == [(MARTINA_ID, REDES_ID, "absent")]


def test_set_attendance_rejects_justified(client):
    login(client, "222")

    resp = client.post("/api/attendance", json={"studentId": MARTINA_ID, "date": "2024-08-01", "status": "justified"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_attendance_requires_date(client):
    login(client, "222")

    assert client.get("/api/attendance").status_code == 400
    assert client.get("/api/attendance?date=tomorrow").status_code == 400


def test_roster_roundtrip(client):
    login(client, "222")

    roster = client.get("/api/attendance/roster", query_string={"date": "2024-08-01", "group": GROUP_A}).get_json()["data"]
    assert {row["studentId"]: row["status"] for row in roster} == {MARTINA_ID: "absent", JUAN_ID: "present"}

    resp = client.post(
        "/api/attendance/roster",
        json={"date": "2024-08-01", "statuses": {str(MARTINA_ID): "present", str(JUAN_ID): "absent"}},
    )
    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"changed": 2}

    roster = client.get("/api/attendance/roster", query_string={"date": "2024-08-01", "group": GROUP_A}).get_json()["data"]
    assert {row["studentId"]: row["status"] for row in roster} == {MARTINA_ID: "present", JUAN_ID: "absent"}


def test_roster_save_without_changes(client):
    login(client, "222")

    resp = client.post("/api/attendance/roster", json={"date": "2024-08-01", "statuses": {str(SOFIA_ID): "present"}})

    assert resp.get_json() == {"success": True, "message": "No changes to save", "data": {"changed": 0}}


def test_roster_save_partial_failure_is_reported(client, container):
    login(client, "222")

    resp = client.post(
        "/api/attendance/roster",
        json={"date": "2024-09-10", "statuses": {"999": "absent", str(SOFIA_ID): "absent"}},
    )

    assert resp.status_code == 502
    assert resp.get_json()["success"] is False
    records = container.attendance_service.get_attendance_for_date("2024-09-10")
    assert [(r.student_id, r.course_id) for r in records] == [(SOFIA_ID, DB_ID), (SOFIA_ID, MATH_ID)]


def test_certificate_flow_upload_reject_blank_then_approve(client, container):
    login(client, "101")
    absences = client.get("/api/me/absences").get_json()["data"]
    target = absences[0]["id"]

    resp = client.post(
        f"/api/attendance/{target}/certificate",
        data={"file": _pdf_file(2 * 1024 * 1024)},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 201
    assert resp.get_json()["data"]["certificateUrl"].startswith(f"/uploads/certificates/{target}_")

    login(client, "222")
    queue = client.get("/api/certificates/queue").get_json()["data"]
    assert [(q["id"], q["studentName"], q["courseName"]) for q in queue] == [
        (target, "Martina Rodríguez", "Redes de Datos")
    ]

    resp = client.post(f"/api/certificates/{target}/reject", json={"reason": ""})
    assert resp.status_code == 400
    assert container.attendance_repo.get_by_id(target).certificate_status == CertificateStatus.PENDING

    resp = client.post(f"/api/certificates/{target}/approve")
    assert resp.status_code == 200
    body = resp.get_json()["data"]
    assert body["status"] == "justified"
    assert body["certificateStatus"] == "approved"
    assert body["verifiedBy"] == PRECEPTOR_ID

    assert client.get("/api/certificates/pending").get_json()["data"] == []


def test_certificate_reject_with_reason(client):
    login(client, "102")
    target = client.get("/api/me/absences").get_json()["data"][0]["id"]
    client.post(f"/api/attendance/{target}/certificate", data={"file": _pdf_file()}, content_type="multipart/form-data")

    login(client, "111")
    resp = client.post(f"/api/certificates/{target}/reject", json={"reason": "Fecha ilegible"})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["rejectionReason"] == "Fecha ilegible"
    assert resp.get_json()["data"]["status"] == "late"


def test_certificate_upload_errors(client):
    login(client, "101")
    target = client.get("/api/me/absences").get_json()["data"][0]["id"]

    missing = client.post(f"/api/attendance/{target}/certificate", data={}, content_type="multipart/form-data")
    assert missing.status_code == 400

    wrong_type = client.post(
        f"/api/attendance/{target}/certificate",
        data={"file": (io.BytesIO(b"hello"), "notes.txt", "text/plain")},
        content_type="multipart/form-data",
    )
    assert wrong_type.status_code == 400

    too_big = client.post(
        f"/api/attendance/{target}/certificate",
        data={"file": _pdf_file(6 * 1024 * 1024)},
        content_type="multipart/form-data",
    )
    assert too_big.status_code == 413

    login(client, "102")
    foreign = client.post(
        f"/api/attendance/{target}/certificate",
        data={"file": _pdf_file()},
        content_type="multipart/form-data",
    )
    assert foreign.status_code == 403


def test_student_dashboard(client):
    login(client, "101")

    courses = client.get("/api/me/courses").get_json()["data"]
    summary = client.get("/api/me/summary").get_json()["data"]

    assert {c["id"] for c in courses} == {REDES_ID, 103}
    redes = next(s for s in summary if s["id"] == REDES_ID)
    assert redes["absences"] == 2
    assert redes["usagePercent"] == 10.0
    assert redes["level"] == "ok"


def test_admin_manages_users_and_courses(client):
    login(client, "111")

    created = client.post(
        "/api/users", json={"name": "Mateo González", "document": "104", "role": "Student", "course": GROUP_A}
    )
    assert created.status_code == 201
    mateo = created.get_json()["data"]["id"]

    duplicate = client.post("/api/users", json={"name": "Copy", "document": "104", "role": "Student"})
    assert duplicate.status_code == 400

    course = client.post(
        "/api/courses",
        json={"name": "Programación", "subject": "Programación", "maxAbsences": 10, "schedule": 4, "students": [mateo]},
    )
    assert course.status_code == 201
    course_id = course.get_json()["data"]["id"]
    assert course.get_json()["data"]["students"] == [mateo]
    assert course.get_json()["data"]["maxAbsences"] == 10

    bad = client.post("/api/courses", json={"name": "X", "subject": "Y", "maxAbsences": 0})
    assert bad.status_code == 400

    assert client.delete(f"/api/courses/{course_id}").status_code == 200
    assert client.get(f"/api/courses/{course_id}").status_code == 404
    assert client.delete(f"/api/users/{mateo}").status_code == 200


def test_reports(client):
    login(client, "222")

    top = client.get("/api/reports/top?limit=1").get_json()["data"]
    assert [(t["studentId"], t["absenceCount"]) for t in top] == [(MARTINA_ID, 2)]

    everyone = client.get("/api/reports/absences").get_json()["data"]
    assert {t["studentId"]: t["absenceCount"] for t in everyone} == {MARTINA_ID: 2, JUAN_ID: 0.5, SOFIA_ID: 0}

    assert client.get("/api/reports/top?limit=abc").status_code == 400


def test_news_board(client):
    login(client, "222")
    created = client.post("/api/news", json={"title": "Acto", "content": "SUM 10:00"})
    assert created.status_code == 201
    news_id = created.get_json()["data"]["id"]
    assert created.get_json()["data"]["author"] == "Lucía Gómez"

    login(client, "101")
    assert [n["title"] for n in client.get("/api/news").get_json()["data"]] == ["Acto"]
    assert client.post("/api/news", json={"title": "x", "content": "y"}).status_code == 403

    login(client, "111")
    updated = client.put(f"/api/news/{news_id}", json={"title": "Acto 17/08", "content": "SUM"})
    assert updated.get_json()["data"]["author"] == "Lucía Gómez"
    assert client.delete(f"/api/news/{news_id}").status_code == 200


def test_settings_endpoints(client):
    login(client, "111")
    resp = client.put("/api/settings", json={"schoolName": "EEST 1"})
    assert resp.status_code == 200

    login(client, "101")
    assert client.get("/api/settings").get_json()["data"] == {"schoolName": "EEST 1"}
    assert client.put("/api/settings", json={"schoolName": "hack"}).status_code == 403


def test_numeric_fields_in_json_bodies(client):
    login(client, "111")

    created = client.post("/api/users", json={"name": "Nuevo", "document": 55555, "role": "Student"})
    assert created.status_code == 201
    assert created.get_json()["data"]["document"] == "55555"

    news = client.post("/api/news", json={"title": 2024, "content": "x"})
    assert news.status_code == 201
    assert news.get_json()["data"]["title"] == "2024"

    blank = client.post("/api/users", json={"name": "Nuevo", "document": None, "role": "Student"})
    assert blank.status_code == 400
