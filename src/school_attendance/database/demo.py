"""Demo data loaded through the services, so it works with any backend."""
from __future__ import annotations

import logging

from ..core.enums import Role

logger = logging.getLogger(__name__)

GROUP_A = "5to Año A (Programación)"
GROUP_B = "5to Año B (General)"

DEMO_USERS = [
    ("Admin User", "111", Role.ADMIN, None),
    ("Lucía Gómez (Preceptora)", "222", Role.PRECEPTOR, None),
    ("Martina Rodríguez", "101", Role.STUDENT, GROUP_A),
    ("Juan Pérez", "102", Role.STUDENT, GROUP_A),
    ("Sofía López", "103", Role.STUDENT, GROUP_B),
    ("Mateo González", "104", Role.STUDENT, GROUP_B),
    ("Valentina Torres", "105", Role.STUDENT, GROUP_A),
    ("Bautista Martinez", "106", Role.STUDENT, GROUP_A),
    ("Camila Diaz", "107", Role.STUDENT, GROUP_A),
    ("Thiago Sanchez", "108", Role.STUDENT, GROUP_B),
    ("Isabella Romero", "109", Role.STUDENT, GROUP_B),
    ("Benjamín Acosta", "110", Role.STUDENT, GROUP_B),
]

# (name, subject, classroom, weekly hours, max absences, student group)
DEMO_COURSES = [
    ("Redes de Datos - 5to A", "Redes de Datos", "Lab. de Redes", 3, 20, GROUP_A),
    ("Bases de Datos - 5to B", "Bases de Datos", "Aula 5B", 3, 15, GROUP_B),
    ("Análisis Matemático - 5to B", "Análisis matemático", "Aula 5B", 2, 18, GROUP_B),
]

# (student document, course name, date, status)
DEMO_ATTENDANCE = [
    ("101", "Redes de Datos - 5to A", "2024-08-01", "absent"),
    ("103", "Bases de Datos - 5to B", "2024-08-01", "absent"),
    ("101", "Redes de Datos - 5to A", "2024-08-05", "absent"),
    ("102", "Redes de Datos - 5to A", "2024-08-02", "late"),
    ("104", "Bases de Datos - 5to B", "2024-08-05", "absent"),
]

DEMO_NEWS = [
    (
        "222",
        "Suspensión de clases Ed. Física",
        "Se suspenden las clases de Educación Física del día 10/08 por mal tiempo para 5to Año A y B.",
    ),
    (
        "111",
        "Acto 17 de Agosto",
        "El acto en conmemoración del Gral. San Martín se realizará en el SUM a las 10:00. Asistencia obligatoria.",
    ),
]


def seed_demo_data(container) -> bool:
    """Load the demo school; does nothing if any user exists. Returns True when seeded."""
    if container.user_service.list_users():
        logger.info("Demo seed skipped: users already present")
        return False

    by_document = {}
    for name, document, role, group in DEMO_USERS:
        by_document[document] = container.user_service.create_user(
            name=name, document=document, role=role, course=group
        )

    courses = {}
    for name, subject, classroom, hours, max_absences, group in DEMO_COURSES:
        students = [u.user_id for u in by_document.values() if u.course == group]
        courses[name] = container.course_service.create_course(
            name=name,
            subject=subject,
            classroom=classroom,
            schedule=hours,
            max_absences=max_absences,
            students=students,
        )

    for document, course_name, on_date, status in DEMO_ATTENDANCE:
        container.attendance_service.set_attendance(
            by_document[document].user_id, on_date, status, courses[course_name].course_id
        )

    for document, title, content in DEMO_NEWS:
        container.news_service.create_news(title=title, content=content, author_id=by_document[document].user_id)

    logger.info("Demo seed loaded: %d users, %d courses", len(by_document), len(courses))
    return True
