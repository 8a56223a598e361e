import pytest

from school_attendance.container import build_memory_container
from school_attendance.main import create_app

from factories import build_school


@pytest.fixture
def container():
    c = build_memory_container()
    build_school(c)
    return c


@pytest.fixture
def app(container):
    return create_app("school_attendance.config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()
