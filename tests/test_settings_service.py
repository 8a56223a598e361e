import pytest

from school_attendance.core.exceptions import ValidationError


def test_settings_start_empty(container):
    assert container.settings_service.get_settings() == {}


def test_update_settings_overwrites_document(container):
    svc = container.settings_service

    svc.update_settings({"schoolName": "EEST 1", "lateWeight": 0.5})
    svc.update_settings({"schoolName": "EEST 2"})

    assert svc.get_settings() == {"schoolName": "EEST 2"}


def test_settings_must_be_an_object(container):
    with pytest.raises(ValidationError):
        container.settings_service.update_settings(["not", "a", "mapping"])
