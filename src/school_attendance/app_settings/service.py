from __future__ import annotations

from typing import Any, Mapping

from ..core.exceptions import ValidationError
from .repository import SettingsRepository

SETTINGS_KEY = "app_settings"


class SettingsService:
    """Application-wide key/value settings (no active consumer yet)."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get_settings(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for doc in self._settings.list_documents():
            merged.update(doc)
        return merged

    def update_settings(self, values: Mapping[str, Any]) -> dict[str, Any]:
        if not isinstance(values, Mapping):
            raise ValidationError("Settings must be an object")
        self._settings.upsert(SETTINGS_KEY, values)
        return dict(values)
