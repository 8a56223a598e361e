"""Field mapping between domain objects (snake_case) and JSON payloads (camelCase).

Conversion is total: every dataclass field is emitted, except optional fields
holding None, which are left out of the payload.
"""
from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional

# Entities declare their primary key first (user_id, course_id, ...); the API exposes it as "id".
PRIMARY_KEYS = {"user_id", "course_id", "attendance_id", "news_id"}


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_snake(name: str) -> str:
    out: list[str] = []
    for ch in name:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def _value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_value(v) for v in value]
    if dataclasses.is_dataclass(value):
        return to_payload(value)
    return value


def to_payload(obj: Any) -> dict:
    """Serialize a domain dataclass into a camelCase dict."""
    fields = dataclasses.fields(obj)
    primary_key = fields[0].name if fields and fields[0].name in PRIMARY_KEYS else None

    out: dict[str, Any] = {}
    for field in fields:
        value = getattr(obj, field.name)
        if value is None:
            continue
        key = "id" if field.name == primary_key else to_camel(field.name)
        out[key] = _value(value)
    return out


def from_payload(payload: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Convert a camelCase JSON body into snake_case keys."""
    return {to_snake(str(k)): v for k, v in (payload or {}).items()}
