"""Engine state shared by the route blueprints."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict

from flask import current_app, request

from transcheck.core.models import Position
from transcheck.core.provider import TranslationProvider
from transcheck.core.publisher import DiagnosticsCollector
from transcheck.exceptions import PayloadError

EXTENSION_KEY = "transcheck"


@dataclass
class EngineState:
    """The provider plus the lock serialising every call into it."""

    provider: TranslationProvider
    collector: DiagnosticsCollector
    lock: threading.Lock = field(default_factory=threading.Lock)


def get_state() -> EngineState:
    return current_app.extensions[EXTENSION_KEY]


def get_json_object() -> Dict[str, Any]:
    """Request body as a JSON object, or PayloadError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise PayloadError("Request body must be a JSON object", code="invalid_body")
    return data


def require_string(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise PayloadError(f"'{key}' must be a non-empty string", code="invalid_field", details={"field": key})
    return value


def parse_position(data: Dict[str, Any]) -> Position:
    raw = data.get("position")
    if not isinstance(raw, dict):
        raise PayloadError("'position' must be an object with line and character", code="invalid_position")
    try:
        return Position.from_dict(raw)
    except (KeyError, TypeError) as e:
        raise PayloadError(f"Invalid position: {e}", code="invalid_position") from e
