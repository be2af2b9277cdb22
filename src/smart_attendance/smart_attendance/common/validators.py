from __future__ import annotations

from ..core.constants import MAX_CONFIDENCE, MIN_CONFIDENCE
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_confidence(value) -> int:
    try:
        raw = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Confidence must be a number, got {value!r}")
    if not MIN_CONFIDENCE <= raw <= MAX_CONFIDENCE:
        raise ValidationError(f"Confidence must be within {MIN_CONFIDENCE}..{MAX_CONFIDENCE}, got {value!r}")
    return int(round(raw))


def require_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}")
