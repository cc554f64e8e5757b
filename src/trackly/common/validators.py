from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required", [{"field": field_name, "msg": "required"}])
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(
            f"{field_name} must be at least {min_len} characters",
            [{"field": field_name, "msg": f"min length {min_len}"}],
        )
    return value


def require_email(value: str, field_name: str = "email") -> str:
    v = require_non_empty(value, field_name).lower()
    if not _EMAIL_RE.match(v):
        raise ValidationError("Valid email address is required", [{"field": field_name, "msg": "invalid email"}])
    return v


def require_fields(payload: Mapping[str, Any], fields: Sequence[str]) -> None:
    """Collect every missing field into one ValidationError."""

    errors = [{"field": f, "msg": "required"} for f in fields if payload.get(f) in (None, "")]
    if errors:
        names = ", ".join(e["field"] for e in errors)
        raise ValidationError(f"Missing required fields: {names}", errors)


def require_choice(value: str, field_name: str, choices: Sequence[str]) -> str:
    if value not in choices:
        raise ValidationError(
            f"{field_name} must be one of: {', '.join(choices)}",
            [{"field": field_name, "msg": "invalid choice"}],
        )
    return value
