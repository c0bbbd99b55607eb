"""Submission validation.

``validate_submission`` takes whatever the caller decoded from the request
body and returns either ``Valid`` (holding a normalized ``NewHealthCheck``)
or ``Invalid`` (holding every field error found). Server and clients each
call it independently; the server's answer is the one that counts.

Rules:
  name     non-empty string
  feeling  non-empty string (any label, the form's list is not enforced)
  date     ISO-8601 date or date-time; normalized to a UTC instant
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from teamhealth.records.models import NewHealthCheck

NAME_REQUIRED = "Name is required"
FEELING_REQUIRED = "Feeling is required"
INVALID_DATE = "Invalid date format"
EXPECTED_STRING = "Expected string"
EXPECTED_OBJECT = "Expected object"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class Valid:
    record: NewHealthCheck


@dataclass(frozen=True)
class Invalid:
    errors: list[FieldError]


ValidationResult = Valid | Invalid


# ── Instants ─────────────────────────────────────────────────────────────────


def parse_instant(value: str) -> datetime | None:
    """Parse an ISO-8601 date / date-time into an aware UTC datetime.

    Values without an offset are taken as UTC. Returns None when the value
    cannot be read as an instant.
    """
    text = value.strip()
    if not text or text != value:
        return None
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        # Offsets at the edges of the datetime range overflow on conversion
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def to_instant_string(moment: datetime) -> str:
    """Render a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    m = moment.astimezone(timezone.utc)
    return (
        f"{m.year:04d}-{m.month:02d}-{m.day:02d}"
        f"T{m.hour:02d}:{m.minute:02d}:{m.second:02d}.{m.microsecond // 1000:03d}Z"
    )


def normalize_instant(value: str) -> str | None:
    parsed = parse_instant(value)
    return to_instant_string(parsed) if parsed else None


# ── Submission ───────────────────────────────────────────────────────────────


def _required_text(payload: dict[str, Any], key: str, missing: str) -> FieldError | None:
    value = payload.get(key)
    if value is None or value == "":
        return FieldError(key, missing)
    if not isinstance(value, str):
        return FieldError(key, EXPECTED_STRING)
    return None


def validate_submission(payload: Any) -> ValidationResult:
    """Check a raw submission and normalize its date."""
    if not isinstance(payload, dict):
        return Invalid([FieldError("", EXPECTED_OBJECT)])

    errors: list[FieldError] = []
    for key, missing in (("name", NAME_REQUIRED), ("feeling", FEELING_REQUIRED)):
        err = _required_text(payload, key, missing)
        if err:
            errors.append(err)

    raw_date = payload.get("date")
    date = normalize_instant(raw_date) if isinstance(raw_date, str) else None
    if date is None:
        errors.append(FieldError("date", INVALID_DATE))

    if errors:
        return Invalid(errors)
    return Valid(NewHealthCheck(name=payload["name"], feeling=payload["feeling"], date=date))
