"""Error taxonomy for health-check records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from teamhealth.records.validation import FieldError


class ValidationError(Exception):
    """Raised when a submission fails validation. Nothing was stored."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        summary = "; ".join(f"{e.field or 'body'}: {e.message}" for e in errors)
        super().__init__(f"Invalid submission: {summary}")

    def to_list(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self.errors]


class StoreError(Exception):
    """Raised when the underlying store rejects an operation."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
