"""Client-side view of the health-check list.

Mirrors what the browser page keeps: the displayed records, a loading flag
for the first fetch, a submitting flag per form submission, and one inline
error message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from teamhealth.client.client import (
    HealthCheckApiError,
    HealthCheckClient,
    HealthCheckOfflineError,
)
from teamhealth.records.models import HealthCheckRecord
from teamhealth.records.validation import FieldError, Invalid, validate_submission

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    LOADING = "loading"
    READY = "ready"


class FormState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


@dataclass
class HealthCheckBoard:
    client: HealthCheckClient
    records: list[HealthCheckRecord] = field(default_factory=list)
    load_state: LoadState = LoadState.LOADING
    form_state: FormState = FormState.IDLE
    error: str | None = None
    field_errors: list[FieldError] = field(default_factory=list)

    def load(self) -> None:
        """Fetch the list once and move to ``ready`` whatever the outcome."""
        try:
            self.records = self.client.list()
        except (HealthCheckApiError, HealthCheckOfflineError) as exc:
            self.error = getattr(exc, "message", None) or str(exc) or "Failed to load health checks"
        finally:
            self.load_state = LoadState.READY

    def submit(self, name: str, feeling: str, date: str) -> HealthCheckRecord | None:
        """Validate locally, then create. Returns the stored record or None."""
        result = validate_submission({"name": name, "feeling": feeling, "date": date})
        if isinstance(result, Invalid):
            self.field_errors = result.errors
            return None
        self.field_errors = []

        self.form_state = FormState.SUBMITTING
        try:
            record = self.client.create(
                result.record.name, result.record.feeling, result.record.date
            )
        except (HealthCheckApiError, HealthCheckOfflineError) as exc:
            self.error = getattr(exc, "message", None) or str(exc) or "Failed to submit health check"
            return None
        finally:
            self.form_state = FormState.IDLE

        self.records.insert(0, record)
        self.error = None
        return record
