"""Record service: validated create + newest-first list over a store."""

from __future__ import annotations

import logging
from typing import Any

from teamhealth.records.errors import ValidationError
from teamhealth.records.models import HealthCheckRecord
from teamhealth.records.store import RecordStore
from teamhealth.records.validation import Invalid, validate_submission

logger = logging.getLogger(__name__)


class RecordService:
    """Create and list health checks. The store is supplied by the caller."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def create(self, payload: Any) -> HealthCheckRecord:
        """Validate ``payload`` and insert it as one row.

        Raises ValidationError before touching the store, or StoreError if
        the store rejects the insert.
        """
        result = validate_submission(payload)
        if isinstance(result, Invalid):
            raise ValidationError(result.errors)
        record = self._store.insert(result.record)
        logger.info("Recorded health check %s for %s", record.id, record.name)
        return record

    def list(self) -> list[HealthCheckRecord]:
        """All records, most recently created first."""
        return self._store.select_all()
