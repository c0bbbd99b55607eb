from teamhealth.records.errors import StoreError, ValidationError
from teamhealth.records.models import FEELINGS, HealthCheckRecord, NewHealthCheck
from teamhealth.records.service import RecordService
from teamhealth.records.store import (
    RecordStore,
    SQLiteRecordStore,
    SupabaseRecordStore,
    build_store,
)

__all__ = [
    "FEELINGS",
    "HealthCheckRecord",
    "NewHealthCheck",
    "RecordService",
    "RecordStore",
    "SQLiteRecordStore",
    "StoreError",
    "SupabaseRecordStore",
    "ValidationError",
    "build_store",
]
