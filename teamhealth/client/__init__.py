from teamhealth.client.board import FormState, HealthCheckBoard, LoadState
from teamhealth.client.client import (
    HealthCheckApiError,
    HealthCheckClient,
    HealthCheckOfflineError,
)

__all__ = [
    "FormState",
    "HealthCheckApiError",
    "HealthCheckBoard",
    "HealthCheckClient",
    "HealthCheckOfflineError",
    "LoadState",
]
