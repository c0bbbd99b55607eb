"""Health-check API routes.

Endpoints:
  POST /api/health-checks  — validate and store one check
  GET  /api/health-checks  — all checks, newest first

Every failure is answered here with ``{"error": ...}``:
  400  validation failure (list of field errors) or store rejection (message)
  500  anything else
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from teamhealth.records.errors import StoreError, ValidationError
from teamhealth.records.service import RecordService
from teamhealth.records.validation import EXPECTED_OBJECT, FieldError

logger = logging.getLogger(__name__)

health_check_router = APIRouter(prefix="/health-checks", tags=["health-checks"])

INTERNAL_ERROR = "Internal Server Error"


def _get_service(request: Request) -> RecordService:
    return request.app.state.record_service  # type: ignore[no-any-return]


def _error(status_code: int, error: Any) -> JSONResponse:
    return JSONResponse({"error": error}, status_code=status_code)


@health_check_router.post("")
async def create_health_check(request: Request) -> JSONResponse:
    """Record one health check and return it as stored."""
    try:
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise ValidationError([FieldError("", EXPECTED_OBJECT)])

        service = _get_service(request)
        record = await run_in_threadpool(service.create, payload)
        return JSONResponse(record.to_dict())
    except ValidationError as exc:
        return _error(400, exc.to_list())
    except StoreError as exc:
        logger.error("Store error: %s", exc.message)
        return _error(400, exc.message)
    except Exception:
        logger.exception("Unexpected error creating health check")
        return _error(500, INTERNAL_ERROR)


@health_check_router.get("")
def list_health_checks(request: Request) -> JSONResponse:
    """List every health check, most recently created first."""
    try:
        records = _get_service(request).list()
        return JSONResponse([r.to_dict() for r in records])
    except StoreError as exc:
        logger.error("Store error: %s", exc.message)
        return _error(400, exc.message)
    except Exception:
        logger.exception("Unexpected error listing health checks")
        return _error(500, INTERNAL_ERROR)
