from __future__ import annotations

from fastapi import APIRouter, Request

from api.utils.request_context import get_configuration
from core.config_models import CompleteConfiguration
from schemas.validation import ValidationReportResponse
from services import validation_service

router = APIRouter(prefix="/configuration", tags=["Configuration"])


@router.post("/validate", response_model=ValidationReportResponse)
async def validate_configuration(payload: CompleteConfiguration) -> ValidationReportResponse:
    """Vet a candidate configuration before it is rolled out or reloaded."""
    result = validation_service.validate_with_details(payload)
    return ValidationReportResponse.from_result(result)


@router.get("/validation", response_model=ValidationReportResponse)
async def running_configuration_report(request: Request) -> ValidationReportResponse:
    """Report on the configuration the service is running with."""
    result = validation_service.validate_with_details(get_configuration(request))
    return ValidationReportResponse.from_result(result)
