"""Fact-checking API endpoints."""

import logging
import math

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from ...domain.errors import (
    ConfigurationError,
    CooldownActiveError,
    FactCheckError,
    QuotaExceededError,
    SubmissionInFlightError,
)
from ...domain.models.history import HistoryItem
from ...domain.services.fact_checking_service import FactCheckingService
from ...domain.services.history_service import HistoryService
from ...domain.services.submission_gate import SubmissionGate, SubmissionOutcome
from ...infrastructure.dependencies import (
    get_fact_checking_service,
    get_history_service,
    get_submission_gate,
)
from ..identity import get_identity

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fact-check", tags=["fact-check"])


class TextCheckRequest(BaseModel):
    """Request model for text fact-checking."""

    text: str = Field(..., description="Claim or article paragraph to check")

    @field_validator("text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Text to check cannot be blank")
        return value


class ErrorResponse(BaseModel):
    """Categorized failure shown to the user."""

    type: str = Field(..., description="'quota' when the user should wait, 'general' otherwise")
    message: str = Field(..., description="User-facing message")


@router.post(
    "",
    response_model=HistoryItem,
    responses={
        409: {"description": "A check is already running for this identity"},
        429: {"model": ErrorResponse, "description": "Quota exhausted or cooldown active"},
        502: {"model": ErrorResponse, "description": "Fact check failed"},
        503: {"model": ErrorResponse, "description": "Service not configured"},
    },
)
async def check_text(
    request: TextCheckRequest,
    identity: str = Depends(get_identity),
    service: FactCheckingService = Depends(get_fact_checking_service),
    history: HistoryService = Depends(get_history_service),
    gate: SubmissionGate = Depends(get_submission_gate),
):
    """Check a claim and save the report in the caller's history.

    Args:
        request: Text check request

    Returns:
        The saved history item holding the report
    """
    try:
        gate.acquire(identity)
    except SubmissionInFlightError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except CooldownActiveError as e:
        raise HTTPException(
            status_code=429,
            detail=str(e),
            headers={"Retry-After": str(math.ceil(e.retry_after))},
        )

    outcome = SubmissionOutcome.FAILURE
    try:
        result = await service.check(request.text)
        outcome = SubmissionOutcome.SUCCESS
    except QuotaExceededError as e:
        outcome = SubmissionOutcome.QUOTA
        logger.warning(f"🚫 Quota exhausted for '{identity}'")
        return JSONResponse(status_code=429, content=e.to_dict())
    except ConfigurationError as e:
        logger.error(f"❌ Service not configured: {e.user_message}")
        return JSONResponse(status_code=503, content=e.to_dict())
    except FactCheckError as e:
        logger.error(f"❌ Fact check failed for '{identity}': {type(e).__name__}: {e.user_message}")
        return JSONResponse(status_code=502, content=e.to_dict())
    finally:
        gate.release(identity, outcome)

    return history.record(identity, request.text, result)
