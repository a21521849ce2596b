"""Health check endpoints."""

import os
from typing import Dict

from fastapi import APIRouter
from pydantic import BaseModel

from ...infrastructure.dependencies import get_service_container
from ...infrastructure.ai.gemini_adapter import API_KEY_ENV_VARS

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    api_key_configured: bool
    ai_providers: Dict[str, bool]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check the health of all service components.

    Returns:
        Provider availability and whether a credential is configured
    """
    ai_factory = get_service_container().ai_factory
    ai_status = {
        provider_name.title(): is_active
        for provider_name, is_active in ai_factory.available_providers.items()
    }

    return HealthResponse(
        status="healthy",
        version="0.1.0",
        api_key_configured=any(os.getenv(name) for name in API_KEY_ENV_VARS),
        ai_providers=ai_status,
    )
