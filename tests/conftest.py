"""Test configuration and common fixtures."""

import json
from typing import List
from unittest.mock import AsyncMock

import pytest

from veritas.domain.ports.ai_provider import GenerationResponse, GroundingChunk
from veritas.domain.services.fact_checking_service import FactCheckingService
from veritas.infrastructure.storage.memory_store import InMemoryKeyValueStore


@pytest.fixture
def result_payload() -> dict:
    """Provide a model answer matching the result schema."""
    return {
        "summary": "The claim is largely accurate but overstates the figure.",
        "confidenceScore": 78,
        "sources": [
            {
                "title": "Global Temperature",
                "uri": "https://climate.nasa.gov/vital-signs/global-temperature/",
                "snippet": "2023 was the warmest year on record.",
                "publisher": "NASA",
                "publishedDate": "2024-01-12",
                "category": "government",
            },
            {
                "title": "State of the Climate",
                "uri": "https://www.nature.com/articles/climate-2023",
                "category": "academic",
            },
        ],
        "claims": [
            {
                "text": "2023 was the warmest year on record.",
                "verdict": "verified",
                "reasoning": "Both NASA and NOAA report 2023 as the warmest year.",
                "sourceIndices": [0, 1],
                "evidenceStrength": "high",
            },
            {
                "text": "Temperatures rose by 2 degrees.",
                "verdict": "partially_true",
                "reasoning": "The rise is about 1.2 degrees above pre-industrial levels.",
                "sourceIndices": [0],
                "evidenceStrength": "medium",
            },
        ],
    }


@pytest.fixture
def model_text(result_payload: dict) -> str:
    """Provide model text with commentary around the JSON, as models sometimes answer."""
    return f"Here is the analysis you asked for:\n```json\n{json.dumps(result_payload)}\n```\nLet me know!"


@pytest.fixture
def grounded_response(model_text: str) -> GenerationResponse:
    """Provide a backend response with grounding chunks."""
    return GenerationResponse(
        text=model_text,
        grounding_chunks=[
            GroundingChunk(uri="https://CLIMATE.NASA.GOV/vital-signs/global-temperature/", title="nasa.gov"),
            GroundingChunk(uri="https://www.noaa.gov/news/2023-warmest-year", title="noaa.gov"),
        ],
    )


@pytest.fixture
def ai_provider() -> AsyncMock:
    """Provide a mock AI provider."""
    provider = AsyncMock()
    provider.provider_name = "Mock"
    provider.is_available = True
    return provider


@pytest.fixture
def sleeps() -> List[float]:
    """Collect the delays the retry policy waits for."""
    return []


@pytest.fixture
def service(ai_provider: AsyncMock, sleeps: List[float]) -> FactCheckingService:
    """Provide a fact checking service that records waits instead of sleeping."""
    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return FactCheckingService(ai_provider, sleep=fake_sleep)


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Provide an empty in-memory store."""
    return InMemoryKeyValueStore()
