"""Gemini implementation of the AI provider interface."""

import logging
import os
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from ...domain.errors import BackendCallError, ConfigurationError
from ...domain.ports.ai_provider import AIProvider, GenerationRequest, GenerationResponse, GroundingChunk

logger = logging.getLogger(__name__)

API_KEY_ENV_VARS = ("API_KEY", "GEMINI_API_KEY")
RATE_LIMIT_MARKERS = ("429", "resource_exhausted", "quota")


class GeminiConfig(BaseModel):
    """Configuration for Gemini adapter."""

    api_key: Optional[str] = Field(
        default=None,
        description="Gemini API key; read from API_KEY or GEMINI_API_KEY at call time when unset",
    )
    model: str = Field(default="gemini-2.5-flash", description="Model to use (must support Google Search grounding)")
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Generative Language API base URL",
    )
    timeout: float = Field(default=60.0, description="Per-attempt timeout in seconds")


def resolve_api_key(configured: Optional[str] = None) -> str:
    """Resolve the API key from configuration or the process environment.

    Raises:
        ConfigurationError: If no key is available
    """
    if configured:
        return configured
    for name in API_KEY_ENV_VARS:
        if value := os.getenv(name):
            return value
    raise ConfigurationError(
        "Missing API Key. Please ensure API_KEY or GEMINI_API_KEY is set in your environment or .env file."
    )


def is_rate_limit_response(status_code: int, body: str) -> bool:
    """Classify a failed response as quota exhaustion."""
    if status_code == 429:
        return True
    lowered = body.lower()
    return any(marker in lowered for marker in RATE_LIMIT_MARKERS)


class GeminiAdapter(AIProvider):
    """Gemini implementation of the AI provider interface.

    Sends one ``generateContent`` request per call over the REST API, with
    Google Search grounding enabled on request. Retries are left to callers.
    """

    def __init__(
        self,
        config: Optional[GeminiConfig] = None,
    ):
        """Initialize the adapter."""
        self._config = config or GeminiConfig()
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        """Initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers={"Content-Type": "application/json"},
            )

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Execute a single generation request.

        Raises:
            ConfigurationError: If no API key is configured (no request is sent)
            BackendCallError: If the request fails, flagged when rate-limited
        """
        api_key = resolve_api_key(self._config.api_key)
        if self._client is None:
            await self.initialize()

        body: Dict[str, Any] = {
            "system_instruction": {"parts": [{"text": request.system_instruction}]},
            "contents": [{"role": "user", "parts": [{"text": request.user_prompt}]}],
        }
        if request.enable_search_grounding:
            body["tools"] = [{"google_search": {}}]

        try:
            response = await self._client.post(
                f"/models/{self._config.model}:generateContent",
                json=body,
                headers={"x-goog-api-key": api_key},
            )
        except httpx.TimeoutException as e:
            raise BackendCallError(f"Request timed out after {self._config.timeout:.0f}s") from e
        except httpx.HTTPError as e:
            raise BackendCallError(f"Request to {self.provider_name} failed: {e}") from e

        if response.status_code >= 400:
            raise self._error_from_response(response)

        try:
            payload = response.json()
        except ValueError as e:
            raise BackendCallError("Backend returned a response that is not JSON", response.status_code) from e

        return self._parse_payload(payload)

    def _error_from_response(self, response: httpx.Response) -> BackendCallError:
        message = f"HTTP {response.status_code}"
        try:
            error = response.json().get("error")
            if isinstance(error, dict) and error.get("message"):
                message = error["message"]
        except (ValueError, AttributeError):
            pass

        rate_limited = is_rate_limit_response(response.status_code, response.text)
        logger.warning(
            f"⚠️ {self.provider_name} returned {response.status_code}"
            f"{' (rate limited)' if rate_limited else ''}: {message}"
        )
        return BackendCallError(message, status_code=response.status_code, is_rate_limited=rate_limited)

    def _parse_payload(self, payload: Dict[str, Any]) -> GenerationResponse:
        candidates = payload.get("candidates") or []
        if not candidates:
            logger.warning(f"⚠️ No candidates in response, prompt feedback: {payload.get('promptFeedback')}")
            return GenerationResponse()

        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(
            part.get("text", "")
            for part in parts
            if isinstance(part, dict) and not part.get("thought")
        )

        metadata = candidate.get("groundingMetadata") or {}
        chunks: List[GroundingChunk] = []
        for chunk in metadata.get("groundingChunks") or []:
            web = chunk.get("web") if isinstance(chunk, dict) else None
            if web:
                chunks.append(GroundingChunk(uri=web.get("uri") or "", title=web.get("title") or ""))

        logger.info(f"🤖 {self.provider_name} answered with {len(text)} chars and {len(chunks)} grounding chunks")
        return GenerationResponse(text=text, grounding_chunks=chunks)

    async def shutdown(self) -> None:
        """Clean up resources and shut down the provider."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def provider_name(self) -> str:
        """Get the name of the AI provider."""
        return "Gemini"

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        return self._client is not None

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        return {
            "search_grounding": True,
            "claim_extraction": True,
            "claim_verification": True,
        }
