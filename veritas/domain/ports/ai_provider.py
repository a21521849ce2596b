"""Protocol for generative-language providers with search grounding."""

from typing import Dict, List, Protocol

from pydantic import BaseModel, Field


class GenerationRequest(BaseModel):
    """One request to a generative-language backend."""

    system_instruction: str = Field(..., description="Fixed instruction describing the task")
    user_prompt: str = Field(..., description="Single user turn")
    enable_search_grounding: bool = Field(default=True, description="Let the backend consult live web search")


class GroundingChunk(BaseModel):
    """A web reference the backend consulted while answering."""

    uri: str
    title: str = ""


class GenerationResponse(BaseModel):
    """Response of a generative-language backend."""

    text: str = Field(default="", description="Raw model text")
    grounding_chunks: List[GroundingChunk] = Field(
        default_factory=list,
        description="Out-of-band list of web references used for grounding",
    )


class AIProvider(Protocol):
    """Protocol defining the interface for AI providers.

    Implementations raise ``BackendCallError`` for failed calls, with
    ``is_rate_limited`` set when the backend signalled quota exhaustion, and
    ``ConfigurationError`` when no credential is available.
    """

    async def initialize(self) -> None:
        """Initialize the AI provider."""
        ...

    async def shutdown(self) -> None:
        """Clean up resources."""
        ...

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Execute one request, without retries."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the name of the AI provider."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is ready."""
        ...

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        ...
