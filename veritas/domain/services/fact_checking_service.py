"""Service running a claim through the grounded fact-check pipeline."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, Field
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt, wait_fixed

from ..errors import BackendCallError, BackendError, FactCheckError, QuotaExceededError
from ..models.fact_check_result import FactCheckResult
from ..ports.ai_provider import AIProvider, GenerationRequest, GenerationResponse
from .prompts import SYSTEM_INSTRUCTION, build_user_prompt
from .response_parser import parse_result
from .source_reconciler import grounding_sources, reconcile_sources

logger = logging.getLogger(__name__)


class FactCheckConfig(BaseModel):
    """Retry configuration for the fact-check pipeline."""

    max_attempts: int = Field(default=3, ge=1, description="Attempts per check, the first one included")
    quota_reset_delay: float = Field(
        default=62.0,
        ge=0,
        description="Seconds to wait after a rate-limited attempt (60s quota window + 2s margin)",
    )


def is_rate_limited(error: BaseException) -> bool:
    """Check whether a failure is the backend signalling quota exhaustion."""
    return isinstance(error, BackendCallError) and error.is_rate_limited


class FactCheckingService:
    """Service for fact checking free-text claims against web-grounded evidence.

    The service is stateless: each ``check`` call is independent and the
    backoff between attempts suspends only the calling coroutine.
    """

    def __init__(
        self,
        ai_provider: AIProvider,
        config: Optional[FactCheckConfig] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """Initialize the service.

        Args:
            ai_provider: Provider executing single generation requests
            config: Retry configuration
            sleep: Coroutine used to wait between attempts
        """
        self.ai = ai_provider
        self._config = config or FactCheckConfig()
        self._sleep = sleep or asyncio.sleep
        logger.info("🔧 FactCheckingService initialized")

    @staticmethod
    def build_request(claim_text: str) -> GenerationRequest:
        """Compose the grounded generation request for a claim."""
        return GenerationRequest(
            system_instruction=SYSTEM_INSTRUCTION,
            user_prompt=build_user_prompt(claim_text),
            enable_search_grounding=True,
        )

    async def check(self, claim_text: str) -> FactCheckResult:
        """Fact check a claim.

        Args:
            claim_text: Text to check, must not be blank

        Returns:
            Result with model and grounding sources reconciled

        Raises:
            ValueError: If the text is blank
            ConfigurationError: If no API credential is configured
            QuotaExceededError: If the backend is still rate-limiting after all attempts
            MalformedResponseError: If the response holds no JSON object
            ParseError: If the JSON is invalid or off-schema
            BackendError: For any other failure
        """
        if not claim_text or not claim_text.strip():
            raise ValueError("Claim text cannot be empty")

        logger.info(f"🔍 Starting fact check for statement: {claim_text[:100]}...")
        request = self.build_request(claim_text)

        try:
            response = await self._generate_with_backoff(request)
        except FactCheckError:
            raise
        except BackendCallError as e:
            if e.is_rate_limited:
                logger.error(f"🚫 Quota still exhausted after {self._config.max_attempts} attempt(s): {e.message}")
                raise QuotaExceededError() from e
            logger.error(f"❌ Backend call failed (status={e.status_code}): {e.message}")
            raise BackendError(e.message) from e
        except Exception as e:
            logger.error(f"❌ Fact check failed: {type(e).__name__}: {e}", exc_info=True)
            raise BackendError(str(e)) from e

        result = parse_result(response.text)
        result = reconcile_sources(result, grounding_sources(response.grounding_chunks))

        logger.info(
            f"✅ Fact check complete: {len(result.claims)} claims, "
            f"{len(result.sources)} sources, confidence: {result.confidence_score}"
        )
        return result

    async def _generate_with_backoff(self, request: GenerationRequest) -> GenerationResponse:
        """Run the request, waiting out the quota window on rate-limited attempts."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._config.max_attempts),
            wait=wait_fixed(self._config.quota_reset_delay),
            retry=retry_if_exception(is_rate_limited),
            before_sleep=self._log_backoff,
            sleep=self._sleep,
            reraise=True,
        )
        return await retrying(self.ai.generate, request)

    def _log_backoff(self, retry_state: RetryCallState) -> None:
        logger.warning(
            f"⏳ Rate limit hit. Attempt {retry_state.attempt_number}/{self._config.max_attempts}. "
            f"Waiting {self._config.quota_reset_delay:.0f}s for quota window reset..."
        )
