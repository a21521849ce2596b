"""Errors raised by the fact-check pipeline.

Every error carries a ``category`` that callers use to pick a presentation:
``quota`` means the user should wait before resubmitting, ``general`` covers
everything else and its ``user_message`` can be shown as-is.
"""

from typing import Optional

QUOTA_CATEGORY = "quota"
GENERAL_CATEGORY = "general"

QUOTA_EXCEEDED_MESSAGE = (
    "QUOTA_EXCEEDED: The verification engine is at maximum capacity. "
    "A 60-second cooldown is required."
)
GENERIC_FAILURE_MESSAGE = "An unexpected error occurred during investigation."


class FactCheckError(Exception):
    """Base class for failures surfaced to callers of the pipeline."""

    category = GENERAL_CATEGORY

    def __init__(self, user_message: Optional[str] = None):
        self.user_message = user_message or GENERIC_FAILURE_MESSAGE
        super().__init__(self.user_message)

    def to_dict(self) -> dict:
        """Convert the error to the payload shown by callers."""
        return {"type": self.category, "message": self.user_message}


class ConfigurationError(FactCheckError):
    """The API credential is missing."""


class QuotaExceededError(FactCheckError):
    """The backend kept rate-limiting until the retry budget ran out."""

    category = QUOTA_CATEGORY

    def __init__(self, user_message: Optional[str] = None):
        super().__init__(user_message or QUOTA_EXCEEDED_MESSAGE)


class MalformedResponseError(FactCheckError):
    """The response text holds no JSON object delimiters."""

    def __init__(self, user_message: Optional[str] = None):
        super().__init__(
            user_message
            or "The verification engine returned an invalid response format. Please try again."
        )


class ParseError(FactCheckError):
    """The delimited JSON failed to parse or does not match the result schema."""

    def __init__(self, user_message: Optional[str] = None):
        super().__init__(
            user_message
            or "Failed to parse verification result. The response was not valid JSON."
        )


class BackendError(FactCheckError):
    """Any other failure of the outbound call (network, non-quota server error)."""


FactCheckFailedError = BackendError


class BackendCallError(Exception):
    """A failed request to the generative-language backend.

    Raised by provider adapters, which classify rate limiting once so the
    retry policy never has to inspect error text.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        is_rate_limited: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.is_rate_limited = is_rate_limited


class SubmissionRejectedError(Exception):
    """A check was refused before reaching the pipeline."""


class SubmissionInFlightError(SubmissionRejectedError):
    """A check for the same identity is still running."""

    def __init__(self, identity: str):
        super().__init__(f"A check is already running for '{identity}'")
        self.identity = identity


class CooldownActiveError(SubmissionRejectedError):
    """The identity is inside a cooldown window."""

    def __init__(self, identity: str, retry_after: float):
        super().__init__(f"Cooldown active for '{identity}', retry in {retry_after:.0f}s")
        self.identity = identity
        self.retry_after = retry_after
