"""Gate rejecting re-submissions while a check runs or a cooldown is active."""

import logging
import time
from enum import Enum
from typing import Callable, Set

from cachetools import TTLCache

from ..errors import CooldownActiveError, SubmissionInFlightError

logger = logging.getLogger(__name__)


class SubmissionOutcome(str, Enum):
    """How a gated check ended."""

    SUCCESS = "success"
    QUOTA = "quota"
    FAILURE = "failure"


class SubmissionGate:
    """Per-identity single-flight gate with cooldown windows.

    A check holds the gate for its identity until released. A successful
    check starts a short cooldown, a quota failure a cooldown as long as the
    backend's quota window; other failures allow an immediate retry.
    """

    def __init__(
        self,
        success_cooldown: float = 10.0,
        quota_cooldown: float = 60.0,
        maxsize: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ):
        """Initialize the gate.

        Args:
            success_cooldown: Seconds to refuse submissions after a success
            quota_cooldown: Seconds to refuse submissions after a quota failure
            maxsize: Maximum number of identities tracked per cooldown
            timer: Clock used for cooldown expiry
        """
        self._timer = timer
        self._in_flight: Set[str] = set()
        self._cooldown_seconds = {
            SubmissionOutcome.SUCCESS: success_cooldown,
            SubmissionOutcome.QUOTA: quota_cooldown,
        }
        self._cooldowns = {
            outcome: TTLCache(maxsize=maxsize, ttl=seconds, timer=timer)
            for outcome, seconds in self._cooldown_seconds.items()
            if seconds > 0
        }

    def is_in_flight(self, identity: str) -> bool:
        return identity in self._in_flight

    def retry_after(self, identity: str) -> float:
        """Get the seconds left before the identity may submit again."""
        now = self._timer()
        expiries = [cache.get(identity) for cache in self._cooldowns.values()]
        return max((expiry - now for expiry in expiries if expiry is not None), default=0.0)

    def acquire(self, identity: str) -> None:
        """Claim the gate for a new check.

        Raises:
            SubmissionInFlightError: If a check for the identity is running
            CooldownActiveError: If the identity is inside a cooldown window
        """
        if identity in self._in_flight:
            raise SubmissionInFlightError(identity)
        retry_after = self.retry_after(identity)
        if retry_after > 0:
            raise CooldownActiveError(identity, retry_after)
        self._in_flight.add(identity)

    def release(self, identity: str, outcome: SubmissionOutcome) -> None:
        """Release the gate and start the cooldown matching the outcome."""
        self._in_flight.discard(identity)
        cache = self._cooldowns.get(outcome)
        if cache is not None:
            cache[identity] = self._timer() + self._cooldown_seconds[outcome]
            logger.info(f"⏱️ Cooldown of {self._cooldown_seconds[outcome]:.0f}s started for '{identity}' ({outcome.value})")
