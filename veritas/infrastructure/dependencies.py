"""Dependency injection configuration for hexagonal architecture."""

import logging
import os
from functools import lru_cache
from typing import Any, Dict

from dotenv import load_dotenv

from ..domain.services.fact_checking_service import FactCheckConfig, FactCheckingService
from ..domain.services.history_service import DEFAULT_HISTORY_LIMIT, HistoryService
from ..domain.services.submission_gate import SubmissionGate
from .ai.factory import AIProviderFactory
from .ai.gemini_adapter import API_KEY_ENV_VARS
from .storage.json_file_store import JsonFileKeyValueStore

# Load environment variables from .env file if it exists
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_PATH = "~/.veritas/history.json"


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(self):
        """Initialize service container."""
        self._services: Dict[str, Any] = {}
        self.ai_factory = AIProviderFactory()
        self._setup_services()

    def _setup_services(self):
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")

        history_path = os.getenv("VERITAS_HISTORY_PATH", DEFAULT_HISTORY_PATH)
        history_limit = int(os.getenv("VERITAS_HISTORY_LIMIT", str(DEFAULT_HISTORY_LIMIT)))
        store = JsonFileKeyValueStore(history_path)
        logger.info(f"📁 History stored in {store.path} (limit {history_limit})")

        submission_gate = SubmissionGate(
            success_cooldown=float(os.getenv("VERITAS_SUCCESS_COOLDOWN", "10")),
            quota_cooldown=float(os.getenv("VERITAS_QUOTA_COOLDOWN", "60")),
        )

        if not any(os.getenv(name) for name in API_KEY_ENV_VARS):
            logger.warning("⚠️ API_KEY / GEMINI_API_KEY not found in environment variables; checks will fail until set")

        self._services = {
            'history_service': HistoryService(store, max_items=history_limit),
            'submission_gate': submission_gate,
            'fact_checking_service': None,  # Created on demand with its provider
        }

        logger.info("✅ Service container setup completed")

    async def _ensure_fact_checking_service(self) -> FactCheckingService:
        """Ensure fact checking service is created with its provider."""
        if self._services['fact_checking_service'] is None:
            logger.info("🔧 Creating FactCheckingService with provider...")
            ai_provider = self.ai_factory.get_provider("gemini")
            if ai_provider is None:
                ai_provider = await self.ai_factory.create_provider("gemini")
            self._services['fact_checking_service'] = FactCheckingService(ai_provider, FactCheckConfig())
            logger.info("✅ FactCheckingService created")

        return self._services['fact_checking_service']

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    def get_history_service(self) -> HistoryService:
        """Get history service."""
        return self.get('history_service')

    def get_submission_gate(self) -> SubmissionGate:
        """Get submission gate."""
        return self.get('submission_gate')

    async def get_fact_checking_service(self) -> FactCheckingService:
        """Get fact checking service with its provider."""
        return await self._ensure_fact_checking_service()

    async def shutdown(self) -> None:
        """Release provider resources."""
        await self.ai_factory.shutdown()
        self._services['fact_checking_service'] = None


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_history_service() -> HistoryService:
    """FastAPI dependency for history service."""
    return get_service_container().get_history_service()


def get_submission_gate() -> SubmissionGate:
    """FastAPI dependency for submission gate."""
    return get_service_container().get_submission_gate()


async def get_fact_checking_service() -> FactCheckingService:
    """FastAPI dependency for fact checking service."""
    container = get_service_container()
    return await container.get_fact_checking_service()
