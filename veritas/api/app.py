"""FastAPI application for the Veritas evidence discovery service."""

import contextlib
import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
load_dotenv()

from ..infrastructure.dependencies import get_service_container
from .endpoints import fact_check, health, history

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application."""
    # Startup: build services so configuration problems show up in the logs early
    container = get_service_container()
    try:
        await container.get_fact_checking_service()
    except Exception as e:
        logger.error(f"❌ Failed to initialize Gemini provider: {e}")

    yield  # Application runs here

    # Shutdown: Cleanup providers
    await container.shutdown()


# Create FastAPI application
app = FastAPI(
    title="Veritas API",
    description="Evidence discovery for free-text claims with web-grounded Gemini",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("VERITAS_CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(fact_check.router)
app.include_router(history.router)
