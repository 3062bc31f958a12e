"""Rehearsal Backend API - FastAPI Application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rehearsal import __version__
from rehearsal.api.http.analyze import router as analyze_router
from rehearsal.api.http.documents import router as documents_router
from rehearsal.api.http.practice import router as practice_router
from rehearsal.api.http.scenarios import router as scenarios_router
from rehearsal.api.http.speech import router as speech_router
from rehearsal.config import Settings, get_settings
from rehearsal.infrastructure.logging import setup_logging
from rehearsal.infrastructure.middleware import register_error_handlers, register_request_context

# Initialize settings
settings = get_settings()

# Setup logging
setup_logging(
    log_level=settings.log_level,
    debug_namespaces=settings.debug_namespaces,
)

logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Rehearsal Backend", extra={"service": "app"})
    settings.log_config_summary()

    yield

    logger.info("Shutting down Rehearsal Backend", extra={"service": "app"})


app = FastAPI(
    title="Rehearsal API",
    description="Public-speaking practice with simulated conversational partners",
    version=__version__,
    lifespan=lifespan,
)


def get_allowed_origins(config: Settings = settings) -> list[str]:
    """Get list of allowed CORS origins."""
    if config.is_development:
        return ["*"]
    return sorted(set(config.cors_allow_origins_list))


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_request_context(app)
register_error_handlers(app)

app.include_router(scenarios_router)
app.include_router(analyze_router)
app.include_router(documents_router)
app.include_router(speech_router)
app.include_router(practice_router)


# =============================================================================
# Health Check Endpoints
# =============================================================================


@app.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "rehearsal-backend", "version": __version__}
