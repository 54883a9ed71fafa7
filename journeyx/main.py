"""
FastAPI application entry point.

Assembles the app and owns the lifecycle of process-wide collaborators:
the generation pipeline, the saved-trip store and the travel book sink.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journeyx.planner import ItineraryGenerator
from journeyx.session import JsonFileStore, PlanningSession
from journeyx.session.session_api import configure_sessions, router as session_router
from journeyx.shared import config, setup_logging
from journeyx.sync import SupabaseDocumentSink, SyncGateway


# ============================================================================
# Logging configuration (single source of truth for the service)
# ============================================================================
LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
)

_level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)

if config.LOG_FORMAT == "json":
    setup_logging(level=_level)
else:
    logging.basicConfig(
        level=_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,  # Override any prior basicConfig calls
    )

# Quiet noisy third-party loggers
for _name in ("httpcore", "httpx", "hpack", "openai", "postgrest"):
    logging.getLogger(_name).setLevel(logging.WARNING)


# ============================================================================
# Collaborators
# ============================================================================
_generator = ItineraryGenerator()
_store = JsonFileStore(config.STORAGE_DIR)
_gateway = SyncGateway(SupabaseDocumentSink())


def create_planning_session() -> PlanningSession:
    """Build a session wired to the process-wide collaborators."""
    return PlanningSession(
        generate=_generator,
        store=_store,
        sync_gateway=_gateway,
    )


configure_sessions(create_planning_session)


# Create FastAPI app
app = FastAPI(
    title="JourneyX Pro",
    description="AI travel itinerary planning with validated model output",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(session_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "JourneyX Pro",
        "version": "0.1.0",
        "endpoints": {
            "sessions": "/api/sessions",
        },
        "model": config.LLM_MODEL,
    }


@app.get("/health")
async def health():
    """Liveness plus which optional backends are configured."""
    return {
        "status": "healthy",
        "generation_configured": bool(config.OPENAI_API_KEY),
        "sync_configured": bool(config.SUPABASE_URL and config.SUPABASE_KEY),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
