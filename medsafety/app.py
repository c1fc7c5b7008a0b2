"""FastAPI backend for the pharmacy medication safety service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from medsafety import __version__
from medsafety.config import CORS_ORIGINS, LOG_LEVEL, get_db_path, load_rule_overrides
from medsafety.ratelimit import limiter
from medsafety.repository import init_db
from medsafety.routes import audit_router, safety_router
from medsafety.validation.registry import default_registry
from medsafety.validation.ruleset import register_default_rules

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup."""
    init_db(get_db_path())
    register_default_rules(default_registry)
    app.state.rule_overrides = load_rule_overrides()
    logger.info(
        f"Safety rules registered: {len(default_registry.active_rules())} "
        f"({len(app.state.rule_overrides)} overrides)"
    )
    yield


app = FastAPI(
    title="Pharmacy Medication Safety",
    description="Prescription safety validation against patient clinical factors",
    version=__version__,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(safety_router)
app.include_router(audit_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "rules_registered": len(default_registry.active_rules()),
    }
