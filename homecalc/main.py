"""HomeCalc AI API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map HomeCalcError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured once on startup via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from homecalc.api.error_handlers import register_error_handlers
from homecalc.api.routes import ai_flows, calculators, health
from homecalc.config import get_settings
from homecalc.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("HomeCalc AI API started")
    yield
    logger.info("HomeCalc AI API shutting down")


app = FastAPI(title="HomeCalc AI API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(calculators.router)
app.include_router(ai_flows.router)

register_error_handlers(app)
