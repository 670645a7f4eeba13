"""Fineasy API Gateway — FastAPI entry point.

Routes are served from domain modules under apps/api/domains/, all mounted
under /api/v1. Errors use RFC 7807 problem details; every request gets a
request id bound into the structlog context.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.core.config import settings
from apps.api.core.errors import register_error_handlers
from apps.api.core.logging import request_context_middleware, setup_logging
from apps.api.domains.accounts.router import router as accounts_router
from apps.api.domains.admin.router import router as admin_router
from apps.api.domains.assistant.router import router as assistant_router
from apps.api.domains.cards.router import router as cards_router
from apps.api.domains.goals.router import router as goals_router
from apps.api.domains.health.router import router as health_router
from apps.api.domains.insights.router import router as insights_router
from apps.api.domains.reports.router import router as reports_router
from apps.api.domains.transactions.router import router as transactions_router

logger = structlog.get_logger()

APP_VERSION = settings.APP_VERSION if settings else "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup/shutdown hooks."""
    if settings:
        setup_logging(log_level=settings.log_level, json_output=settings.json_logs)
    else:
        setup_logging()
        logger.warning("settings_unavailable", hint="SUPABASE_URL / SUPABASE_ANON_KEY not set")
    logger.info("app_starting", version=APP_VERSION)
    yield
    logger.info("app_stopping")


app = FastAPI(
    title="Fineasy API Gateway",
    description="Personal finance summaries, reports and assistant over Supabase data.",
    version=APP_VERSION,
    lifespan=lifespan,
)

register_error_handlers(app)

app.middleware("http")(request_context_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins if settings else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

for router in (
    health_router,
    accounts_router,
    transactions_router,
    cards_router,
    goals_router,
    insights_router,
    reports_router,
    assistant_router,
    admin_router,
):
    app.include_router(router, prefix="/api/v1")
