"""Budget Planner API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BudgetPlannerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized before serving and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from budget_planner.api.error_handlers import register_error_handlers
from budget_planner.api.routes import budgets, expenses, health
from budget_planner.config import get_settings
from budget_planner.infrastructure.database import close_db, init_db
from budget_planner.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Budget Planner API started")
    yield
    logger.info("Budget Planner API shutting down")
    await close_db()


app = FastAPI(
    title="Budget Planner API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)

app.include_router(health.router)
app.include_router(budgets.router)
app.include_router(expenses.router)

register_error_handlers(app)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Budget Planner API is running"
