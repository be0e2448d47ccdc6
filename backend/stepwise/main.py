import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import stepwise.wizards  # noqa: F401 (registers built-in wizard types)
from stepwise.config import settings
from stepwise.database import engine
from stepwise.middleware.exceptions import register_exception_handlers
from stepwise.routers import health, wizard

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Dispose of pooled database connections on shutdown."""
    logger.info("Stepwise started")
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Stepwise stopped")


app = FastAPI(
    title="Stepwise",
    description="Multi-step form wizards with save/resume",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware ───────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
app.include_router(health.router)
app.include_router(wizard.router, prefix=settings.wizard_prefix, tags=["wizard"])
