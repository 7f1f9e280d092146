"""
Hisaab Kitaab: FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hisaab_kitaab.config import get_settings
from hisaab_kitaab.errors import AppError, AuthenticationError
from hisaab_kitaab.logging_config import setup_logging
from hisaab_kitaab.middleware import RequestLogMiddleware
from hisaab_kitaab.models import Base
from hisaab_kitaab.models.base import engine
from hisaab_kitaab.models.repository import RetryPolicy
from hisaab_kitaab.api.auth import router as auth_router
from hisaab_kitaab.api.health import router as health_router
from hisaab_kitaab.api.ledger import router as ledger_router
from hisaab_kitaab.api.saudi import router as saudi_router
from hisaab_kitaab.api.special import router as special_router
from hisaab_kitaab.api.traders import router as traders_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create any missing tables."""
    Base.metadata.create_all(bind=engine)
    logger.info(
        "Application started",
        extra={"environment": settings.ENVIRONMENT},
    )
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Running balances for trader bank, Saudi and special ledgers",
    lifespan=lifespan,
)

app.state.retry_policy = RetryPolicy.from_settings(settings)

app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if isinstance(exc, AuthenticationError)
        else None
    )
    return JSONResponse(
        status_code=exc.http_status,
        content={"detail": exc.message},
        headers=headers,
    )


# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(traders_router)
app.include_router(ledger_router)
app.include_router(saudi_router)
app.include_router(special_router)
