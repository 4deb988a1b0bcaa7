import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .core.config import (
    CORS_ORIGINS,
    DATABASE_URL,
    GENERATE_SCHEMAS,
    RATE_LIMIT,
    RATE_LIMIT_ENABLED,
)
from .core.errors import exception_handlers
from .core.logging_config import setup_logging
from .core.store import RecordStore
from .features.auth.router import router as auth_router
from .features.auth.security import TokenVerifier
from .features.jewelry.router import router as jewelry_router
from .features.sales.router import router as sales_router
from .features.customers.router import router as customers_router
from .features.rates.router import router as rates_router
from .features.analytics.router import router as analytics_router

setup_logging()
logger = logging.getLogger("jewelry_api.main")  # This logger will inherit from 'jewelry_api'

# External handles, built once per process and reached through app.state
record_store = RecordStore(DATABASE_URL, generate_schemas=GENERATE_SCHEMAS)
token_verifier = TokenVerifier()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[RATE_LIMIT],
    enabled=RATE_LIMIT_ENABLED,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the record store on startup and closes it on shutdown.
    """
    logger.info("Starting application...")
    await app.state.record_store.open()

    yield

    await app.state.record_store.close()


app = FastAPI(
    title="Jewelry Inventory API",
    description="API for managing jewelry stock, sales, customers and metal rates.",
    version="0.1.0",
    exception_handlers=exception_handlers(),
    lifespan=lifespan,
)
app.state.record_store = record_store
app.state.token_verifier = token_verifier
app.state.limiter = limiter

app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)


@app.get("/api/health")
async def health_check(request: Request):
    """
    Liveness endpoint; needs no credentials.
    """
    client_host = request.client.host if request.client else "unknown client"
    logger.debug(f"Health check from {client_host}")
    return {"status": "OK", "message": "Jewelry Inventory API is running"}


app.include_router(auth_router, prefix="/api")
app.include_router(jewelry_router, prefix="/api")
app.include_router(sales_router, prefix="/api")
app.include_router(customers_router, prefix="/api")
app.include_router(rates_router, prefix="/api")
app.include_router(analytics_router, prefix="/api")
