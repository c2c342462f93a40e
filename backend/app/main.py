"""
Market Snapshot Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.api.v1 import router as api_v1_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Provider timeout: {settings.provider_timeout_seconds}s")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Market Snapshot API

    ## Architecture
    - **Provider Fallback**: Binance, Twelve Data, Fixer, ExchangeRate-API,
      Metals-API, Yahoo Finance, Alpha Vantage - tried in order per asset class
    - **Indicator Engine**: RSI, MACD, EMA/SMA, Bollinger, ATR, ADX, Stochastic
    - **Heuristics**: trend label and support/resistance bands

    ## Core Principles
    - Always answers: demo data when every provider fails
    - Provenance is explicit in the `source` field
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors; the core never runs."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request",
            "details": [
                {"loc": [str(part) for part in err.get("loc", ())], "msg": str(err.get("msg", ""))}
                for err in exc.errors()
            ],
        },
    )


# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Market Snapshot API",
        "docs": "/docs",
        "health": "/health",
    }
