"""
Spark - Main Application Entry Point

FastAPI application serving the goal and spark JSON API.
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from config import settings
from .ai.generator import SparkGenerator
from .api import router as api_router, register_exception_handlers
from .auth.identity import IdentityProvider
from .database.connection import Database
from .middleware.slowapi_limiter import setup_rate_limiting
from .monitoring.middleware import metrics_middleware

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    logger.info("Starting Spark...")

    database = Database(settings)
    app.state.database = database
    app.state.identity = IdentityProvider(settings)
    app.state.spark_generator = SparkGenerator(config=settings)

    try:
        if await database.initialize():
            logger.info("PostgreSQL database initialized")
        else:
            logger.warning("PostgreSQL not configured or failed to initialize")
    except Exception as e:
        logger.warning(f"PostgreSQL init failed: {e}")

    if not settings.groq_api_key:
        logger.warning("GROQ_API_KEY not configured, every spark will be the fallback")
    if not settings.auth_url:
        logger.warning("AUTH_URL not configured, every request will be unauthorized")

    yield

    logger.info("Shutting down Spark...")
    try:
        await database.close()
    except Exception as e:
        logger.warning(f"Failed to close database during shutdown: {e}")

    logger.info("Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Spark",
    description="Tiny AI-suggested next actions toward your goals",
    version=VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(metrics_middleware)

register_exception_handlers(app)
setup_rate_limiting(app)

app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "status": "healthy",
        "service": "Spark",
        "version": VERSION
    }


@app.get("/health")
async def health_check(request: Request):
    """Detailed health check endpoint."""
    db_health = {"status": "not_configured"}
    database = getattr(request.app.state, "database", None)
    if database is not None and settings.database_url:
        try:
            db_health = await database.health_check()
        except Exception as e:
            db_health = {"status": "error", "error": str(e)}

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {
            "database": db_health.get("status", "unknown"),
            "llm": bool(settings.groq_api_key),
            "identity_provider": bool(settings.auth_url),
        }
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "spark.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
