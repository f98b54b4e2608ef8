"""
ForgeNova Admin API - FastAPI backend for the ForgeNova admin panel
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.gzip import GZipMiddleware

from forgenova_admin import deps
from forgenova_admin.routers import health
from forgenova_admin.routers.admin import router as admin_router
from forgenova_admin.security import setup_security

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown logging."""
    if deps.supabase is None:
        logger.warning("Supabase is not configured; admin endpoints will return 500")
    logger.info("ForgeNova Admin API started")
    yield
    logger.info("ForgeNova Admin API shutdown complete")


app = FastAPI(
    title="ForgeNova Admin API",
    description="Admin authorization and settings management for ForgeNovaAI",
    version="1.0.0",
    lifespan=lifespan,
)

# ============================================================================
# CORS
# ============================================================================

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
DEFAULT_PRODUCTION_ORIGIN = "https://forgenova.ai"

if ENVIRONMENT == "production":
    ALLOWED_ORIGINS_RAW = os.getenv("ALLOWED_ORIGINS", DEFAULT_PRODUCTION_ORIGIN).split(",")

    ALLOWED_ORIGINS = []
    for origin in ALLOWED_ORIGINS_RAW:
        origin = origin.strip()
        if not origin:
            continue
        if not origin.startswith("https://"):
            logger.warning("[CORS] Rejecting non-HTTPS origin in production: %s", origin)
            continue
        if "localhost" in origin or "127.0.0.1" in origin:
            logger.warning("[CORS] Rejecting localhost origin in production: %s", origin)
            continue
        ALLOWED_ORIGINS.append(origin)

    if not ALLOWED_ORIGINS:
        ALLOWED_ORIGINS = [DEFAULT_PRODUCTION_ORIGIN]
        logger.warning("[CORS] No valid origins configured, using default production origin")
else:
    default_origins = "http://localhost:3000,http://localhost:5173,http://localhost:8080"
    ALLOWED_ORIGINS_RAW = os.getenv("ALLOWED_ORIGINS", default_origins).split(",")
    ALLOWED_ORIGINS = [origin.strip() for origin in ALLOWED_ORIGINS_RAW if origin.strip()]

if not ALLOWED_ORIGINS:
    raise ValueError("CORS configuration error: No valid allowed origins configured")

logger.info("[CORS] Environment: %s, allowed origins: %s", ENVIRONMENT, ALLOWED_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Requested-With"],
)

app.add_middleware(GZipMiddleware, minimum_size=500)

setup_security(app, ALLOWED_ORIGINS)

# ============================================================================
# Routes
# ============================================================================

app.include_router(health.router)
app.include_router(admin_router)

# Static admin pages are mounted last so /api/* always wins.
STATIC_DIR = os.getenv("STATIC_DIR")
if STATIC_DIR and os.path.isdir(STATIC_DIR):
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")
    logger.info("Serving static pages from %s", STATIC_DIR)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
