"""FastAPI application untuk sistem penilaian anggota."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.database import init_db, close_db
from src.core.redis import close_redis
from src.api.router import api_router
from src.middleware.error_handler import add_error_handlers
from src.middleware.security_headers import add_security_headers
from src.utils.logging import setup_logging

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting {settings.PROJECT_NAME}...")

    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    logger.info("Configuration loaded:")
    logger.info(f"   - Environment: {'Development' if settings.DEBUG else 'Production'}")
    logger.info(f"   - Redis: {'enabled' if settings.REDIS_HOST else 'disabled (rate limiting fails open)'}")
    logger.info(f"   - Auth Rate Limiting: {settings.AUTH_RATE_LIMIT_CALLS} calls/{settings.AUTH_RATE_LIMIT_PERIOD}s")
    logger.info(f"   - Admin joins periodic evaluation: {settings.ADMIN_JOINS_PERIODIC_EVALUATION}")

    yield

    logger.info("Shutting down...")
    await close_redis()
    await close_db()
    logger.info("Shutdown completed")


def create_application() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="""
        **Sistem Penilaian Anggota**

        Penilaian antar anggota organisasi per event:

        * **Event PERIODIC**: penugasan berdasarkan role (BPI, KADIV, ANGGOTA) dan divisi
        * **Event PROKER**: semua panitia program kerja saling menilai
        * **Nilai 1-5** per indikator (hard skill, soft skill, lainnya)
        * **Laporan** rata-rata per evaluatee dengan feedback anonim, export CSV/XLSX

        ## Authentication

        1. **Login**: POST `/api/v1/auth/login` dengan NIM dan password
        2. Token disimpan di HTTP-only cookie, atau kirim `Authorization: Bearer <token>`
        """,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS_LIST,
        allow_credentials=True,
        allow_methods=settings.CORS_METHODS_LIST,
        allow_headers=settings.CORS_HEADERS_LIST,
        expose_headers=["Content-Disposition", "Retry-After"],
    )

    add_security_headers(app)
    add_error_handlers(app)

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.PROJECT_NAME}",
            "version": settings.VERSION,
            "status": "operational",
            "documentation": "/docs" if settings.DEBUG else "Documentation disabled in production",
        }

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "service": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "environment": "development" if settings.DEBUG else "production"
        }

    return app


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info" if not settings.DEBUG else "debug",
        access_log=True
    )
