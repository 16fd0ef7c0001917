"""API router configuration."""

from fastapi import APIRouter

from src.api.endpoints import (
    auth, users, periods, divisions, prokers, indicators,
    events, evaluations, results
)

# Create main API router
api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
    responses={
        401: {"description": "Unauthorized"},
        429: {"description": "Too many login attempts"},
    }
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["User Management"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "User not found"},
    }
)

# ===== MASTER DATA =====

api_router.include_router(
    periods.router,
    prefix="/periods",
    tags=["Master Data - Periode"],
    responses={404: {"description": "Periode not found"}}
)

api_router.include_router(
    divisions.router,
    prefix="/divisions",
    tags=["Master Data - Divisi"],
    responses={404: {"description": "Divisi not found"}}
)

api_router.include_router(
    prokers.router,
    prefix="/prokers",
    tags=["Master Data - Proker"],
    responses={404: {"description": "Proker not found"}}
)

api_router.include_router(
    indicators.router,
    prefix="/indicators",
    tags=["Master Data - Indikator"],
    responses={
        404: {"description": "Indikator not found"},
        409: {"description": "Indikator sudah dipakai event"},
    }
)

# ===== PENILAIAN =====

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["Penilaian - Event"],
    responses={
        403: {"description": "Forbidden - Insufficient permissions"},
        404: {"description": "Event not found"},
        409: {"description": "Event terkunci / proker beda periode"},
    }
)

api_router.include_router(
    evaluations.router,
    prefix="/evaluations",
    tags=["Penilaian - Pengisian"],
    responses={
        404: {"description": "Penilaian not found"},
        409: {"description": "Event tidak dibuka / sudah disubmit"},
    }
)

api_router.include_router(
    results.router,
    prefix="/results",
    tags=["Penilaian - Hasil"],
    responses={
        403: {"description": "Forbidden - Insufficient permissions"},
        404: {"description": "Event not found"},
    }
)
