# ===== src/utils/seed.py =====
"""Seed data awal: periode, divisi, indikator, user default, contoh proker.

Idempotent; jalankan dengan ``python -m src.utils.seed``.
"""

import asyncio
import logging
from typing import Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.jwt import get_password_hash
from src.core.config import settings
from src.core.database import async_session, init_db, close_db
from src.models.division import Division
from src.models.enums import IndicatorCategory, UserRole
from src.models.indicator import Indicator
from src.models.period import Period
from src.models.proker import Proker, Panitia
from src.models.user import User
from src.utils.logging import setup_logging

logger = logging.getLogger(__name__)

HARD_INDICATORS = [
    "Perencanaan Program",
    "Eksekusi Tugas",
    "Manajemen Waktu",
    "Dokumentasi",
    "Penggunaan Tools Digital",
    "Analisis Data",
    "Penyusunan Laporan",
    "Kepatuhan Prosedur",
    "Problem Solving Teknis",
    "Kualitas Deliverable",
    "Kolaborasi Teknis",
    "Kerapihan Administrasi",
]

SOFT_INDICATORS = [
    "Komunikasi",
    "Kepemimpinan",
    "Kerja Tim",
    "Inisiatif",
    "Adaptabilitas",
    "Tanggung Jawab",
    "Integritas",
]

DEFAULT_PERIOD = {"name": "2025/2026", "start_year": 2025, "end_year": 2026, "is_active": True}

# nama divisi -> has_full_report_access
DEFAULT_DIVISIONS = {"BPI": False, "PSDM": True, "Keuangan": False}

DEFAULT_USERS = [
    {"nim": "0001", "name": "Super Admin", "role": UserRole.ADMIN, "division": None},
    {"nim": "1001", "name": "Pengurus BPI", "role": UserRole.BPI, "division": "BPI"},
    {"nim": "2001", "name": "Kadiv PSDM", "role": UserRole.KADIV, "division": "PSDM"},
    {"nim": "3001", "name": "Anggota Keuangan", "role": UserRole.ANGGOTA, "division": "Keuangan"},
]

SAMPLE_PROKER = "Pengembangan Kepemimpinan"
SAMPLE_PANITIA = ["2001", "3001", "1001"]


async def seed_period(session: AsyncSession) -> Period:
    result = await session.execute(select(Period).where(Period.name == DEFAULT_PERIOD["name"]))
    period = result.scalar_one_or_none()
    if period:
        return period

    period = Period(**DEFAULT_PERIOD)
    session.add(period)
    await session.flush()
    logger.info(f"Created period {period.name}")
    return period


async def seed_divisions(session: AsyncSession) -> Dict[str, str]:
    division_map: Dict[str, str] = {}
    for name, full_access in DEFAULT_DIVISIONS.items():
        result = await session.execute(select(Division).where(Division.name == name))
        division = result.scalar_one_or_none()
        if not division:
            division = Division(name=name, has_full_report_access=full_access)
            session.add(division)
            await session.flush()
            logger.info(f"Created division {name}")
        division_map[name] = division.id
    return division_map


async def seed_indicators(session: AsyncSession) -> int:
    created = 0
    catalog = [(name, IndicatorCategory.HARD) for name in HARD_INDICATORS]
    catalog += [(name, IndicatorCategory.SOFT) for name in SOFT_INDICATORS]

    for name, category in catalog:
        result = await session.execute(select(Indicator.id).where(Indicator.name == name))
        if result.first() is None:
            session.add(Indicator(name=name, category=category))
            created += 1

    await session.flush()
    logger.info(f"Indicators seeded ({created} new)")
    return created


async def seed_users(session: AsyncSession, period_id: str, division_map: Dict[str, str]) -> Dict[str, str]:
    """Upsert user default; password di-reset ke SEED_DEFAULT_PASSWORD."""
    hashed_password = get_password_hash(settings.SEED_DEFAULT_PASSWORD)
    user_map: Dict[str, str] = {}

    for data in DEFAULT_USERS:
        result = await session.execute(select(User).where(User.nim == data["nim"]))
        user = result.scalar_one_or_none()
        division_id = division_map.get(data["division"]) if data["division"] else None

        if user is None:
            user = User(nim=data["nim"], name=data["name"], role=data["role"],
                        period_id=period_id, hashed_password=hashed_password)
            session.add(user)

        user.name = data["name"]
        user.role = data["role"]
        user.period_id = period_id
        user.division_id = division_id
        user.hashed_password = hashed_password
        user.is_active = True

        await session.flush()
        user_map[user.nim] = user.id

    logger.info(f"Seeded/updated {len(DEFAULT_USERS)} default users")
    return user_map


async def seed_proker(session: AsyncSession, period_id: str, division_map: Dict[str, str], user_map: Dict[str, str]) -> Proker:
    result = await session.execute(
        select(Proker).where(Proker.name == SAMPLE_PROKER, Proker.period_id == period_id)
    )
    proker = result.scalar_one_or_none()
    if not proker:
        proker = Proker(name=SAMPLE_PROKER, period_id=period_id, division_id=division_map["PSDM"])
        session.add(proker)
        await session.flush()
        logger.info(f"Created proker {SAMPLE_PROKER}")

    for nim in SAMPLE_PANITIA:
        user_id = user_map.get(nim)
        if not user_id:
            continue
        existing = await session.execute(
            select(Panitia.id).where(Panitia.proker_id == proker.id, Panitia.user_id == user_id)
        )
        if existing.first() is None:
            session.add(Panitia(proker_id=proker.id, user_id=user_id))

    await session.flush()
    return proker


async def run_seed() -> None:
    await init_db()
    async with async_session() as session:
        try:
            period = await seed_period(session)
            division_map = await seed_divisions(session)
            await seed_indicators(session)
            user_map = await seed_users(session, period.id, division_map)
            await seed_proker(session, period.id, division_map, user_map)
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Seeding failed, rolled back")
            raise
    await close_db()
    logger.info("Seeding completed")


if __name__ == "__main__":
    setup_logging()
    asyncio.run(run_seed())
