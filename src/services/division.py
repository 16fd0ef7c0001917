# ===== src/services/division.py =====
"""Service untuk divisi."""

import logging

from src.core.exceptions import NotFoundError, StateConflictError
from src.repositories.division import DivisionRepository
from src.schemas.division import DivisionCreate, DivisionUpdate, DivisionResponse, DivisionListResponse

logger = logging.getLogger(__name__)


class DivisionService:

    def __init__(self, division_repo: DivisionRepository):
        self.division_repo = division_repo

    async def list_divisions(self) -> DivisionListResponse:
        divisions = await self.division_repo.get_all()
        return DivisionListResponse(divisions=[DivisionResponse.model_validate(d) for d in divisions])

    async def create_division(self, division_data: DivisionCreate) -> DivisionResponse:
        if await self.division_repo.name_exists(division_data.name):
            raise StateConflictError(f"Divisi '{division_data.name}' sudah ada")

        division = await self.division_repo.create(division_data)
        logger.info(f"Division created: {division.name} (full_report_access={division.has_full_report_access})")
        return DivisionResponse.model_validate(division)

    async def update_division(self, division_id: str, division_data: DivisionUpdate) -> DivisionResponse:
        division = await self.division_repo.get_by_id(division_id)
        if not division:
            raise NotFoundError("Divisi tidak ditemukan")

        if division_data.name and await self.division_repo.name_exists(division_data.name, exclude_id=division_id):
            raise StateConflictError(f"Divisi '{division_data.name}' sudah ada")

        division = await self.division_repo.update(division, division_data)
        return DivisionResponse.model_validate(division)
