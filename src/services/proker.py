# ===== src/services/proker.py =====
"""Service untuk program kerja dan panitia."""

import logging

from src.core.exceptions import NotFoundError, InvalidInputError, StateConflictError
from src.repositories.proker import ProkerRepository
from src.repositories.user import UserRepository
from src.repositories.period import PeriodRepository
from src.repositories.division import DivisionRepository
from src.schemas.proker import ProkerCreate, ProkerUpdate, ProkerResponse, ProkerListResponse
from src.schemas.filters import ProkerFilterParams
from src.schemas.common import MessageResponse, SuccessResponse

logger = logging.getLogger(__name__)


class ProkerService:
    """Service untuk operasi proker."""

    def __init__(
        self,
        proker_repo: ProkerRepository,
        user_repo: UserRepository,
        period_repo: PeriodRepository,
        division_repo: DivisionRepository
    ):
        self.proker_repo = proker_repo
        self.user_repo = user_repo
        self.period_repo = period_repo
        self.division_repo = division_repo

    async def _get_or_404(self, proker_id: str):
        proker = await self.proker_repo.get_by_id(proker_id)
        if not proker:
            raise NotFoundError("Proker tidak ditemukan")
        return proker

    async def list_prokers(self, filters: ProkerFilterParams) -> ProkerListResponse:
        prokers, _ = await self.proker_repo.get_all_filtered(filters)
        return ProkerListResponse(prokers=[ProkerResponse.from_proker_model(p) for p in prokers])

    async def get_proker(self, proker_id: str) -> ProkerResponse:
        return ProkerResponse.from_proker_model(await self._get_or_404(proker_id))

    async def create_proker(self, proker_data: ProkerCreate) -> ProkerResponse:
        if not await self.period_repo.get_by_id(proker_data.period_id):
            raise InvalidInputError("Periode tidak ditemukan")
        if not await self.division_repo.get_by_id(proker_data.division_id):
            raise InvalidInputError("Divisi tidak ditemukan")

        proker = await self.proker_repo.create(proker_data)
        logger.info(f"Proker created: {proker.name}")
        return ProkerResponse.from_proker_model(proker)

    async def update_proker(self, proker_id: str, proker_data: ProkerUpdate) -> ProkerResponse:
        proker = await self._get_or_404(proker_id)

        if proker_data.period_id and not await self.period_repo.get_by_id(proker_data.period_id):
            raise InvalidInputError("Periode tidak ditemukan")
        if proker_data.division_id and not await self.division_repo.get_by_id(proker_data.division_id):
            raise InvalidInputError("Divisi tidak ditemukan")

        # Event PROKER harus satu periode dengan prokernya
        if proker_data.period_id and proker_data.period_id != proker.period_id:
            if await self.proker_repo.has_events(proker_id):
                raise StateConflictError("Periode proker tidak bisa diubah karena sudah dipakai event penilaian")

        proker = await self.proker_repo.update(proker, proker_data)
        return ProkerResponse.from_proker_model(proker)

    async def delete_proker(self, proker_id: str) -> MessageResponse:
        proker = await self._get_or_404(proker_id)

        if await self.proker_repo.has_events(proker_id):
            raise StateConflictError("Proker masih dipakai oleh event penilaian dan tidak bisa dihapus")

        await self.proker_repo.delete(proker_id)
        logger.info(f"Proker deleted: {proker.name}")
        return MessageResponse(message=f"Proker {proker.name} berhasil dihapus")

    # ===== PANITIA =====

    async def add_panitia(self, proker_id: str, user_id: str) -> SuccessResponse:
        """Tambah panitia; jika sudah terdaftar, dikembalikan apa adanya."""
        await self._get_or_404(proker_id)
        if not await self.user_repo.get_by_id(user_id):
            raise NotFoundError("User tidak ditemukan")

        panitia, created = await self.proker_repo.add_panitia(proker_id, user_id)
        return SuccessResponse(
            message="Panitia berhasil ditambahkan" if created else "User sudah menjadi panitia",
            data={"id": panitia.id, "proker_id": proker_id, "user_id": user_id, "created": created}
        )

    async def remove_panitia(self, proker_id: str, user_id: str) -> MessageResponse:
        await self._get_or_404(proker_id)
        removed = await self.proker_repo.remove_panitia(proker_id, user_id)
        if not removed:
            raise NotFoundError("User bukan panitia proker ini")
        return MessageResponse(message="Panitia berhasil dihapus")
