"""Endpoints hasil penilaian dan export."""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.repositories.event import EventRepository
from src.repositories.evaluation import EvaluationRepository
from src.services.report import ReportService
from src.services.export import report_to_csv, report_to_xlsx, CSV_MEDIA_TYPE, XLSX_MEDIA_TYPE
from src.schemas.report import EventReport
from src.auth.permissions import manage_required

router = APIRouter()


async def get_report_service(session: AsyncSession = Depends(get_db)) -> ReportService:
    return ReportService(EventRepository(session), EvaluationRepository(session))


@router.get("/{event_id}", response_model=EventReport, summary="Event report")
async def get_event_report(
    event_id: str,
    current_user: dict = Depends(manage_required),
    report_service: ReportService = Depends(get_report_service)
):
    """
    Hasil penilaian per evaluatee.

    **Accessible by**: ADMIN, BPI, KADIV

    KADIV hanya melihat anggota divisinya, kecuali divisinya memiliki akses
    laporan penuh. Identitas penilai tidak pernah ditampilkan.
    """
    return await report_service.get_event_report(event_id, current_user)


@router.get("/{event_id}/export", summary="Export event report")
async def export_event_report(
    event_id: str,
    format: str = Query("xlsx", pattern="^(csv|xlsx)$", description="csv atau xlsx"),
    current_user: dict = Depends(manage_required),
    report_service: ReportService = Depends(get_report_service)
):
    """Download laporan sebagai CSV atau XLSX."""
    report = await report_service.get_event_report(event_id, current_user)

    if format == "csv":
        return Response(
            content=report_to_csv(report),
            media_type=CSV_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="event-{event_id}-report.csv"'},
        )

    return Response(
        content=report_to_xlsx(report),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="event-{event_id}-report.xlsx"'},
    )
