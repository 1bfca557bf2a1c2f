"""Downloadable ward summary reports."""

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from ward_aqi.core.deps import DbSession, Fallback, OptionalWardId
from ward_aqi.services import reports as reports_service
from ward_aqi.services import wards as wards_service
from ward_aqi.services.fallback import DATA_SOURCE_HEADER

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/wards.csv")
async def export_wards_csv(
    db: DbSession,
    fallback: Fallback,
    ward_id: OptionalWardId,
) -> StreamingResponse:
    """Export the ward summary (all wards or one) as CSV."""
    wards, from_fallback = await wards_service.get_ward_responses(
        db, fallback, [ward_id] if ward_id else None
    )
    csv_content = reports_service.build_wards_csv(wards)

    headers = {
        "Content-Disposition": f"attachment; filename={reports_service.report_filename('csv')}"
    }
    if from_fallback:
        headers[DATA_SOURCE_HEADER] = "fallback"

    return StreamingResponse(
        iter([csv_content.encode("utf-8")]),
        media_type="text/csv; charset=utf-8",
        headers=headers,
    )


@router.get("/wards.pdf")
async def export_wards_pdf(
    db: DbSession,
    fallback: Fallback,
    ward_id: OptionalWardId,
) -> StreamingResponse:
    """Export the ward summary as a PDF report."""
    wards, from_fallback = await wards_service.get_ward_responses(
        db, fallback, [ward_id] if ward_id else None
    )
    pdf_content = reports_service.build_wards_pdf(wards)

    headers = {
        "Content-Disposition": f"attachment; filename={reports_service.report_filename('pdf')}"
    }
    if from_fallback:
        headers[DATA_SOURCE_HEADER] = "fallback"

    return StreamingResponse(
        iter([pdf_content]),
        media_type="application/pdf",
        headers=headers,
    )
