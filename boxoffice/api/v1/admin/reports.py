from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from boxoffice.db.session import get_db
from boxoffice.reports import ReportFilters, ReportGenerator, REPORT_TITLES, report_filename
from boxoffice.schemas.report import ReportRequest, ReportCatalog, ReportTypeInfo, ReportType

router = APIRouter(prefix="/admin/reports", tags=["Admin - Reports"])


@router.get("", response_model=ReportCatalog)
def list_report_types():
    """Report types the generator accepts."""
    return ReportCatalog(
        report_types=[
            ReportTypeInfo(type=report_type, title=REPORT_TITLES[report_type])
            for report_type in ReportType
        ]
    )


@router.post("/generate")
def generate_report(
    data: ReportRequest,
    db: Session = Depends(get_db),
):
    """
    Stream a PDF report.

    Empty dates mean an open range and `dateTo` covers the whole day.
    `minAmount` is read up to its first non-numeric character (0 when it
    has no leading number). The query runs before the response starts;
    query or drawing errors end up as text inside the PDF, not as an HTTP
    error.
    """
    try:
        filters = ReportFilters.from_form(data.date_from, data.date_to, data.min_amount)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid date: {exc}")

    generator = ReportGenerator(db)
    # Query while the request session is open; only drawing happens in the body
    report_data = generator.fetch(data.report_type, filters)
    filename = report_filename(data.report_type)
    return StreamingResponse(
        generator.stream(data.report_type, filters, report_data),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
