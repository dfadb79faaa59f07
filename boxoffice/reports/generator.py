import io
import logging
import time
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Dict, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boxoffice.core.config import settings
from boxoffice.reports import queries, renderers
from boxoffice.reports.canvas import PdfCanvas
from boxoffice.reports.filters import ReportFilters
from boxoffice.reports.layout import DEFAULT_LAYOUT, LayoutCursor, ReportLayout
from boxoffice.schemas.report import ReportType

logger = logging.getLogger(__name__)

STREAM_CHUNK_SIZE = 64 * 1024

# report type -> (query, renderer)
REPORTS: Dict[ReportType, tuple] = {
    ReportType.sales_grouped: (queries.sales_by_genre, renderers.render_sales_grouped),
    ReportType.employees_hierarchy: (queries.employees_by_department, renderers.render_employees_hierarchy),
    ReportType.financial_chart: (queries.top_spectacles, renderers.render_financial_chart),
    ReportType.invoice_form: (queries.recent_reservations, renderers.render_invoice_forms),
}

REPORT_TITLES: Dict[ReportType, str] = {
    ReportType.sales_grouped: "Sales grouped by genre",
    ReportType.employees_hierarchy: "Employee structure by department",
    ReportType.financial_chart: "Top spectacles bar chart",
    ReportType.invoice_form: "Reservation confirmation forms",
}


@dataclass
class ReportData:
    """Query result for one report, or the message of the error that prevented it."""

    rows: List[Any]
    error: Optional[str] = None


def report_filename(report_type: ReportType, now_ms: Optional[int] = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"Raport_{report_type.value}_{stamp}.pdf"


class ReportGenerator:
    """
    Runs the query for a report type and draws the result into a PDF.

    Any failure after the document header has been drawn is written into
    the document itself; the caller always gets a finished PDF.
    """

    def __init__(
        self,
        db: Session,
        layout: ReportLayout = DEFAULT_LAYOUT,
        font_path: Optional[str] = None,
        currency: Optional[str] = None,
        canvas_factory: Callable[..., PdfCanvas] = PdfCanvas,
    ):
        self.db = db
        self.layout = layout
        self.font_path = font_path if font_path is not None else settings.REPORT_FONT_PATH
        self.currency = currency or settings.CURRENCY
        self.canvas_factory = canvas_factory

    def fetch(self, report_type: ReportType, filters: ReportFilters) -> ReportData:
        """Run the query for `report_type`; a failure is kept as the error message."""
        logger.info(
            "Generating %s report (from=%s to=%s min=%s)",
            report_type.value,
            filters.start_label,
            filters.end_label,
            filters.min_amount_label,
        )
        query, _ = REPORTS[report_type]
        try:
            return ReportData(rows=list(query(self.db, filters)))
        except Exception as exc:
            logger.exception("Report %s query failed", report_type.value)
            if isinstance(exc, SQLAlchemyError):
                self.db.rollback()
            return ReportData(rows=[], error=str(exc))

    def render(
        self,
        report_type: ReportType,
        filters: ReportFilters,
        out: BinaryIO,
        data: Optional[ReportData] = None,
    ) -> PdfCanvas:
        if data is None:
            data = self.fetch(report_type, filters)

        pdf = self.canvas_factory(out, self.layout, self.font_path)
        cursor = LayoutCursor(self.layout)
        renderers.draw_document_header(pdf, cursor, filters, self.currency)

        if data.error is not None:
            renderers.draw_error(pdf, cursor, data.error)
        else:
            _, renderer = REPORTS[report_type]
            try:
                renderer(pdf, cursor, data.rows, self.currency)
            except Exception as exc:
                # Already-drawn output cannot be retracted; the message goes into the document
                logger.exception("Report %s failed", report_type.value)
                renderers.draw_error(pdf, cursor, str(exc))

        pdf.finish()
        return pdf

    def stream(
        self,
        report_type: ReportType,
        filters: ReportFilters,
        data: Optional[ReportData] = None,
    ) -> Iterator[bytes]:
        """
        Yield the finished document in chunks (used as a StreamingResponse body).

        Pass `data` fetched while the request session is still open; the body
        may be produced after request dependencies have been closed.
        """
        buffer = io.BytesIO()
        self.render(report_type, filters, buffer, data)
        buffer.seek(0)
        while True:
            chunk = buffer.read(STREAM_CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
