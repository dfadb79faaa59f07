"""
Per-report drawing routines.

Each renderer takes the canvas, the shared LayoutCursor and the rows its
query returned, and leaves the cursor below whatever it drew.
"""
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Sequence

from boxoffice.reports.canvas import PdfCanvas
from boxoffice.reports.filters import ReportFilters
from boxoffice.reports.layout import (
    LayoutCursor,
    chart_axis_max,
    group_adjacent,
    needs_page_break,
    shorten_label,
)

CENTS = Decimal("0.01")
WHOLE = Decimal("1")

NO_SALES_TEXT = "No data for the given criteria."
NO_EMPLOYEES_TEXT = "No employees match the hiring date and salary criteria."
NO_CHART_TEXT = "No financial data for the given criteria."
NO_RESERVATIONS_TEXT = "No reservations match the given date and amount criteria."
NO_MANAGER_TEXT = "MANAGEMENT POSITION"
NO_EMAIL_TEXT = "No e-mail provided"


def to_money(value: Any) -> Decimal:
    return Decimal(str(value if value is not None else 0)).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_whole(value: Any) -> Decimal:
    """Round half up to a whole number (chart labels)."""
    return Decimal(str(value if value is not None else 0)).quantize(WHOLE, rounding=ROUND_HALF_UP)


def format_day(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)


def format_moment(value: Any) -> str:
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    return str(value)


# ---------------------------------------------------------------------------
# Flowing text helpers
# ---------------------------------------------------------------------------


def write_line(
    pdf: PdfCanvas,
    cursor: LayoutCursor,
    value: str,
    size: float = 12,
    color: str = "black",
    bold: bool = False,
    align: str = "left",
    underline: bool = False,
) -> None:
    """Write wrapped text at the left margin, breaking pages as lines run out of room."""
    layout = cursor.layout
    line_height = size * layout.line_spacing
    for line in pdf.wrap(value, size, layout.content_width, bold=bold):
        if not cursor.fits(line_height):
            pdf.new_page()
            cursor.next_page()
        pdf.text(
            layout.margin,
            cursor.y,
            line,
            size=size,
            color=color,
            bold=bold,
            width=layout.content_width,
            align=align,
            underline=underline,
        )
        cursor.advance(line_height)


def draw_document_header(pdf: PdfCanvas, cursor: LayoutCursor, filters: ReportFilters, currency: str) -> None:
    write_line(pdf, cursor, "THEATER REPORT", size=20, align="center")
    cursor.move_down(0.5, 20)
    write_line(
        pdf,
        cursor,
        f"Criteria: From {filters.start_label} | To {filters.end_label} | "
        f"Min. amount: {filters.min_amount_label} {currency}",
        size=10,
        color="gray",
        align="center",
    )
    cursor.move_down(2, 10)


def draw_error(pdf: PdfCanvas, cursor: LayoutCursor, message: str) -> None:
    write_line(pdf, cursor, f"Report generation error: {message}", size=12, color="red")


# ---------------------------------------------------------------------------
# sales_grouped
# ---------------------------------------------------------------------------


def render_sales_grouped(pdf: PdfCanvas, cursor: LayoutCursor, rows: Sequence[Any], currency: str) -> Decimal:
    """Income per title under one header per genre; returns the grand total."""
    write_line(pdf, cursor, "Financial analysis: sales by genre", size=16, underline=True)
    cursor.move_down(1, 16)

    if not rows:
        write_line(pdf, cursor, NO_SALES_TEXT)

    total_revenue = Decimal("0")
    for genre, members in group_adjacent(rows, key=lambda r: r.genre):
        cursor.move_down(0.5, 12)
        write_line(pdf, cursor, f"Category: {genre}", size=14, color="blue")
        for row in members:
            income = to_money(row.income)
            total_revenue += income
            write_line(
                pdf,
                cursor,
                f" - {row.title}: {row.tickets} tickets, Revenue: {income:.2f} {currency}",
                size=12,
            )

    cursor.move_down(2, 12)
    write_line(
        pdf,
        cursor,
        f"TOTAL FILTERED REVENUE: {total_revenue:.2f} {currency}",
        size=14,
        bold=True,
    )
    return total_revenue


# ---------------------------------------------------------------------------
# employees_hierarchy
# ---------------------------------------------------------------------------


def render_employees_hierarchy(pdf: PdfCanvas, cursor: LayoutCursor, rows: Sequence[Any], currency: str) -> None:
    layout = cursor.layout
    write_line(pdf, cursor, "Employee organizational structure", size=16, underline=True)
    cursor.move_down(1, 16)

    if not rows:
        write_line(pdf, cursor, NO_EMPLOYEES_TEXT)

    for dept, members in group_adjacent(rows, key=lambda r: r.dept):
        for index, emp in enumerate(members):
            # Keep the department band together with its first employee
            required = layout.employee_block_height
            if index == 0:
                required += layout.department_gap + layout.department_header_height
            if needs_page_break(cursor.y, required, layout.content_bottom):
                pdf.new_page()
                cursor.next_page()

            if index == 0:
                top = cursor.advance(layout.department_gap)
                pdf.rect(layout.margin, top, 500, 25, fill="#e0e0e0", stroke="#e0e0e0")
                pdf.text(layout.margin + 10, top + 7, str(dept).upper(), size=14, color="#333333")
                cursor.move_to(top + layout.department_header_height)

            _draw_employee(pdf, cursor, emp, currency)


def _draw_employee(pdf: PdfCanvas, cursor: LayoutCursor, emp: Any, currency: str) -> None:
    layout = cursor.layout
    top = cursor.y
    pdf.circle(60, top + 6, 2, fill="black")
    pdf.text(70, top, f"{emp.first_name} {emp.last_name}", size=12)

    if emp.manager_name:
        manager = " ".join(part for part in (emp.manager_first, emp.manager_name) if part)
        manager_info = f"Manager: {manager}"
    else:
        manager_info = NO_MANAGER_TEXT
    pdf.text(
        70,
        top + 14,
        f"Hired: {format_day(emp.hire_date)} | Salary: {to_money(emp.salary):.2f} {currency} | {manager_info}",
        size=10,
        color="#555555",
    )
    cursor.move_to(top + layout.employee_row_advance)


# ---------------------------------------------------------------------------
# financial_chart
# ---------------------------------------------------------------------------


def render_financial_chart(pdf: PdfCanvas, cursor: LayoutCursor, rows: Sequence[Any], currency: str) -> float:
    """Bar chart of the top titles and their total; returns the y-axis maximum used."""
    layout = cursor.layout
    write_line(pdf, cursor, "Financial chart (top spectacles)", size=16, align="center", underline=True)
    cursor.move_down(2, 16)

    values = [float(row.total) for row in rows]
    axis_max = chart_axis_max(values, layout)
    if not rows:
        write_line(pdf, cursor, NO_CHART_TEXT)
        return axis_max

    if needs_page_break(cursor.y + 20, layout.chart_height + 30, layout.content_bottom):
        pdf.new_page()
        cursor.next_page()

    left = layout.chart_left
    width = layout.chart_width
    height = layout.chart_height
    top = cursor.y + 20
    bottom = top + height
    steps = layout.chart_grid_steps

    pdf.rect(left, top, width, height, fill="#fcfcfc")

    for i in range(steps + 1):
        value = axis_max / steps * i
        line_y = bottom - height / steps * i
        pdf.line(left, line_y, left + width, line_y, color="#e0e0e0", line_width=0.5)
        pdf.text(left - 60, line_y - 3, f"{to_whole(value)} {currency}", size=9, color="#555555", width=50, align="right")

    bar_width = layout.chart_bar_width
    gap = (width - len(rows) * bar_width) / (len(rows) + 1)
    shadow = layout.chart_shadow_offset

    for i, (row, value) in enumerate(zip(rows, values)):
        bar_height = value / axis_max * height
        x = left + gap + i * (bar_width + gap)
        y = bottom - bar_height

        pdf.rect(x + shadow, y + shadow, bar_width, bar_height, fill="#dddddd")
        pdf.rect(x, y, bar_width, bar_height, fill="#2980b9")
        pdf.text(x - 5, y - 15, str(to_whole(value)), size=10, width=bar_width + 10, align="center")
        pdf.text(
            x - 10,
            bottom + 10,
            shorten_label(str(row.title), layout),
            size=9,
            color="#333333",
            width=bar_width + 20,
            align="center",
        )

    pdf.rect(left, top, width, height, stroke="#333333", line_width=1)
    cursor.move_to(bottom + 30)

    total = sum((to_money(value) for value in values), Decimal("0"))
    write_line(pdf, cursor, f"TOTAL: {total:.2f} {currency}", size=14, bold=True)
    return axis_max


# ---------------------------------------------------------------------------
# invoice_form
# ---------------------------------------------------------------------------


def render_invoice_forms(pdf: PdfCanvas, cursor: LayoutCursor, rows: Sequence[Any], currency: str) -> None:
    layout = cursor.layout
    if not rows:
        write_line(pdf, cursor, NO_RESERVATIONS_TEXT, size=12)

    for index, row in enumerate(rows):
        if index > 0 and needs_page_break(cursor.y, layout.invoice_block_height, layout.content_bottom):
            pdf.new_page()
            cursor.next_page()
        _draw_invoice(pdf, cursor, row, currency)


def _draw_invoice(pdf: PdfCanvas, cursor: LayoutCursor, row: Any, currency: str) -> None:
    layout = cursor.layout
    left = layout.margin
    top = cursor.y + 10

    pdf.rect(left, top, 500, layout.invoice_box_height, stroke="#333333", line_width=2)
    pdf.text(60, top + 15, f"RESERVATION CONFIRMATION FORM NO: {row.res_id}", size=14, bold=True)
    pdf.line(left, top + 40, left + 500, top + 40, color="#333333")

    # Customer
    pdf.text(60, top + 55, "CUSTOMER:", size=10, color="#555555")
    pdf.rect(60, top + 70, 220, 25, fill="#f9f9f9", stroke="#333333")
    pdf.text(65, top + 78, f"{row.first_name} {row.last_name}", size=10)

    pdf.text(300, top + 55, "E-MAIL ADDRESS:", size=10, color="#555555")
    pdf.rect(300, top + 70, 230, 25, fill="#f9f9f9", stroke="#333333")
    pdf.text(305, top + 78, row.email or NO_EMAIL_TEXT, size=10)

    # Event
    pdf.text(60, top + 110, "EVENT:", size=10, color="#555555")
    pdf.rect(60, top + 125, 330, 25, fill="#e8f4f8", stroke="#333333")
    pdf.text(65, top + 133, f"{row.title} (Date: {format_moment(row.start_time)})", size=10)

    # Amount
    pdf.text(410, top + 110, f"AMOUNT DUE ({currency}):", size=10, color="#555555")
    pdf.rect(410, top + 125, 120, 25, fill="#ffffff", stroke="#333333")
    pdf.text(415, top + 131, f"{to_money(row.total_price):.2f} {currency}", size=12, bold=True)

    cursor.move_to(top + layout.invoice_row_advance)
