from datetime import date, datetime
from decimal import Decimal

import pytest

from boxoffice.models import Department, Genre
from boxoffice.reports import queries
from boxoffice.reports.filters import ReportFilters
from boxoffice.reports.generator import ReportGenerator
from boxoffice.reports.layout import LayoutCursor, chart_axis_max
from boxoffice.reports.renderers import render_financial_chart
from boxoffice.schemas.report import ReportType

from conftest import add_employee, add_sale, add_seance, add_spectacle


YEAR_2024 = ReportFilters.from_form("2024-01-01", "2024-12-31", "50")


# ---------------------------------------------------------------------------
# sales_grouped
# ---------------------------------------------------------------------------


def test_sales_by_genre_applies_minimum_income(db, drama_sales):
    rows = queries.sales_by_genre(db, YEAR_2024)

    assert [(r.genre, r.title, r.tickets) for r in rows] == [("Drama", "Hamlet", 2)]
    assert Decimal(str(rows[0].income)) == Decimal("80")


def test_sales_by_genre_respects_date_range(db, drama_sales):
    may_only = ReportFilters.from_form("2024-05-01", "2024-05-01", None)
    rows = queries.sales_by_genre(db, may_only)

    # dateTo covers the whole day, so the 19:00 seance is included
    assert [r.title for r in rows] == ["Hamlet"]


def test_sales_by_genre_orders_by_genre_then_income(db, customer, hall):
    comedy = Genre(name="Comedy")
    drama = Genre(name="Drama")
    db.add_all([comedy, drama])
    db.flush()
    for genre, title, prices in [
        (drama, "Ivona", [30]),
        (comedy, "Tartuffe", [20, 20]),
        (drama, "Hamlet", [40, 40]),
    ]:
        seance = add_seance(db, add_spectacle(db, title, genre), hall, datetime(2024, 3, 1, 19, 0))
        add_sale(db, customer.id, seance, prices)
    db.commit()

    rows = queries.sales_by_genre(db, ReportFilters.from_form(None, None, None))

    assert [(r.genre, r.title) for r in rows] == [
        ("Comedy", "Tartuffe"),
        ("Drama", "Hamlet"),
        ("Drama", "Ivona"),
    ]


def test_sales_report_scenario(db, drama_sales, canvases):
    generator = ReportGenerator(db, canvas_factory=canvases)
    list(generator.stream(ReportType.sales_grouped, YEAR_2024))

    values = canvases.made[0].values()
    assert values.count("Category: Drama") == 1
    assert " - Hamlet: 2 tickets, Revenue: 80.00 PLN" in values
    assert not any("Ivona" in v for v in values)
    assert "TOTAL FILTERED REVENUE: 80.00 PLN" in values


# ---------------------------------------------------------------------------
# financial_chart
# ---------------------------------------------------------------------------


@pytest.fixture
def five_spectacles(db, customer, hall):
    for title, prices in [
        ("Alpha", [50, 50]),
        ("Beta", [25, 25]),
        ("Gamma", [100, 100]),
        ("Delta", [10]),
        ("Epsilon", [0]),
    ]:
        seance = add_seance(db, add_spectacle(db, title), hall, datetime(2024, 4, 1, 19, 0))
        add_sale(db, customer.id, seance, prices)
    db.commit()


def test_top_spectacles_filters_and_sorts(db, five_spectacles):
    rows = queries.top_spectacles(db, ReportFilters.from_form("2024-01-01", "2024-12-31", "20"))

    assert [r.title for r in rows] == ["Gamma", "Alpha", "Beta"]
    assert [float(r.total) for r in rows] == [200.0, 100.0, 50.0]
    assert chart_axis_max([r.total for r in rows]) == pytest.approx(220)


def test_chart_scenario_draws_three_bars(db, five_spectacles, pdf):
    rows = queries.top_spectacles(db, ReportFilters.from_form("2024-01-01", "2024-12-31", "20"))
    axis_max = render_financial_chart(pdf, LayoutCursor(), rows, "PLN")

    bars = [r for r in pdf.rects if r[4] == "#2980b9"]
    assert len(bars) == 3
    heights = [r[3] for r in bars]
    assert heights == sorted(heights, reverse=True)
    assert axis_max == pytest.approx(220)


def test_top_spectacles_is_limited_to_five(db, customer, hall):
    for i in range(7):
        seance = add_seance(db, add_spectacle(db, f"Title {i}"), hall, datetime(2024, 4, 1, 19, 0))
        add_sale(db, customer.id, seance, [10 + i])
    db.commit()

    rows = queries.top_spectacles(db, ReportFilters.from_form(None, None, None))

    assert len(rows) == queries.CHART_LIMIT
    assert rows[0].title == "Title 6"


# ---------------------------------------------------------------------------
# employees_hierarchy
# ---------------------------------------------------------------------------


def test_employees_by_department(db):
    stage = Department(name="Stage")
    admin_dept = Department(name="Administration")
    db.add_all([stage, admin_dept])
    db.flush()
    boss = add_employee(db, "Ewa", "Lis", admin_dept, 9000, date(2015, 1, 10))
    add_employee(db, "Piotr", "Zawada", admin_dept, 4000, date(2021, 6, 1), manager=boss)
    add_employee(db, "Ola", "Krol", stage, 5000, date(2022, 2, 1), manager=boss)
    add_employee(db, "Marek", "Nowy", stage, 1000, date(2022, 2, 1), manager=boss)
    db.commit()

    rows = queries.employees_by_department(db, ReportFilters.from_form("2020-01-01", "2024-12-31", "2000"))

    assert [(r.dept, r.last_name) for r in rows] == [
        ("Administration", "Zawada"),
        ("Stage", "Krol"),
    ]
    assert rows[0].manager_name == "Lis"
    assert rows[0].manager_first == "Ewa"


def test_employee_without_manager_has_no_manager_name(db):
    dept = Department(name="Direction")
    db.add(dept)
    db.flush()
    add_employee(db, "Ewa", "Lis", dept, 9000, date(2015, 1, 10))
    db.commit()

    rows = queries.employees_by_department(db, ReportFilters.from_form(None, None, None))

    assert len(rows) == 1
    assert rows[0].manager_name is None


# ---------------------------------------------------------------------------
# invoice_form
# ---------------------------------------------------------------------------


def test_recent_reservations_latest_first_and_limited(db, customer, hall):
    seance = add_seance(db, add_spectacle(db, "Hamlet"), hall, datetime(2024, 5, 10, 19, 0))
    for day in range(1, 7):
        add_sale(db, customer.id, seance, [40, 20], reserved_at=datetime(2024, 5, day, 12, 0))
    db.commit()

    rows = queries.recent_reservations(db, ReportFilters.from_form(None, None, None))

    assert len(rows) == queries.INVOICE_LIMIT
    assert [r.reservation_date.day for r in rows] == [6, 5, 4, 3]
    assert rows[0].first_name == "Jan"
    assert rows[0].email == "jan@example.com"
    assert Decimal(str(rows[0].total_price)) == Decimal("60")


def test_recent_reservations_minimum_amount(db, customer, hall):
    seance = add_seance(db, add_spectacle(db, "Hamlet"), hall, datetime(2024, 5, 10, 19, 0))
    add_sale(db, customer.id, seance, [40], reserved_at=datetime(2024, 5, 1))
    add_sale(db, customer.id, seance, [40, 40], reserved_at=datetime(2024, 5, 2))
    db.commit()

    rows = queries.recent_reservations(db, ReportFilters.from_form(None, None, "50"))

    assert len(rows) == 1
    assert rows[0].reservation_date == datetime(2024, 5, 2)
