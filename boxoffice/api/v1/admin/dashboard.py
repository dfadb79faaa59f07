from datetime import date, datetime, time
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from boxoffice.db.session import get_db
from boxoffice.api.v1.public.spectacles import serialize_spectacle, spectacles_with_genre
from boxoffice.models.booking import Reservation, Ticket
from boxoffice.models.hall import Hall
from boxoffice.models.person import Person, Employee
from boxoffice.models.seance import Seance
from boxoffice.models.spectacle import Spectacle
from boxoffice.schemas.seance import SeanceListItem
from boxoffice.schemas.dashboard import (
    DashboardResponse,
    DashboardRange,
    FinancialRow,
    EmployeeRow,
    DailyRevenue,
)

router = APIRouter(prefix="/admin", tags=["Admin - Dashboard"])

TOP_SPECTACLES = 10
EMPLOYEE_PREVIEW = 5


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    date_from: Optional[date] = Query(None, alias="from", description="Chart start (YYYY-MM-DD), default Jan 1"),
    date_to: Optional[date] = Query(None, alias="to", description="Chart end (YYYY-MM-DD), default Dec 31"),
    db: Session = Depends(get_db),
):
    """
    Admin landing page: repertoire, schedule, top sellers, staff preview and
    daily revenue for the selected range (current year by default).
    """
    today = date.today()
    date_from = date_from or date(today.year, 1, 1)
    date_to = date_to or date(today.year, 12, 31)

    spectacles = spectacles_with_genre(db).order_by(Spectacle.id.desc()).all()

    seances = (
        db.query(
            Seance.id,
            Spectacle.title,
            Seance.start_time,
            Seance.base_price,
            Hall.name.label("hall"),
        )
        .join(Spectacle, Seance.spectacle_id == Spectacle.id)
        .join(Hall, Seance.hall_id == Hall.id)
        .order_by(Seance.start_time)
        .all()
    )

    # ------------------------------------------------------------------
    # Top spectacles by revenue
    # ------------------------------------------------------------------
    revenue = func.coalesce(func.sum(Ticket.final_price), 0)
    financial = (
        db.query(
            Spectacle.title.label("title"),
            func.count(Ticket.id).label("tickets_sold"),
            revenue.label("revenue"),
        )
        .select_from(Spectacle)
        .outerjoin(Seance, Seance.spectacle_id == Spectacle.id)
        .outerjoin(Reservation, Reservation.seance_id == Seance.id)
        .outerjoin(Ticket, Ticket.reservation_id == Reservation.id)
        .group_by(Spectacle.id, Spectacle.title)
        .order_by(revenue.desc())
        .limit(TOP_SPECTACLES)
        .all()
    )

    employees = (
        db.query(Employee, Person.first_name, Person.last_name)
        .join(Person, Employee.person_id == Person.id)
        .order_by(Person.last_name)
        .limit(EMPLOYEE_PREVIEW)
        .all()
    )

    # ------------------------------------------------------------------
    # Daily revenue series
    # ------------------------------------------------------------------
    day = func.date(Seance.start_time).label("day")
    daily = (
        db.query(day, func.coalesce(func.sum(Ticket.final_price), 0).label("revenue"))
        .select_from(Ticket)
        .join(Reservation, Ticket.reservation_id == Reservation.id)
        .join(Seance, Reservation.seance_id == Seance.id)
        .filter(
            Seance.start_time >= datetime.combine(date_from, time.min),
            Seance.start_time <= datetime.combine(date_to, time(23, 59, 59)),
        )
        .group_by(day)
        .order_by(day.asc())
        .all()
    )

    return DashboardResponse(
        spectacles=[serialize_spectacle(s, genre_name) for s, genre_name in spectacles],
        seances=[
            SeanceListItem(
                id=s.id,
                title=s.title,
                start_time=s.start_time,
                base_price=s.base_price,
                hall=s.hall,
            )
            for s in seances
        ],
        report=[
            FinancialRow(title=r.title, tickets_sold=r.tickets_sold, revenue=r.revenue)
            for r in financial
        ],
        employees=[
            EmployeeRow(
                person_id=e.person_id,
                first_name=first_name,
                last_name=last_name,
                salary=e.salary,
                hire_date=e.hire_date,
                department_id=e.department_id,
                manager_id=e.manager_id,
            )
            for e, first_name, last_name in employees
        ],
        chart_data=[DailyRevenue(day=str(r.day), revenue=r.revenue) for r in daily],
        query=DashboardRange(date_from=date_from, date_to=date_to),
    )
