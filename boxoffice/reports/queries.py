"""
Aggregate queries behind each report type.

Every query takes the normalized ReportFilters (date range + minimum
amount) as bound parameters. Group-by-section reports rely on the ORDER BY
clause returning rows grouped by their section key.
"""
from typing import List

from sqlalchemy import func
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session, aliased

from boxoffice.models.booking import Reservation, Ticket
from boxoffice.models.person import Person, User, Employee, Department
from boxoffice.models.seance import Seance
from boxoffice.models.spectacle import Genre, Spectacle
from boxoffice.reports.filters import ReportFilters

CHART_LIMIT = 5
INVOICE_LIMIT = 4


def sales_by_genre(db: Session, filters: ReportFilters) -> List[Row]:
    """Ticket count and income per (genre, title), ordered by genre then income desc."""
    income = func.coalesce(func.sum(Ticket.final_price), 0)
    return (
        db.query(
            Genre.name.label("genre"),
            Spectacle.title.label("title"),
            func.count(Ticket.id).label("tickets"),
            income.label("income"),
        )
        .select_from(Genre)
        .join(Spectacle, Spectacle.genre_id == Genre.id)
        .outerjoin(Seance, Seance.spectacle_id == Spectacle.id)
        .outerjoin(Reservation, Reservation.seance_id == Seance.id)
        .outerjoin(Ticket, Ticket.reservation_id == Reservation.id)
        .filter(Seance.start_time >= filters.start, Seance.start_time <= filters.end)
        .group_by(Genre.name, Spectacle.title)
        .having(income >= filters.min_amount)
        .order_by(Genre.name, income.desc())
        .all()
    )


def employees_by_department(db: Session, filters: ReportFilters) -> List[Row]:
    """Employees hired in range earning at least the minimum, ordered by department then salary desc."""
    manager = aliased(Employee)
    manager_person = aliased(Person)
    return (
        db.query(
            Person.first_name,
            Person.last_name,
            Person.email,
            Employee.salary,
            Employee.hire_date,
            manager_person.last_name.label("manager_name"),
            manager_person.first_name.label("manager_first"),
            Department.name.label("dept"),
        )
        .select_from(Employee)
        .join(Person, Employee.person_id == Person.id)
        .outerjoin(manager, Employee.manager_id == manager.person_id)
        .outerjoin(manager_person, manager.person_id == manager_person.id)
        .join(Department, Employee.department_id == Department.id)
        .filter(
            Employee.hire_date >= filters.start.date(),
            Employee.hire_date <= filters.end.date(),
            Employee.salary >= filters.min_amount,
        )
        .order_by(Department.name, Employee.salary.desc())
        .all()
    )


def top_spectacles(db: Session, filters: ReportFilters) -> List[Row]:
    """Top titles by ticket revenue for the bar chart."""
    total = func.coalesce(func.sum(Ticket.final_price), 0)
    return (
        db.query(Spectacle.title.label("title"), total.label("total"))
        .select_from(Spectacle)
        .join(Seance, Seance.spectacle_id == Spectacle.id)
        .join(Reservation, Reservation.seance_id == Seance.id)
        .join(Ticket, Ticket.reservation_id == Reservation.id)
        .filter(Seance.start_time >= filters.start, Seance.start_time <= filters.end)
        .group_by(Spectacle.title)
        .having(total >= filters.min_amount)
        .order_by(total.desc())
        .limit(CHART_LIMIT)
        .all()
    )


def recent_reservations(db: Session, filters: ReportFilters) -> List[Row]:
    """Latest reservations with their customer, event and summed ticket price."""
    total_price = func.coalesce(func.sum(Ticket.final_price), 0)
    return (
        db.query(
            Reservation.id.label("res_id"),
            Person.first_name,
            Person.last_name,
            Person.email,
            Reservation.reservation_date,
            Spectacle.title,
            Seance.start_time,
            total_price.label("total_price"),
        )
        .select_from(Reservation)
        .join(User, Reservation.user_id == User.person_id)
        .join(Person, User.person_id == Person.id)
        .join(Seance, Reservation.seance_id == Seance.id)
        .join(Spectacle, Seance.spectacle_id == Spectacle.id)
        .outerjoin(Ticket, Ticket.reservation_id == Reservation.id)
        .filter(
            Reservation.reservation_date >= filters.start,
            Reservation.reservation_date <= filters.end,
        )
        .group_by(
            Reservation.id,
            Person.first_name,
            Person.last_name,
            Person.email,
            Reservation.reservation_date,
            Spectacle.title,
            Seance.start_time,
        )
        .having(total_price >= filters.min_amount)
        .order_by(Reservation.reservation_date.desc())
        .limit(INVOICE_LIMIT)
        .all()
    )
