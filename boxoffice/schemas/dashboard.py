from typing import List, Optional
from pydantic import BaseModel
from decimal import Decimal
from datetime import date

from boxoffice.schemas.spectacle import SpectacleWithGenre
from boxoffice.schemas.seance import SeanceListItem


class FinancialRow(BaseModel):
    title: str
    tickets_sold: int
    revenue: Decimal


class EmployeeRow(BaseModel):
    person_id: int
    first_name: str
    last_name: str
    salary: Decimal
    hire_date: date
    department_id: int
    manager_id: Optional[int] = None


class DailyRevenue(BaseModel):
    day: str          # "2026-02-25"
    revenue: Decimal


class DashboardRange(BaseModel):
    date_from: date
    date_to: date


class DashboardResponse(BaseModel):
    spectacles: List[SpectacleWithGenre]
    seances: List[SeanceListItem]
    report: List[FinancialRow]
    employees: List[EmployeeRow]
    chart_data: List[DailyRevenue]
    query: DashboardRange
