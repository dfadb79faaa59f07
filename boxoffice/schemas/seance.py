from typing import Optional, List
from pydantic import BaseModel, field_validator
from decimal import Decimal
from datetime import datetime


class SeanceCreate(BaseModel):
    spectacle_id: int
    hall_id: int
    start_time: Optional[datetime] = None
    price: Decimal

    @field_validator("start_time", mode="before")
    @classmethod
    def parse_empty_str_to_none(cls, v):
        if v == "":
            return None
        return v


class SeanceUpdate(BaseModel):
    spectacle_id: int
    hall_id: int
    start_time: datetime
    price: Decimal


class Seance(BaseModel):
    id: int
    spectacle_id: int
    hall_id: int
    start_time: datetime
    base_price: Decimal

    class Config:
        from_attributes = True


# Seance as listed on the admin dashboard
class SeanceListItem(BaseModel):
    id: int
    title: str
    start_time: datetime
    base_price: Decimal
    hall: str


# Upcoming seance on a spectacle page
class SeanceWithHall(Seance):
    hall_name: str


class SeanceEdit(Seance):
    formatted_time: str


class HallOption(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class SpectacleOption(BaseModel):
    id: int
    title: str

    class Config:
        from_attributes = True


class SeanceNewForm(BaseModel):
    spectacles: List[SpectacleOption]
    halls: List[HallOption]


class SeanceEditForm(SeanceNewForm):
    seance: SeanceEdit


class PriceUpdate(BaseModel):
    # May be negative for a discount
    percentage: float
