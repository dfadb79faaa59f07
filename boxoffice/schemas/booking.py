from typing import List, Optional
from pydantic import BaseModel, field_validator
from decimal import Decimal
from datetime import datetime


# Booking: Create (POST /book)
class BookingCreate(BaseModel):
    seance_id: int
    selected_seats: List[int] = []

    @field_validator("selected_seats", mode="before")
    @classmethod
    def coerce_single_seat(cls, v):
        # A form with one checked seat posts a scalar instead of a list
        if v is None or v == "":
            return []
        if not isinstance(v, (list, tuple)):
            return [v]
        return v


class BookingResult(BaseModel):
    reservation_id: int
    seance_id: int
    tickets: int
    unit_price: Decimal
    total_price: Decimal


class Seat(BaseModel):
    id: int
    hall_id: int
    grid_x: int
    grid_y: int

    class Config:
        from_attributes = True


class BookingSeance(BaseModel):
    id: int
    spectacle_id: int
    hall_id: int
    start_time: datetime
    base_price: Decimal
    title: str
    hall_name: str


# Seat picker page (GET /book/{seance_id})
class BookingPage(BaseModel):
    seance: BookingSeance
    seats: List[Seat]
    booked_ids: List[int]


class ReviewCreate(BaseModel):
    rating: int
    comment: Optional[str] = None


class Review(BaseModel):
    id: int
    user_id: int
    spectacle_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    username: Optional[str] = None
