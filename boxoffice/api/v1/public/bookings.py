from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from boxoffice.db.session import get_db
from boxoffice.api.deps import require_current_user
from boxoffice.models.booking import Reservation, Ticket
from boxoffice.models.hall import Hall, Seat
from boxoffice.models.seance import Seance
from boxoffice.models.spectacle import Spectacle
from boxoffice.schemas.user import CurrentUser
from boxoffice.schemas.booking import (
    BookingCreate,
    BookingResult,
    BookingPage,
    BookingSeance,
    Seat as SeatSchema,
)
from boxoffice.utils.booking import create_reservation

router = APIRouter(prefix="/book", tags=["Public - Booking"])


# ---------------------------------------------------------------------------
# GET /book/{seance_id}: seat picker
# ---------------------------------------------------------------------------


@router.get("/{seance_id}", response_model=BookingPage)
def get_booking_page(seance_id: int, db: Session = Depends(get_db)):
    """Hall layout for a seance plus the seats already sold for it."""
    row = (
        db.query(Seance, Spectacle.title, Hall.name)
        .join(Spectacle, Seance.spectacle_id == Spectacle.id)
        .join(Hall, Seance.hall_id == Hall.id)
        .filter(Seance.id == seance_id)
        .first()
    )
    if not row:
        raise HTTPException(status_code=404, detail="Seance not found")
    seance, title, hall_name = row

    seats = (
        db.query(Seat)
        .filter(Seat.hall_id == seance.hall_id)
        .order_by(Seat.grid_y, Seat.grid_x)
        .all()
    )
    taken = (
        db.query(Ticket.seat_id)
        .join(Reservation, Ticket.reservation_id == Reservation.id)
        .filter(Reservation.seance_id == seance_id)
        .all()
    )

    return BookingPage(
        seance=BookingSeance(
            id=seance.id,
            spectacle_id=seance.spectacle_id,
            hall_id=seance.hall_id,
            start_time=seance.start_time,
            base_price=seance.base_price,
            title=title,
            hall_name=hall_name,
        ),
        seats=[SeatSchema.model_validate(s) for s in seats],
        booked_ids=[t.seat_id for t in taken],
    )


# ---------------------------------------------------------------------------
# POST /book
# ---------------------------------------------------------------------------


@router.post("", response_model=BookingResult, status_code=status.HTTP_201_CREATED)
def book(
    data: BookingCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_current_user),
):
    """
    Reserve the selected seats in one transaction: one reservation, one
    ticket per seat at the seance's base price. Nothing is written when
    any step fails (including an empty selection).
    """
    reservation = create_reservation(db, current_user.id, data.seance_id, data.selected_seats)
    tickets = db.query(Ticket).filter(Ticket.reservation_id == reservation.id).all()
    unit_price = tickets[0].final_price
    return BookingResult(
        reservation_id=reservation.id,
        seance_id=reservation.seance_id,
        tickets=len(tickets),
        unit_price=unit_price,
        total_price=sum((Decimal(str(t.final_price)) for t in tickets), Decimal("0")),
    )
