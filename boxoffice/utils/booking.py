import logging
import uuid
from decimal import Decimal
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boxoffice.models.booking import Reservation, Ticket
from boxoffice.models.seance import Seance

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """A reservation could not be created; the transaction has been rolled back."""


def generate_ticket_token() -> str:
    """32 hex chars, the shape of the md5 tokens already stored."""
    return uuid.uuid4().hex


def create_reservation(db: Session, user_id: int, seance_id: int, seat_ids: Sequence[int]) -> Reservation:
    """
    Book `seat_ids` for `seance_id` in one transaction.

    Inserts one reservation and one ticket per seat at the seance's base
    price. Seat availability is not re-checked here, so two concurrent
    requests for the same seat can both succeed unless the store rejects
    one of them.
    """
    try:
        if not seat_ids:
            raise BookingError("No seats selected")

        reservation = Reservation(user_id=user_id, seance_id=seance_id)
        db.add(reservation)
        db.flush()  # get reservation.id

        price = db.query(Seance.base_price).filter(Seance.id == seance_id).scalar()
        if price is None:
            raise BookingError(f"Seance {seance_id} not found")

        for seat_id in seat_ids:
            db.add(Ticket(
                reservation_id=reservation.id,
                seat_id=seat_id,
                final_price=price,
                ticket_token=generate_ticket_token(),
            ))

        db.commit()
    except BookingError:
        db.rollback()
        logger.warning("Booking for seance %s rolled back", seance_id)
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Booking for seance %s rolled back: %s", seance_id, exc)
        raise BookingError(str(exc)) from exc

    db.refresh(reservation)
    logger.info(
        "Reservation %s created: %d ticket(s) at %s",
        reservation.id,
        len(seat_ids),
        Decimal(str(price)),
    )
    return reservation
