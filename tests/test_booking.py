from datetime import datetime
from decimal import Decimal

import pytest

from boxoffice.api.deps import get_identity_provider
from boxoffice.api.identity import StaticIdentityProvider
from boxoffice.main import app
from boxoffice.models import Reservation, Seat, Ticket
from boxoffice.schemas.booking import BookingCreate
from boxoffice.utils.booking import BookingError, create_reservation

from conftest import add_sale, add_seance, add_spectacle


@pytest.fixture
def seance(db, hall):
    seance = add_seance(db, add_spectacle(db, "Hamlet"), hall, datetime(2030, 5, 1, 19, 0), base_price="45.50")
    db.commit()
    return seance


def seat_ids(db, hall, count):
    return [s.id for s in db.query(Seat).filter(Seat.hall_id == hall.id).order_by(Seat.id).limit(count)]


def test_create_reservation_one_ticket_per_seat(db, customer, hall, seance):
    seats = seat_ids(db, hall, 3)

    reservation = create_reservation(db, customer.id, seance.id, seats)

    tickets = db.query(Ticket).filter(Ticket.reservation_id == reservation.id).all()
    assert sorted(t.seat_id for t in tickets) == seats
    assert all(Decimal(str(t.final_price)) == Decimal("45.50") for t in tickets)
    assert len({t.ticket_token for t in tickets}) == 3
    assert reservation.user_id == customer.id


def test_empty_selection_writes_nothing(db, customer, seance):
    with pytest.raises(BookingError):
        create_reservation(db, customer.id, seance.id, [])

    assert db.query(Reservation).count() == 0
    assert db.query(Ticket).count() == 0


def test_unknown_seance_rolls_back_reservation(db, customer, hall):
    with pytest.raises(BookingError):
        create_reservation(db, customer.id, 999, seat_ids(db, hall, 1))

    assert db.query(Reservation).count() == 0


def test_single_seat_form_value_becomes_list():
    assert BookingCreate(seance_id=1, selected_seats=4).selected_seats == [4]
    assert BookingCreate(seance_id=1, selected_seats="").selected_seats == []
    assert BookingCreate(seance_id=1).selected_seats == []


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def test_book_endpoint(client, db, hall, seance):
    seats = seat_ids(db, hall, 2)

    response = client.post("/book", json={"seance_id": seance.id, "selected_seats": seats})

    assert response.status_code == 201
    body = response.json()
    assert body["tickets"] == 2
    assert Decimal(str(body["unit_price"])) == Decimal("45.50")
    assert Decimal(str(body["total_price"])) == Decimal("91.00")
    assert db.query(Ticket).count() == 2


def test_book_endpoint_empty_selection(client, db, seance):
    response = client.post("/book", json={"seance_id": seance.id, "selected_seats": []})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("Reservation failed:")
    assert db.query(Reservation).count() == 0


def test_book_endpoint_requires_user(client, db, hall, seance):
    app.dependency_overrides[get_identity_provider] = lambda: StaticIdentityProvider(None)

    response = client.post("/book", json={"seance_id": seance.id, "selected_seats": seat_ids(db, hall, 1)})

    assert response.status_code == 401
    assert db.query(Reservation).count() == 0


def test_booking_page_lists_taken_seats(client, db, customer, hall, seance):
    sold = add_sale(db, customer.id, seance, [45, 45])
    db.commit()
    taken = sorted(t.seat_id for t in db.query(Ticket).filter(Ticket.reservation_id == sold.id))

    response = client.get(f"/book/{seance.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["seance"]["title"] == "Hamlet"
    assert body["seance"]["hall_name"] == "Main Stage"
    assert len(body["seats"]) == 6
    assert sorted(body["booked_ids"]) == taken


def test_booking_page_unknown_seance(client):
    assert client.get("/book/12345").status_code == 404
