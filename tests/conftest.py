import io
import os
from datetime import date, datetime
from decimal import Decimal

# Settings are read at import time; keep the app off PostgreSQL in tests
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REPORT_FONT_PATH", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from boxoffice.db.base import Base
from boxoffice.db.session import get_db
from boxoffice.api.deps import get_identity_provider
from boxoffice.api.identity import StaticIdentityProvider
from boxoffice.main import app
from boxoffice.models import (
    Person, User, Department, Employee, Genre, Spectacle, Actor,
    SpectacleActor, Hall, Seat, Seance, Reservation, Ticket,
)
from boxoffice.reports.canvas import PdfCanvas
from boxoffice.reports.layout import DEFAULT_LAYOUT
from boxoffice.schemas.user import CurrentUser


class RecordingCanvas(PdfCanvas):
    """PdfCanvas that also keeps what was drawn, for assertions."""

    def __init__(self, out=None, layout=DEFAULT_LAYOUT, font_path=None):
        super().__init__(out if out is not None else io.BytesIO(), layout, None)
        self.texts = []
        self.rects = []
        self.page_breaks = 0

    def text(self, x, y, value, **kwargs):
        self.texts.append((x, y, value))
        super().text(x, y, value, **kwargs)

    def rect(self, x, y, width, height, **kwargs):
        self.rects.append((x, y, width, height, kwargs.get("fill"), kwargs.get("stroke")))
        super().rect(x, y, width, height, **kwargs)

    def new_page(self):
        self.page_breaks += 1
        super().new_page()

    def values(self):
        return [value for _, _, value in self.texts]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def pdf():
    return RecordingCanvas()


@pytest.fixture
def canvases():
    """Canvas factory for ReportGenerator that remembers every canvas it made."""
    made = []

    def factory(out, layout=DEFAULT_LAYOUT, font_path=None):
        canvas = RecordingCanvas(out, layout, font_path)
        made.append(canvas)
        return canvas

    factory.made = made
    return factory


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


def add_person(db, first_name, last_name, email=None):
    person = Person(first_name=first_name, last_name=last_name, email=email)
    db.add(person)
    db.flush()
    return person


@pytest.fixture
def admin(db):
    person = add_person(db, "Anna", "Nowak", "anna@example.com")
    db.add(User(person_id=person.id, username="anowak", role="admin"))
    db.commit()
    return CurrentUser(id=person.id, role="admin", name="Anna Nowak")


@pytest.fixture
def customer(db):
    person = add_person(db, "Jan", "Kowalski", "jan@example.com")
    db.add(User(person_id=person.id, username="jkowalski", role="user"))
    db.commit()
    return CurrentUser(id=person.id, role="user", name="Jan Kowalski")


@pytest.fixture
def hall(db):
    hall = Hall(name="Main Stage")
    db.add(hall)
    db.flush()
    for y in range(1, 3):
        for x in range(1, 4):
            db.add(Seat(hall_id=hall.id, grid_x=x, grid_y=y))
    db.commit()
    return hall


def add_spectacle(db, title, genre=None, duration=120):
    spectacle = Spectacle(
        title=title,
        description=f"{title} description",
        duration_minutes=duration,
        poster_url="/images/default-poster.png",
        genre_id=genre.id if genre else None,
        premiere_date=datetime(2024, 1, 1),
    )
    db.add(spectacle)
    db.flush()
    return spectacle


def add_seance(db, spectacle, hall, start_time, base_price="40.00"):
    seance = Seance(
        spectacle_id=spectacle.id,
        hall_id=hall.id,
        start_time=start_time,
        base_price=Decimal(base_price),
    )
    db.add(seance)
    db.flush()
    return seance


def add_sale(db, user_id, seance, prices, reserved_at=None):
    """One reservation with a ticket per price (seats taken from the seance's hall)."""
    reservation = Reservation(
        user_id=user_id,
        seance_id=seance.id,
        reservation_date=reserved_at or seance.start_time,
    )
    db.add(reservation)
    db.flush()
    seats = db.query(Seat).filter(Seat.hall_id == seance.hall_id).all()
    for seat, price in zip(seats, prices):
        db.add(Ticket(
            reservation_id=reservation.id,
            seat_id=seat.id,
            final_price=Decimal(str(price)),
            ticket_token="t" * 32,
        ))
    db.flush()
    return reservation


def add_employee(db, first_name, last_name, department, salary, hire_date, manager=None):
    person = add_person(db, first_name, last_name)
    employee = Employee(
        person_id=person.id,
        salary=Decimal(str(salary)),
        hire_date=hire_date,
        department_id=department.id,
        manager_id=manager.person_id if manager else None,
    )
    db.add(employee)
    db.flush()
    return employee


@pytest.fixture
def drama_sales(db, customer, hall):
    """Genre 'Drama' with two 2024 spectacles earning 80 and 40."""
    drama = Genre(name="Drama")
    db.add(drama)
    db.flush()
    strong = add_spectacle(db, "Hamlet", drama)
    weak = add_spectacle(db, "Ivona", drama)
    add_sale(db, customer.id, add_seance(db, strong, hall, datetime(2024, 5, 1, 19, 0)), [40, 40])
    add_sale(db, customer.id, add_seance(db, weak, hall, datetime(2024, 6, 1, 19, 0)), [40])
    db.commit()
    return drama


@pytest.fixture
def client(db, admin):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: StaticIdentityProvider(admin)
    yield TestClient(app)
    app.dependency_overrides.clear()
