from fastapi import APIRouter, Depends
from sqlalchemy import all_, func, select
from sqlalchemy.orm import Session, Query, aliased

from boxoffice.db.session import get_db
from boxoffice.models.booking import Reservation, Ticket
from boxoffice.models.person import Person, Employee
from boxoffice.models.seance import Seance
from boxoffice.models.spectacle import Genre, Spectacle, Actor, SpectacleActor
from boxoffice.schemas.stats import (
    StatsResponse,
    GenreAveragePrice,
    PersonName,
    LongSpectacle,
    HighEarner,
)

router = APIRouter(prefix="/admin/stats", tags=["Admin - Stats"])

# Genre names as stored in the catalog
DRAMA_GENRE = "Dramat"
MUSICAL_GENRE = "Musical"
RICH_GENRE_MIN_AVG_PRICE = 30


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def rich_genres_query(db: Session) -> Query:
    """GROUP BY + HAVING: genres whose average ticket price exceeds the threshold."""
    avg_price = func.avg(Ticket.final_price)
    return (
        db.query(Genre.name.label("name"), avg_price.label("avg_price"))
        .select_from(Genre)
        .join(Spectacle, Spectacle.genre_id == Genre.id)
        .join(Seance, Seance.spectacle_id == Spectacle.id)
        .join(Reservation, Reservation.seance_id == Seance.id)
        .join(Ticket, Ticket.reservation_id == Reservation.id)
        .group_by(Genre.name)
        .having(avg_price > RICH_GENRE_MIN_AVG_PRICE)
    )


def drama_actors_query(db: Session) -> Query:
    """Correlated EXISTS: actors cast in at least one drama."""
    in_drama = (
        select(SpectacleActor.actor_id)
        .join(Spectacle, SpectacleActor.spectacle_id == Spectacle.id)
        .join(Genre, Spectacle.genre_id == Genre.id)
        .where(SpectacleActor.actor_id == Actor.person_id, Genre.name == DRAMA_GENRE)
        .exists()
    )
    return (
        db.query(Person.first_name, Person.last_name)
        .select_from(Actor)
        .join(Person, Actor.person_id == Person.id)
        .filter(in_drama)
    )


def long_spectacles_query(db: Session) -> Query:
    """ALL: spectacles longer than every musical."""
    musical = aliased(Spectacle)
    musical_durations = (
        select(musical.duration_minutes)
        .join(Genre, musical.genre_id == Genre.id)
        .where(Genre.name == MUSICAL_GENRE)
        .scalar_subquery()
    )
    return db.query(Spectacle.title, Spectacle.duration_minutes).filter(
        Spectacle.duration_minutes > all_(musical_durations)
    )


def high_earners_query(db: Session) -> Query:
    """Uncorrelated scalar subquery: employees above the average salary."""
    everyone = aliased(Employee)
    average_salary = select(func.avg(everyone.salary)).scalar_subquery()
    return (
        db.query(Person.first_name, Person.last_name, Employee.salary)
        .select_from(Employee)
        .join(Person, Employee.person_id == Person.id)
        .filter(Employee.salary > average_salary)
    )


# ---------------------------------------------------------------------------
# GET /admin/stats
# ---------------------------------------------------------------------------


@router.get("", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    """
    Four fixed analytic result sets. Any failing query fails the whole
    response (500 with the store's message).
    """
    return StatsResponse(
        rich_genres=[
            GenreAveragePrice(name=r.name, avg_price=r.avg_price)
            for r in rich_genres_query(db).all()
        ],
        drama_actors=[
            PersonName(first_name=r.first_name, last_name=r.last_name)
            for r in drama_actors_query(db).all()
        ],
        long_spectacles=[
            LongSpectacle(title=r.title, duration_minutes=r.duration_minutes)
            for r in long_spectacles_query(db).all()
        ],
        high_earners=[
            HighEarner(first_name=r.first_name, last_name=r.last_name, salary=r.salary)
            for r in high_earners_query(db).all()
        ],
    )
