from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from boxoffice.db.session import get_db
from boxoffice.api.deps import require_current_user
from boxoffice.models.hall import Hall
from boxoffice.models.person import Person, User
from boxoffice.models.seance import Seance
from boxoffice.models.spectacle import Genre, Spectacle, Actor, SpectacleActor, Review
from boxoffice.schemas.user import CurrentUser
from boxoffice.schemas.spectacle import SpectacleWithGenre, SpectaclePage, Genre as GenreSchema, IndexPage
from boxoffice.schemas.seance import SeanceWithHall
from boxoffice.schemas.actor import CastedActor
from boxoffice.schemas.booking import ReviewCreate, Review as ReviewSchema

router = APIRouter(tags=["Public - Spectacles"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def serialize_spectacle(spectacle: Spectacle, genre_name: Optional[str]) -> SpectacleWithGenre:
    return SpectacleWithGenre(
        id=spectacle.id,
        title=spectacle.title,
        description=spectacle.description,
        duration_minutes=spectacle.duration_minutes,
        genre_id=spectacle.genre_id,
        poster_url=spectacle.poster_url,
        premiere_date=spectacle.premiere_date,
        genre_name=genre_name,
    )


def spectacles_with_genre(db: Session):
    """(Spectacle, genre name) pairs; spectacles without a genre are kept."""
    return (
        db.query(Spectacle, Genre.name)
        .outerjoin(Genre, Spectacle.genre_id == Genre.id)
    )


# ---------------------------------------------------------------------------
# GET /: repertoire
# ---------------------------------------------------------------------------


@router.get("/", response_model=IndexPage)
def index(
    genre: Optional[int] = Query(None, description="Only spectacles of this genre id"),
    db: Session = Depends(get_db),
):
    query = spectacles_with_genre(db)
    if genre:
        query = query.filter(Spectacle.genre_id == genre)
    rows = query.order_by(Spectacle.premiere_date.desc()).all()
    genres = db.query(Genre).order_by(Genre.name).all()

    return IndexPage(
        spectacles=[serialize_spectacle(s, genre_name) for s, genre_name in rows],
        genres=[GenreSchema.model_validate(g) for g in genres],
        selected_genre=genre or None,
    )


# ---------------------------------------------------------------------------
# GET /spectacle/{id}
# ---------------------------------------------------------------------------


@router.get("/spectacle/{id}", response_model=SpectaclePage)
def get_spectacle(id: int, db: Session = Depends(get_db)):
    """Spectacle with its upcoming seances, cast and reviews."""
    row = spectacles_with_genre(db).filter(Spectacle.id == id).first()
    if not row:
        raise HTTPException(status_code=404, detail="Spectacle not found")
    spectacle, genre_name = row

    seances = (
        db.query(Seance, Hall.name)
        .join(Hall, Seance.hall_id == Hall.id)
        .filter(Seance.spectacle_id == id, Seance.start_time > datetime.now())
        .order_by(Seance.start_time)
        .all()
    )

    actors = (
        db.query(Person.first_name, Person.last_name, Actor.person_id, Actor.bio, SpectacleActor.role_name)
        .select_from(Actor)
        .join(Person, Actor.person_id == Person.id)
        .join(SpectacleActor, Actor.person_id == SpectacleActor.actor_id)
        .filter(SpectacleActor.spectacle_id == id)
        .all()
    )

    reviews = (
        db.query(Review, User.username)
        .join(User, Review.user_id == User.person_id)
        .filter(Review.spectacle_id == id)
        .order_by(Review.created_at.desc())
        .all()
    )

    base = serialize_spectacle(spectacle, genre_name)
    return SpectaclePage(
        **base.model_dump(),
        seances=[
            SeanceWithHall(
                id=s.id,
                spectacle_id=s.spectacle_id,
                hall_id=s.hall_id,
                start_time=s.start_time,
                base_price=s.base_price,
                hall_name=hall_name,
            )
            for s, hall_name in seances
        ],
        actors=[
            CastedActor(
                id=a.person_id,
                first_name=a.first_name,
                last_name=a.last_name,
                bio=a.bio,
                role_name=a.role_name,
            )
            for a in actors
        ],
        reviews=[_serialize_review(r, username) for r, username in reviews],
    )


def _serialize_review(review: Review, username: Optional[str]) -> ReviewSchema:
    return ReviewSchema(
        id=review.id,
        user_id=review.user_id,
        spectacle_id=review.spectacle_id,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
        username=username,
    )


# ---------------------------------------------------------------------------
# POST /spectacle/{id}/review
# ---------------------------------------------------------------------------


@router.post("/spectacle/{id}/review", response_model=ReviewSchema, status_code=status.HTTP_201_CREATED)
def submit_review(
    id: int,
    data: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_current_user),
):
    """Append a rating/comment; reviews are never edited."""
    if not db.query(Spectacle.id).filter(Spectacle.id == id).first():
        raise HTTPException(status_code=404, detail="Spectacle not found")

    review = Review(
        user_id=current_user.id,
        spectacle_id=id,
        rating=data.rating,
        comment=data.comment,
    )
    db.add(review)
    db.commit()
    db.refresh(review)

    username = db.query(User.username).filter(User.person_id == current_user.id).scalar()
    return _serialize_review(review, username)
