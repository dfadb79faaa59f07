import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boxoffice.core.config import settings
from boxoffice.db.session import get_db
from boxoffice.models.person import Person
from boxoffice.models.spectacle import Genre, Spectacle, Actor, SpectacleActor
from boxoffice.schemas.common import ActionResult
from boxoffice.schemas.spectacle import (
    Genre as GenreSchema,
    Spectacle as SpectacleSchema,
    SpectacleNewForm,
    SpectacleEditForm,
    CastMember,
    ActorOption,
    CastAssign,
    CastRemove,
)
from boxoffice.utils.uploads import save_poster

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/spectacle", tags=["Admin - Spectacles"])

# Stored until the real poster URL is known
PLACEHOLDER_POSTER = "temp"


def _genres(db: Session):
    return [GenreSchema.model_validate(g) for g in db.query(Genre).order_by(Genre.name).all()]


def _get_spectacle_or_404(db: Session, id: int) -> Spectacle:
    spectacle = db.query(Spectacle).filter(Spectacle.id == id).first()
    if not spectacle:
        raise HTTPException(status_code=404, detail="Spectacle not found")
    return spectacle


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


@router.get("/new", response_model=SpectacleNewForm)
def new_spectacle_form(db: Session = Depends(get_db)):
    return SpectacleNewForm(genres=_genres(db))


@router.post("", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def create_spectacle(
    title: str = Form(...),
    description: Optional[str] = Form(None),
    duration: Optional[int] = Form(None),
    genre_id: Optional[int] = Form(None),
    poster: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """
    Insert the spectacle with a placeholder poster, then point it at the
    uploaded file (or the default poster). Both statements commit together.
    """
    poster_url = save_poster(poster) or settings.DEFAULT_POSTER_URL
    try:
        spectacle = Spectacle(
            title=title,
            description=description,
            duration_minutes=duration,
            genre_id=genre_id,
            poster_url=PLACEHOLDER_POSTER,
            premiere_date=datetime.now(),
        )
        db.add(spectacle)
        db.flush()  # get spectacle.id

        db.query(Spectacle).filter(Spectacle.id == spectacle.id).update(
            {"poster_url": poster_url}, synchronize_session="fetch"
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Creating spectacle %r failed", title)
        raise

    logger.info("Spectacle %s created (poster %s)", spectacle.id, poster_url)
    return ActionResult(message="Spectacle created", redirect_to="/admin", id=spectacle.id)


# ---------------------------------------------------------------------------
# Edit
# ---------------------------------------------------------------------------


@router.get("/edit/{id}", response_model=SpectacleEditForm)
def edit_spectacle_form(id: int, db: Session = Depends(get_db)):
    """Spectacle, genres, current cast and the actors not yet cast."""
    spectacle = _get_spectacle_or_404(db, id)

    current_cast = (
        db.query(SpectacleActor.actor_id, Person.first_name, Person.last_name, SpectacleActor.role_name)
        .join(Actor, SpectacleActor.actor_id == Actor.person_id)
        .join(Person, Actor.person_id == Person.id)
        .filter(SpectacleActor.spectacle_id == id)
        .all()
    )

    cast_ids = select(SpectacleActor.actor_id).where(SpectacleActor.spectacle_id == id)
    available = (
        db.query(Actor.person_id, Person.first_name, Person.last_name)
        .join(Person, Actor.person_id == Person.id)
        .filter(Actor.person_id.notin_(cast_ids))
        .order_by(Person.last_name)
        .all()
    )

    return SpectacleEditForm(
        spectacle=SpectacleSchema.model_validate(spectacle),
        genres=_genres(db),
        current_cast=[
            CastMember(
                actor_id=c.actor_id,
                first_name=c.first_name,
                last_name=c.last_name,
                role_name=c.role_name,
            )
            for c in current_cast
        ],
        available_actors=[
            ActorOption(id=a.person_id, first_name=a.first_name, last_name=a.last_name)
            for a in available
        ],
    )


@router.post("/edit/{id}", response_model=ActionResult)
def update_spectacle(
    id: int,
    title: str = Form(...),
    description: Optional[str] = Form(None),
    duration: Optional[int] = Form(None),
    genre_id: Optional[int] = Form(None),
    poster: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """The poster is replaced only when a new file is attached."""
    spectacle = _get_spectacle_or_404(db, id)

    spectacle.title = title
    spectacle.description = description
    spectacle.duration_minutes = duration
    spectacle.genre_id = genre_id
    poster_url = save_poster(poster)
    if poster_url:
        spectacle.poster_url = poster_url

    db.commit()
    return ActionResult(message="Spectacle updated", redirect_to="/admin", id=id)


# ---------------------------------------------------------------------------
# Cast
# ---------------------------------------------------------------------------


@router.post("/{id}/add-actor", response_model=ActionResult)
def add_actor(id: int, data: CastAssign, db: Session = Depends(get_db)):
    db.add(SpectacleActor(spectacle_id=id, actor_id=data.actor_id, role_name=data.role_name))
    db.commit()
    return ActionResult(message="Actor cast", redirect_to=f"/admin/spectacle/edit/{id}", id=id)


@router.post("/{id}/remove-actor", response_model=ActionResult)
def remove_actor(id: int, data: CastRemove, db: Session = Depends(get_db)):
    """Unassign an actor from the cast; the actor record itself is kept."""
    db.query(SpectacleActor).filter(
        SpectacleActor.spectacle_id == id,
        SpectacleActor.actor_id == data.actor_id,
    ).delete(synchronize_session="fetch")
    db.commit()
    return ActionResult(message="Actor removed from cast", redirect_to=f"/admin/spectacle/edit/{id}", id=id)
