import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boxoffice.core.config import settings
from boxoffice.db.session import get_db
from boxoffice.models.person import Person
from boxoffice.models.spectacle import Actor, SpectacleActor
from boxoffice.schemas.common import ActionResult
from boxoffice.schemas.actor import ActorCreate, ActorUpdate, ActorListItem, ActorDetail

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/actors", tags=["Admin - Actors"])


@router.get("", response_model=List[ActorListItem])
def list_actors(db: Session = Depends(get_db)):
    """Actors by last name with the number of roles they are cast in."""
    rows = (
        db.query(
            Actor.person_id,
            Person.first_name,
            Person.last_name,
            Actor.base_salary,
            func.count(SpectacleActor.spectacle_id).label("roles_count"),
        )
        .join(Person, Actor.person_id == Person.id)
        .outerjoin(SpectacleActor, Actor.person_id == SpectacleActor.actor_id)
        .group_by(Actor.person_id, Person.first_name, Person.last_name, Actor.base_salary)
        .order_by(Person.last_name.asc())
        .all()
    )
    return [
        ActorListItem(
            id=r.person_id,
            first_name=r.first_name,
            last_name=r.last_name,
            base_salary=r.base_salary,
            roles_count=r.roles_count,
        )
        for r in rows
    ]


@router.get("/new", response_model=ActorCreate)
def new_actor_form():
    """Empty form with the default salary filled in."""
    return ActorCreate(first_name="", last_name="", base_salary=settings.DEFAULT_ACTOR_SALARY)


@router.post("", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def create_actor(data: ActorCreate, db: Session = Depends(get_db)):
    """Person and actor rows are written in one transaction."""
    try:
        person = Person(first_name=data.first_name, last_name=data.last_name, email=data.email)
        db.add(person)
        db.flush()  # get person.id

        db.add(Actor(
            person_id=person.id,
            bio=data.bio,
            base_salary=data.base_salary or settings.DEFAULT_ACTOR_SALARY,
        ))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Creating actor %s %s failed", data.first_name, data.last_name)
        raise

    return ActionResult(message="Actor created", redirect_to="/admin/actors", id=person.id)


def _load_actor(db: Session, id: int):
    return (
        db.query(Actor, Person)
        .join(Person, Actor.person_id == Person.id)
        .filter(Actor.person_id == id)
        .first()
    )


@router.get("/edit/{id}", response_model=ActorDetail)
def edit_actor_form(id: int, db: Session = Depends(get_db)):
    row = _load_actor(db, id)
    if not row:
        raise HTTPException(status_code=404, detail="Actor not found")
    actor, person = row
    return ActorDetail(
        id=actor.person_id,
        first_name=person.first_name,
        last_name=person.last_name,
        email=person.email,
        base_salary=actor.base_salary,
        bio=actor.bio,
    )


@router.post("/edit/{id}", response_model=ActionResult)
def update_actor(id: int, data: ActorUpdate, db: Session = Depends(get_db)):
    row = _load_actor(db, id)
    if not row:
        raise HTTPException(status_code=404, detail="Actor not found")
    actor, person = row

    try:
        person.first_name = data.first_name
        person.last_name = data.last_name
        person.email = data.email
        actor.base_salary = data.base_salary
        actor.bio = data.bio
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Updating actor %s failed", id)
        raise

    return ActionResult(message="Actor updated", redirect_to="/admin/actors", id=id)
