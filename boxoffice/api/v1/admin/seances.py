import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.orm import Session

from boxoffice.db.session import get_db
from boxoffice.models.hall import Hall
from boxoffice.models.seance import Seance
from boxoffice.models.spectacle import Spectacle
from boxoffice.schemas.common import ActionResult
from boxoffice.schemas.seance import (
    SeanceCreate,
    SeanceUpdate,
    SeanceEdit,
    SeanceNewForm,
    SeanceEditForm,
    HallOption,
    SpectacleOption,
    PriceUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/seance", tags=["Admin - Seances"])
prices_router = APIRouter(prefix="/admin/update-prices", tags=["Admin - Seances"])


def _options(db: Session) -> dict:
    return {
        "spectacles": [SpectacleOption.model_validate(s) for s in db.query(Spectacle).all()],
        "halls": [HallOption.model_validate(h) for h in db.query(Hall).all()],
    }


@router.get("/new", response_model=SeanceNewForm)
def new_seance_form(db: Session = Depends(get_db)):
    return SeanceNewForm(**_options(db))


@router.post("", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def create_seance(data: SeanceCreate, db: Session = Depends(get_db)):
    if not data.start_time:
        raise HTTPException(status_code=400, detail="Start time is required")

    seance = Seance(
        spectacle_id=data.spectacle_id,
        hall_id=data.hall_id,
        start_time=data.start_time,
        base_price=data.price,
    )
    db.add(seance)
    db.commit()
    db.refresh(seance)
    return ActionResult(message="Seance created", redirect_to="/admin", id=seance.id)


@router.get("/edit/{id}", response_model=SeanceEditForm)
def edit_seance_form(id: int, db: Session = Depends(get_db)):
    seance = db.query(Seance).filter(Seance.id == id).first()
    if not seance:
        raise HTTPException(status_code=404, detail="Seance not found")

    return SeanceEditForm(
        seance=SeanceEdit(
            id=seance.id,
            spectacle_id=seance.spectacle_id,
            hall_id=seance.hall_id,
            start_time=seance.start_time,
            base_price=seance.base_price,
            # value for an <input type="datetime-local">
            formatted_time=seance.start_time.strftime("%Y-%m-%dT%H:%M"),
        ),
        **_options(db),
    )


@router.post("/edit/{id}", response_model=ActionResult)
def update_seance(id: int, data: SeanceUpdate, db: Session = Depends(get_db)):
    seance = db.query(Seance).filter(Seance.id == id).first()
    if not seance:
        raise HTTPException(status_code=404, detail="Seance not found")

    seance.spectacle_id = data.spectacle_id
    seance.hall_id = data.hall_id
    seance.start_time = data.start_time
    seance.base_price = data.price
    db.commit()
    return ActionResult(message="Seance updated", redirect_to="/admin", id=id)


@prices_router.post("", response_model=ActionResult)
def update_prices(data: PriceUpdate, db: Session = Depends(get_db)):
    """Run the store's bulk price procedure (negative percentage lowers prices)."""
    db.execute(text("CALL update_seance_prices(:percentage)"), {"percentage": data.percentage})
    db.commit()
    logger.info("Seance prices adjusted by %s%%", data.percentage)
    return ActionResult(message="Prices updated", redirect_to="/admin")
