from __future__ import annotations

from typing import Optional, List
from pydantic import BaseModel
from datetime import datetime


class Genre(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class SpectacleBase(BaseModel):
    title: str
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    genre_id: Optional[int] = None


class Spectacle(SpectacleBase):
    id: int
    poster_url: Optional[str] = None
    premiere_date: Optional[datetime] = None

    class Config:
        from_attributes = True


# Spectacle with its genre name resolved (listing / detail pages)
class SpectacleWithGenre(Spectacle):
    genre_name: Optional[str] = None


class CastMember(BaseModel):
    actor_id: int
    first_name: str
    last_name: str
    role_name: Optional[str] = None


class ActorOption(BaseModel):
    id: int
    first_name: str
    last_name: str


class SpectacleNewForm(BaseModel):
    genres: List[Genre]


class SpectacleEditForm(BaseModel):
    spectacle: Spectacle
    genres: List[Genre]
    current_cast: List[CastMember]
    available_actors: List[ActorOption]


class CastAssign(BaseModel):
    actor_id: int
    role_name: Optional[str] = None


class CastRemove(BaseModel):
    actor_id: int


class IndexPage(BaseModel):
    spectacles: List[SpectacleWithGenre]
    genres: List[Genre]
    selected_genre: Optional[int] = None


# Public spectacle page (GET /spectacle/{id})
class SpectaclePage(SpectacleWithGenre):
    seances: List[SeanceWithHall] = []
    actors: List[CastedActor] = []
    reviews: List[Review] = []


from boxoffice.schemas.seance import SeanceWithHall  # noqa: E402
from boxoffice.schemas.actor import CastedActor  # noqa: E402
from boxoffice.schemas.booking import Review  # noqa: E402

SpectaclePage.model_rebuild()
