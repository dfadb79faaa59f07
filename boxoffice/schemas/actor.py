from typing import Optional
from pydantic import BaseModel, field_validator
from decimal import Decimal


class ActorBase(BaseModel):
    first_name: str
    last_name: str
    email: Optional[str] = None
    bio: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def parse_empty_str_to_none(cls, v):
        if v == "":
            return None
        return v


# POST /admin/actors
class ActorCreate(ActorBase):
    base_salary: Optional[Decimal] = None

    @field_validator("base_salary", mode="before")
    @classmethod
    def parse_empty_salary(cls, v):
        if v == "":
            return None
        return v


# POST /admin/actors/edit/{id}
class ActorUpdate(ActorBase):
    base_salary: Optional[Decimal] = None


class ActorListItem(BaseModel):
    id: int
    first_name: str
    last_name: str
    base_salary: Optional[Decimal] = None
    roles_count: int


class ActorDetail(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    base_salary: Optional[Decimal] = None
    bio: Optional[str] = None


# Actor cast in a spectacle (public spectacle page)
class CastedActor(BaseModel):
    id: int
    first_name: str
    last_name: str
    bio: Optional[str] = None
    role_name: Optional[str] = None
