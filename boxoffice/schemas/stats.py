from typing import List
from pydantic import BaseModel
from decimal import Decimal


class GenreAveragePrice(BaseModel):
    name: str
    avg_price: Decimal


class PersonName(BaseModel):
    first_name: str
    last_name: str


class LongSpectacle(BaseModel):
    title: str
    duration_minutes: int


class HighEarner(PersonName):
    salary: Decimal


# GET /admin/stats: four fixed analytic result sets
class StatsResponse(BaseModel):
    rich_genres: List[GenreAveragePrice]
    drama_actors: List[PersonName]
    long_spectacles: List[LongSpectacle]
    high_earners: List[HighEarner]
