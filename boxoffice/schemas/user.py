from pydantic import BaseModel


# Identity attached to a request (GET pages, reviews, bookings)
class CurrentUser(BaseModel):
    id: int
    role: str
    name: str
