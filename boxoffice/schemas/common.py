from typing import Optional
from pydantic import BaseModel


# Error responses
class ErrorResponse(BaseModel):
    detail: str


# Plain acknowledgement for form submissions that used to redirect
class ActionResult(BaseModel):
    message: str
    redirect_to: Optional[str] = None
    id: Optional[int] = None
