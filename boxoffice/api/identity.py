"""
Request identity.

There is no login flow: a request either carries a session cookie naming a
user, or it is attributed to the first administrator found in the store
(the back office runs as that admin). Tests swap the provider for
StaticIdentityProvider through FastAPI dependency overrides.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boxoffice.core.config import settings
from boxoffice.core.security import create_session_token, decode_session_token
from boxoffice.models.person import Person, User
from boxoffice.schemas.user import CurrentUser

logger = logging.getLogger(__name__)


def _to_current_user(user: User) -> CurrentUser:
    return CurrentUser(id=user.person_id, role=user.role, name=user.person.full_name)


class IdentityProvider(ABC):
    """Resolves the user a request acts as (None when there is nobody)."""

    @abstractmethod
    def resolve(self, request: Request, response: Response, db: Session) -> Optional[CurrentUser]:
        ...


class SessionIdentityProvider(IdentityProvider):
    """Session cookie first, then a best-effort lookup of an admin account."""

    def resolve(self, request: Request, response: Response, db: Session) -> Optional[CurrentUser]:
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        if token:
            person_id = decode_session_token(token)
            if person_id and person_id.isdigit():
                user = db.query(User).filter(User.person_id == int(person_id)).first()
                if user:
                    return _to_current_user(user)

        current = self._fallback_admin(db)
        if current:
            response.set_cookie(
                settings.SESSION_COOKIE_NAME,
                create_session_token(str(current.id)),
                httponly=True,
                max_age=settings.SESSION_EXPIRE_MINUTES * 60,
            )
        return current

    def _fallback_admin(self, db: Session) -> Optional[CurrentUser]:
        try:
            user = (
                db.query(User)
                .join(Person, User.person_id == Person.id)
                .filter(User.role == "admin")
                .order_by(User.person_id)
                .first()
            )
        except SQLAlchemyError as exc:
            logger.error("Could not resolve the default admin: %s", exc)
            db.rollback()
            return None
        if not user:
            return None
        logger.debug("No session; acting as admin %s", user.person_id)
        return _to_current_user(user)


class StaticIdentityProvider(IdentityProvider):
    """Test-only: every request is attributed to the same (possibly absent) user."""

    def __init__(self, user: Optional[CurrentUser]):
        self.user = user

    def resolve(self, request: Request, response: Response, db: Session) -> Optional[CurrentUser]:
        return self.user
