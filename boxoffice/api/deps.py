from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from boxoffice.api.identity import IdentityProvider, SessionIdentityProvider
from boxoffice.db.session import get_db
from boxoffice.schemas.user import CurrentUser

_session_identity = SessionIdentityProvider()


def get_identity_provider() -> IdentityProvider:
    return _session_identity


def get_current_user(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> Optional[CurrentUser]:
    """Current user or None; pages render either way."""
    return identity.resolve(request, response, db)


def require_current_user(
    current_user: Optional[CurrentUser] = Depends(get_current_user),
) -> CurrentUser:
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No user session",
        )
    return current_user
