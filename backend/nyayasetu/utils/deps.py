"""Dependency injection"""
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..database import get_storage
from ..models import Advocate, Role, User
from ..services.session_service import session_service
from ..storage import Storage
from .security import decode_token

security = HTTPBearer(auto_error=False)

logger = logging.getLogger(__name__)

StorageDep = Annotated[Storage, Depends(get_storage)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)] = None,
) -> dict:
    """Claims of a valid, unrevoked bearer token"""
    if not credentials:
        logger.info("auth: missing credentials")
        raise _unauthorized("Not authenticated")

    payload = decode_token(credentials.credentials)
    if payload is None:
        logger.info("auth: token decode failed")
        raise _unauthorized("Invalid authentication credentials")

    if session_service.is_revoked(payload.get("jti")):
        logger.info("auth: token revoked")
        raise _unauthorized("Session has ended, please log in again")

    if not payload.get("sub"):
        logger.info("auth: token missing sub")
        raise _unauthorized("Invalid authentication credentials")
    return payload


async def get_current_user(
    storage: StorageDep,
    claims: Annotated[dict, Depends(get_token_claims)],
) -> User:
    """The logged-in user"""
    user = await storage.get_user(str(claims["sub"]))
    if user is None:
        logger.info("auth: user not found (id=%s)", claims["sub"])
        raise _unauthorized("User not found")
    return user


async def get_current_user_optional(
    storage: StorageDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)] = None,
) -> User | None:
    """The logged-in user, or None for anonymous callers"""
    if not credentials:
        return None
    try:
        claims = await get_token_claims(credentials)
        return await get_current_user(storage=storage, claims=claims)
    except HTTPException:
        return None


async def require_admin(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    if current_user.role != Role.ADMIN:
        logger.warning("Permission denied: user %s (role=%s) needs admin", current_user.username, current_user.role)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privileges required")
    return current_user


async def require_advocate(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    if current_user.role != Role.ADVOCATE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Advocate account required")
    return current_user


async def get_current_advocate(
    storage: StorageDep,
    current_user: Annotated[User, Depends(require_advocate)],
) -> Advocate:
    """Advocate profile of the logged-in advocate"""
    advocate = await storage.get_advocate_by_user_id(current_user.id)
    if advocate is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Advocate profile not found")
    return advocate


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_current_user_optional)]
AdminUser = Annotated[User, Depends(require_admin)]
CurrentAdvocate = Annotated[Advocate, Depends(get_current_advocate)]
