"""Authentication routes"""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from ..config import get_settings
from ..schemas.common import MessageResponse
from ..schemas.user import LoginResponse, RegisterResponse, Token, UserCreate, UserLogin, UserResponse
from ..services.session_service import session_service
from ..services.user_service import user_service
from ..utils.deps import CurrentUser, StorageDep, get_token_claims
from ..utils.security import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
)
async def register(user_data: UserCreate, storage: StorageDep):
    """
    Register a client or advocate account

    - **username**: 3-50 characters
    - **email**: valid email
    - **password**: at least 6 characters
    - **role**: client or advocate
    """
    try:
        user, advocate = await user_service.create(storage, user_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("User registered: id=%s role=%s", user.id, user.role)
    return RegisterResponse(
        user=UserResponse.model_validate(user),
        advocate_id=advocate.id if advocate else None,
    )


@router.post("/login", response_model=LoginResponse, summary="Log in")
async def login(login_data: UserLogin, storage: StorageDep):
    """
    Log in with username or email

    - **username**: username or email
    - **password**: password
    """
    settings = get_settings()
    user = await user_service.authenticate(
        storage,
        login_data.username,
        login_data.password,
        allow_plaintext=not settings.is_production,
    )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
        )

    access_token = create_access_token(data={"sub": user.id, "role": user.role})
    return LoginResponse(
        user=UserResponse.model_validate(user),
        token=Token(
            access_token=access_token,
            token_type="bearer",
            expires_in=settings.access_token_expire_minutes * 60,
        ),
    )


@router.post("/logout", response_model=MessageResponse, summary="Log out")
async def logout(claims: Annotated[dict, Depends(get_token_claims)]):
    """End the session of the presented token"""
    session_service.revoke(str(claims.get("jti") or ""), float(claims.get("exp") or 0))
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=UserResponse, summary="Current user")
async def get_me(current_user: CurrentUser):
    return UserResponse.model_validate(current_user)
