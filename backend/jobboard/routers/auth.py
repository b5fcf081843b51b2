from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.database import get_db
from jobboard.dependencies import require_token, require_user
from jobboard.models.user import User
from jobboard.schemas.auth import LoginRequest, LoginResponse, UserResponse
from jobboard.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, email=user.email, photo=user.photo)


@router.post("/login", response_model=LoginResponse)
async def login(req: LoginRequest, db: Session = Depends(get_db)):
    """Exchange identity claims verified by the caller's provider for a session token."""
    user, token = auth_service.login(db, req)
    return LoginResponse(
        token=token,
        expires_in_seconds=settings.token_ttl_seconds,
        user=_user_to_response(user),
    )


@router.post("/logout")
async def logout(token: str = Depends(require_token)):
    auth_service.revoke(token)
    return {"message": "Logged out"}


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(require_user)):
    return _user_to_response(user)
