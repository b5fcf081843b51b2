from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.models.user import User
from jobboard.services.auth_service import auth_service


async def require_token(authorization: str | None = Header(None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return authorization[7:]


async def require_user(token: str = Depends(require_token), db: Session = Depends(get_db)) -> User:
    user_id = auth_service.resolve(token)
    user = db.query(User).filter(User.id == user_id).first() if user_id else None
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
