import logging
import threading
import time
import uuid
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.models.user import User
from jobboard.schemas.auth import LoginRequest
from jobboard.utils.security import generate_token

logger = logging.getLogger("jobboard.auth")


class AuthService:
    def __init__(self):
        self._active_tokens: dict[str, tuple[str, float]] = {}  # token -> (user_id, expires_at)
        self._lock = threading.Lock()

    def _cleanup_expired(self):
        now = time.time()
        self._active_tokens = {
            t: entry for t, entry in self._active_tokens.items() if entry[1] > now
        }

    def find_user(self, db: Session, email: str) -> User | None:
        return db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def provision_user(self, db: Session, req: LoginRequest) -> User:
        """Match an existing user by email or create one; refresh name and photo."""
        now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        user = self.find_user(db, req.email)
        if user is None:
            user = User(
                id=str(uuid.uuid4()),
                email=req.email.lower(),
                name=req.name,
                photo=req.photo,
                created_at=now,
                updated_at=now,
            )
            db.add(user)
            logger.info("Provisioned user %s", user.id)
        else:
            user.name = req.name
            if req.photo:
                user.photo = req.photo
            user.updated_at = now
        db.commit()
        db.refresh(user)
        return user

    def login(self, db: Session, req: LoginRequest) -> tuple[User, str]:
        user = self.provision_user(db, req)
        token = self.issue_token(user.id)
        logger.info("Issued session for user %s", user.id)
        return user, token

    def issue_token(self, user_id: str) -> str:
        token = generate_token()
        with self._lock:
            self._active_tokens[token] = (user_id, time.time() + settings.token_ttl_seconds)
        return token

    def resolve(self, token: str) -> str | None:
        """Return the user id bound to ``token``, or None if unknown or expired."""
        with self._lock:
            self._cleanup_expired()
            entry = self._active_tokens.get(token)
        return entry[0] if entry else None

    def revoke(self, token: str):
        with self._lock:
            self._active_tokens.pop(token, None)

    def revoke_all(self):
        with self._lock:
            self._active_tokens.clear()


auth_service = AuthService()
