import threading
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from jobboard.errors import Unauthorized


class SessionUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    photo: str | None = None


class Session(BaseModel):
    """A bearer token plus the profile it was issued for."""

    model_config = ConfigDict(frozen=True)

    token: str
    user: SessionUser
    issued_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class SessionStore:
    """Holds at most one active session for a client instance.

    Nothing here expires tokens; the server decides validity and callers clear
    the store when a request comes back unauthorized.
    """

    def __init__(self, session: Session | None = None):
        self._session = session
        self._lock = threading.Lock()

    def get(self) -> Session | None:
        with self._lock:
            return self._session

    def set(self, session: Session):
        with self._lock:
            self._session = session

    def clear(self):
        with self._lock:
            self._session = None

    def require(self) -> Session:
        session = self.get()
        if session is None:
            raise Unauthorized("Not signed in")
        return session
