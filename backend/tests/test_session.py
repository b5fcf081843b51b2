import pytest

from jobboard.client.session import Session, SessionStore, SessionUser
from jobboard.errors import Unauthorized


def _session(token="t1", email="a@x.com"):
    return Session(token=token, user=SessionUser(id="u1", name="A", email=email))


class TestSessionStore:
    def test_starts_empty(self):
        store = SessionStore()
        assert store.get() is None
        with pytest.raises(Unauthorized):
            store.require()

    def test_set_replaces_and_clear_empties(self):
        store = SessionStore()
        store.set(_session("t1"))
        store.set(_session("t2", "b@x.com"))
        assert store.get().token == "t2"
        assert store.require().user.email == "b@x.com"

        store.clear()
        assert store.get() is None

    def test_stores_are_independent(self):
        first, second = SessionStore(), SessionStore()
        first.set(_session())
        assert second.get() is None

    def test_session_is_immutable_and_builds_header(self):
        session = _session("abc")
        assert session.headers == {"Authorization": "Bearer abc"}
        with pytest.raises(Exception):
            session.token = "other"
