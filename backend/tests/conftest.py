import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from jobboard.client.api import ApiClient
from jobboard.database import get_db
from jobboard.main import app
from jobboard.config import settings
from jobboard.services.auth_service import auth_service


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def tmp_data(tmp_path):
    data_path = tmp_path / "JobBoard"
    data_path.mkdir()
    return data_path


@pytest.fixture
def test_db(tmp_data):
    db_path = tmp_data / "db.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    from jobboard.database import init_db
    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def fresh_auth_service():
    """Reset issued tokens for each test."""
    original = auth_service.__dict__.copy()
    auth_service._active_tokens = {}
    yield auth_service
    auth_service.__dict__.update(original)


@pytest.fixture
def client(tmp_data, test_db, fresh_auth_service):
    original_data_path = settings.data_path
    settings.data_path = tmp_data
    # No context manager: the lifespan would initialise the real data path.
    c = TestClient(app)
    yield c
    settings.data_path = original_data_path


@pytest.fixture
async def api(client):
    """Async client-layer transport wired straight into the app."""
    transport = httpx.ASGITransport(app=app)
    async with ApiClient(base_url=f"http://testserver{settings.api_prefix}", transport=transport) as api_client:
        yield api_client
