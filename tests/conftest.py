import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from app.client.app_state import create_app_state
from app.client.config import ClientSettings
from app.client.storage import LocalStorage
from app.db.session import build_engine, get_session, init_db
from app.main import app as fastapi_app

from helpers import PASSWORD


class FakeClock:
    """Horloge manuelle pour les délais (messages, redirections, fin de partie)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def engine():
    test_engine = build_engine("sqlite://")
    init_db(bind=test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture()
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def api(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    fastapi_app.dependency_overrides[get_session] = override_get_session
    client = TestClient(fastapi_app)
    yield client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def storage():
    return LocalStorage()


@pytest.fixture()
def app_state(api, storage, clock):
    state = create_app_state(ClientSettings(BACKEND_URL=None), http=api, storage=storage, clock=clock)
    yield state
    state.auth.dispose()


@pytest.fixture()
def signed_in_state(app_state):
    res = app_state.auth.register("host@example.com", PASSWORD, "Quiz Host")
    assert res.ok, res.message
    res = app_state.auth.sign_in("host@example.com", PASSWORD)
    assert res.ok, res.message
    return app_state
