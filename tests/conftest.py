import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update

from receituario.config import Settings
from receituario.database import (
    close_db,
    create_db_engine,
    create_session_factory,
    init_db,
)
from receituario.main import create_app
from receituario.models.counter import COUNTER_ID, Counter


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'receitas.db'}"


@pytest.fixture
def engine(database_url):
    engine = create_db_engine(database_url)
    init_db(engine)
    yield engine
    close_db(engine)


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def set_counter(session_factory):
    """Force the counter row to a given value."""

    def _set(value):
        with session_factory() as session:
            session.execute(
                update(Counter).where(Counter.id == COUNTER_ID).values(last_number=value)
            )
            session.commit()

    return _set


@pytest.fixture
def read_counter(session_factory):
    def _read():
        with session_factory() as session:
            counter = session.get(Counter, COUNTER_ID)
            return counter.last_number if counter else None

    return _read


@pytest.fixture
def make_app(database_url):
    """Build an app on the test database; settings overrides as keywords."""

    def _make(**overrides):
        values = {"DATABASE_URL": database_url, "RATE_LIMIT_ENABLED": False}
        values.update(overrides)
        return create_app(Settings(**values))

    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
