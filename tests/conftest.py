import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shortener.database import make_engine
from shortener.main import app, get_storage
from shortener.storage import SQLStorage


@pytest.fixture
def storage():
    # in-memory database shared by every connection of the pool
    engine = make_engine("sqlite://", poolclass=StaticPool)
    store = SQLStorage(sessionmaker(autocommit=False, autoflush=False, bind=engine), engine)
    store.init()
    yield store
    engine.dispose()


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()
