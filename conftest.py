import mongomock
import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import Store
from library import Library


@pytest.fixture
def store():
    # Fresh in-memory MongoDB for every test
    test_store = Store(mongomock.MongoClient(), Settings(mongodb_database="bookshelf_test"))
    yield test_store
    test_store.close()


@pytest.fixture
def lib(store):
    return Library(store)


@pytest.fixture
def client(store):
    import api

    with TestClient(api.create_app(store=store)) as test_client:
        yield test_client
