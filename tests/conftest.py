import pytest
from fastapi.testclient import TestClient

from book_catalog.main import create_app
from book_catalog.storage import CatalogStore


@pytest.fixture
def store():
    # Fresh seeded catalogue per test: ids 1-3, next id 4
    return CatalogStore.seeded()


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
