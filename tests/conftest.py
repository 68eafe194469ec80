"""Pytest fixtures for the store tests."""

import mongomock
import pytest
from fastapi.testclient import TestClient

from shop_api.config import Settings
from shop_api.database import MemoryStore, MongoStore
from shop_api.log import configure_logging
from shop_api.main import create_app
from storefront.client import StoreClient


@pytest.fixture(autouse=True, scope="session")
def test_logging():
    """Configure logging for the test environment so info lines stay off stdout."""
    with pytest.MonkeyPatch.context() as mp:
        mp.setenv("ENVIRONMENT", "test")
        configure_logging()
        yield


@pytest.fixture(params=["memory", "mongodb"])
def store(request):
    """Every API test runs against both the in-memory and the MongoDB store."""
    if request.param == "memory":
        return MemoryStore()
    uri = "mongodb://localhost/vibe_test"
    return MongoStore(uri, client=mongomock.MongoClient(uri))


@pytest.fixture
def app(store):
    return create_app(store=store, settings=Settings(seed_catalog=False))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded_client(store):
    app = create_app(store=store, settings=Settings(seed_catalog=True))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sdk(client):
    """StoreClient talking to the in-process app."""
    return StoreClient(base_url="http://testserver", session=client)


@pytest.fixture
def seeded_sdk(seeded_client):
    return StoreClient(base_url="http://testserver", session=seeded_client)


def make_order(client, name="A", email="a@b.com", items=None, total=20):
    if items is None:
        items = [{"productId": "x", "name": "P", "price": 10, "quantity": 2}]
    return client.post("/api/orders", json={
        "customer": {"name": name, "email": email},
        "items": items,
        "total": total,
    })
