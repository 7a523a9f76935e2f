import pytest
from fastapi.testclient import TestClient

from storefront.db.database import DatabaseStorage
from storefront.db.memory import MemStorage
from storefront.db.seed import seed_catalog
from storefront.db.session import make_engine
from storefront.main import create_app
from storefront.services.cart import CartService
from storefront.services.order import OrderService


def _make_storage(backend):
    if backend == "memory":
        return MemStorage(), None
    engine = make_engine("sqlite://")
    return DatabaseStorage(engine), engine


@pytest.fixture(params=["memory", "database"])
def storage(request):
    """Seeded storage, once per backend."""
    store, engine = _make_storage(request.param)
    seed_catalog(store)
    yield store
    if engine is not None:
        engine.dispose()


@pytest.fixture
def mem_storage():
    store = MemStorage()
    seed_catalog(store)
    return store


@pytest.fixture
def cart_service(mem_storage):
    return CartService(mem_storage)


@pytest.fixture
def order_service(mem_storage):
    return OrderService(mem_storage)


@pytest.fixture
def client(mem_storage):
    app = create_app(storage=mem_storage)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Register a user and return bearer headers for them."""

    def _login(username="alice", password="s3cret!"):
        resp = client.post("/api/v1/auth/register", json={
            "username": username,
            "password": password,
            "email": f"{username}@example.com",
            "first_name": username.title(),
        })
        assert resp.status_code == 201, resp.text
        resp = client.post("/api/v1/auth/token", data={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _login


@pytest.fixture
def auth_headers(login):
    return login()
