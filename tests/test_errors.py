from fastapi.testclient import TestClient

from shop_api.config import Settings
from shop_api.database import MemoryStore
from shop_api.main import create_app


class BrokenStore(MemoryStore):
    name = "broken"

    def list_products(self):
        raise ConnectionError("store unreachable")

    def list_orders(self):
        raise ConnectionError("store unreachable")


def test_storage_failure_is_500_with_message():
    app = create_app(store=BrokenStore(), settings=Settings(seed_catalog=False))
    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/api/products")
        assert r.status_code == 500
        assert r.json() == {"message": "store unreachable"}
        assert c.get("/api/orders").status_code == 500


def test_unknown_route_has_message_body(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert r.json() == {"message": "Not Found"}


def test_root_and_health(client, store):
    assert client.get("/").json() == {"message": "Vibe Commerce API is running"}
    client.post("/api/products", json={"name": "A", "price": 1})
    assert client.get("/api/health").json() == {"status": "ok", "store": store.name, "products": 1}


def test_unreachable_mongo_still_serves_500s():
    from pymongo import MongoClient

    from shop_api.database import MongoStore

    uri = "mongodb://127.0.0.1:1/vibe_test"
    store = MongoStore(uri, client=MongoClient(uri, serverSelectionTimeoutMS=300))
    app = create_app(store=store, settings=Settings(seed_catalog=True))
    with TestClient(app, raise_server_exceptions=False) as c:
        assert c.get("/").status_code == 200
        for path in ("/api/products", "/api/orders"):
            r = c.get(path)
            assert r.status_code == 500
            assert r.json()["message"]
    store.close()


def test_run_configures_logging_before_serving(monkeypatch):
    import uvicorn

    from shop_api import main

    calls = []
    monkeypatch.delenv("MONGODB_URI", raising=False)
    monkeypatch.setenv("PORT", "8123")
    monkeypatch.setattr(main, "configure_logging", lambda: calls.append("logging"))
    monkeypatch.setattr(uvicorn, "run", lambda app, host, port: calls.append(("serve", port)))
    main.run()
    assert calls == ["logging", ("serve", 8123)]
    assert not hasattr(main, "app")
