from shop_api.config import Settings
from shop_api.database import MemoryStore, open_store


def test_defaults(monkeypatch):
    for var in ("PORT", "MONGODB_URI", "CORS_ORIGINS", "SEED_CATALOG"):
        monkeypatch.delenv(var, raising=False)
    s = Settings.from_env()
    assert s.port == 5000
    assert s.mongodb_uri is None
    assert s.cors_origins == ["http://localhost:5173"]
    assert s.seed_catalog is True
    assert isinstance(open_store(s), MemoryStore)


def test_from_env(monkeypatch):
    monkeypatch.setenv("PORT", "8085")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("SEED_CATALOG", "false")
    s = Settings.from_env()
    assert s.port == 8085
    assert s.cors_origins == ["http://a.test", "http://b.test"]
    assert s.seed_catalog is False
