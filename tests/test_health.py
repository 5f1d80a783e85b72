from conftest import API

from app.core.config import get_settings


async def test_root_describes_api(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == get_settings().app_name
    assert body["docs"] == "/docs"
    assert body["health"] == "/health"


async def test_health_reports_database_and_redis(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["redis"] == "disabled"
    assert body["uptime"] >= 0


async def test_api_liveness_and_readiness(client):
    assert (await client.get(f"{API}/health")).json()["status"] == "ok"
    ready = await client.get(f"{API}/health/ready")
    assert ready.status_code == 200
    assert ready.json()["database"] == "connected"


async def test_security_headers_present(client):
    resp = await client.get("/")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert "default-src 'self'" in resp.headers["Content-Security-Policy"]


async def test_seed_route_requires_configured_secret(client, monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "seed_secret", "")
    assert (await client.get(f"{API}/seed", params={"secret": "x"})).status_code == 500

    monkeypatch.setattr(settings, "seed_secret", "let-me-seed")
    assert (await client.get(f"{API}/seed", params={"secret": "wrong"})).status_code == 401


async def test_seed_route_is_idempotent(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "seed_secret", "let-me-seed")
    first = await client.get(f"{API}/seed", params={"secret": "let-me-seed"})
    assert first.status_code == 200
    assert first.json()["seeded"] == {"exercises": 21, "achievements": 10, "programs": 5}

    second = await client.get(f"{API}/seed", params={"secret": "let-me-seed"})
    assert second.status_code == 200

    login = await client.post(
        f"{API}/auth/register",
        json={"name": "Cy", "email": "cy@example.com", "password": "long-enough-1"},
    )
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
    listing = await client.get(f"{API}/exercises", headers=headers)
    assert listing.json()["meta"]["total"] == 21
