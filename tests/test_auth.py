from conftest import API, PASSWORD, bearer, register


async def test_register_returns_user_and_tokens(client):
    resp = await register(client, email="Ana@Example.com")
    assert resp.status_code == 201
    body = resp.json()
    assert body["user"]["email"] == "ana@example.com"
    assert body["user"]["role"] == "USER"
    assert body["access_token"] and body["refresh_token"]
    assert body["token_type"] == "bearer"
    assert "password_hash" not in body["user"]


async def test_register_duplicate_email_conflicts(client, auth):
    resp = await register(client, email="ANA@example.com")
    assert resp.status_code == 409


async def test_register_short_password_is_400(client):
    resp = await register(client, password="short")
    assert resp.status_code == 400
    assert "8 characters" in resp.json()["detail"]


async def test_register_invalid_email_is_422(client):
    resp = await register(client, email="not-an-email")
    assert resp.status_code == 422


async def test_login_success_and_failure_messages_match(client, auth):
    ok = await client.post(f"{API}/auth/login", json={"email": "ana@example.com", "password": PASSWORD})
    assert ok.status_code == 200
    assert ok.json()["user"]["id"] == auth["user"]["id"]

    wrong_pw = await client.post(f"{API}/auth/login", json={"email": "ana@example.com", "password": "nope-nope"})
    unknown = await client.post(f"{API}/auth/login", json={"email": "zed@example.com", "password": PASSWORD})
    assert wrong_pw.status_code == unknown.status_code == 401
    assert wrong_pw.json()["detail"] == unknown.json()["detail"] == "Invalid email or password."


async def test_me_requires_bearer_token(client, auth):
    missing = await client.get(f"{API}/auth/me")
    assert missing.status_code == 401
    assert missing.json()["detail"] == "No token provided."

    garbage = await client.get(f"{API}/auth/me", headers=bearer("not.a.jwt"))
    assert garbage.status_code == 401
    assert garbage.json()["detail"] == "Invalid or expired token."

    ok = await client.get(f"{API}/auth/me", headers=auth["headers"])
    assert ok.status_code == 200
    assert ok.json()["name"] == "Ana"


async def test_refresh_token_cannot_authenticate_requests(client, auth):
    resp = await client.get(f"{API}/auth/me", headers=bearer(auth["refresh_token"]))
    assert resp.status_code == 401


async def test_refresh_rotates_and_old_token_is_dead(client, auth):
    first = await client.post(f"{API}/auth/refresh", json={"refresh_token": auth["refresh_token"]})
    assert first.status_code == 200
    rotated = first.json()
    assert rotated["refresh_token"] != auth["refresh_token"]

    replay = await client.post(f"{API}/auth/refresh", json={"refresh_token": auth["refresh_token"]})
    assert replay.status_code == 401

    second = await client.post(f"{API}/auth/refresh", json={"refresh_token": rotated["refresh_token"]})
    assert second.status_code == 200
    me = await client.get(f"{API}/auth/me", headers=bearer(second.json()["access_token"]))
    assert me.status_code == 200


async def test_refresh_rejects_access_token(client, auth):
    resp = await client.post(f"{API}/auth/refresh", json={"refresh_token": auth["access_token"]})
    assert resp.status_code == 401


async def test_logout_revokes_refresh_token(client, auth):
    resp = await client.post(f"{API}/auth/logout", json={"refresh_token": auth["refresh_token"]})
    assert resp.status_code == 200
    again = await client.post(f"{API}/auth/refresh", json={"refresh_token": auth["refresh_token"]})
    assert again.status_code == 401


async def test_logout_without_token_still_succeeds(client):
    resp = await client.post(f"{API}/auth/logout", json={})
    assert resp.status_code == 200


async def test_change_password_revokes_every_session(client, auth):
    login = await client.post(f"{API}/auth/login", json={"email": "ana@example.com", "password": PASSWORD})
    second_refresh = login.json()["refresh_token"]

    wrong = await client.post(
        f"{API}/auth/change-password",
        json={"current_password": "bad-guess-1", "new_password": "brand-new-pass"},
        headers=auth["headers"],
    )
    assert wrong.status_code == 401

    too_short = await client.post(
        f"{API}/auth/change-password",
        json={"current_password": PASSWORD, "new_password": "tiny"},
        headers=auth["headers"],
    )
    assert too_short.status_code == 400

    ok = await client.post(
        f"{API}/auth/change-password",
        json={"current_password": PASSWORD, "new_password": "brand-new-pass"},
        headers=auth["headers"],
    )
    assert ok.status_code == 200

    for token in (auth["refresh_token"], second_refresh):
        resp = await client.post(f"{API}/auth/refresh", json={"refresh_token": token})
        assert resp.status_code == 401

    old = await client.post(f"{API}/auth/login", json={"email": "ana@example.com", "password": PASSWORD})
    new = await client.post(f"{API}/auth/login", json={"email": "ana@example.com", "password": "brand-new-pass"})
    assert old.status_code == 401
    assert new.status_code == 200
