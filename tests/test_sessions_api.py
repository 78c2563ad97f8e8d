"""
Tests for the /api/sessions routes

Tests cover:
- Bind then verify through HTTP with Bearer and cookie tokens
- Hijack detection and the exact wire shape of each outcome
- Missing token / missing fingerprint handling
- Store outages never surface as errors or hijack claims
- The require_valid_session dependency on /api/sessions/me
"""
from app.core.security import hash_session_token


def bind(client, token="abc123", fingerprint="fp-X"):
    return client.post(
        "/api/sessions/bind", json={"token": token, "fingerprint": fingerprint}
    )


def auth(token="abc123"):
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# /bind
# =============================================================================


def test_bind_stores_hashed_token(client, store):
    response = bind(client)

    assert response.status_code == 202
    assert store.data == {hash_session_token("abc123"): "fp-X"}
    assert "abc123" not in store.data


def test_bind_is_accepted_even_when_store_fails(client, store):
    store.fail_set = True

    response = bind(client)

    assert response.status_code == 202
    assert store.data == {}


def test_bind_rejects_empty_fingerprint(client, store):
    response = bind(client, fingerprint="")

    assert response.status_code == 422
    assert store.set_calls == 0


# =============================================================================
# /verify
# =============================================================================


def test_verify_matching_fingerprint(client):
    bind(client)

    response = client.post(
        "/api/sessions/verify", json={"fingerprint": "fp-X"}, headers=auth()
    )

    assert response.status_code == 200
    assert response.json() == {
        "valid": True,
        "hijacked": False,
        "receivedFingerprint": "fp-X",
    }


def test_verify_detects_hijack(client):
    bind(client)

    response = client.post(
        "/api/sessions/verify", json={"fingerprint": "fp-Y"}, headers=auth()
    )

    assert response.status_code == 200
    assert response.json() == {
        "valid": False,
        "hijacked": True,
        "receivedFingerprint": "fp-X",
    }


def test_verify_reads_token_from_cookie(client):
    bind(client)
    client.cookies.set("session_token", "abc123")

    response = client.post("/api/sessions/verify", json={"fingerprint": "fp-X"})

    assert response.json()["valid"] is True


def test_verify_reads_fingerprint_from_header(client):
    bind(client)

    response = client.post(
        "/api/sessions/verify",
        headers={**auth(), "X-Client-Fingerprint": "fp-Y"},
    )

    assert response.json()["hijacked"] is True


def test_verify_unbound_token(client):
    response = client.post(
        "/api/sessions/verify", json={"fingerprint": "fp-X"}, headers=auth("fresh")
    )

    assert response.json() == {
        "valid": True,
        "hijacked": False,
        "receivedFingerprint": None,
    }


def test_verify_without_token(client):
    bind(client)

    response = client.post("/api/sessions/verify", json={"fingerprint": "fp-X"})

    assert response.status_code == 200
    assert response.json() == {"valid": False}


def test_verify_without_fingerprint(client):
    bind(client)

    response = client.post("/api/sessions/verify", json={}, headers=auth())

    assert response.status_code == 400
    assert response.json() == {"detail": "Error calculating fingerprint"}


def test_verify_store_outage(client, store):
    bind(client)
    store.fail_get = True

    response = client.post(
        "/api/sessions/verify", json={"fingerprint": "fp-Y"}, headers=auth()
    )

    assert response.status_code == 200
    assert response.json() == {"valid": False}


def test_rebind_after_relogin(client):
    bind(client, fingerprint="fp-X")
    bind(client, fingerprint="fp-Z")

    response = client.post(
        "/api/sessions/verify", json={"fingerprint": "fp-Z"}, headers=auth()
    )

    assert response.json()["valid"] is True


# =============================================================================
# /me (require_valid_session)
# =============================================================================


def test_me_with_valid_session(client):
    bind(client)

    response = client.get(
        "/api/sessions/me", headers={**auth(), "X-Client-Fingerprint": "fp-X"}
    )

    assert response.status_code == 200
    assert response.json() == {"bound": True, "valid": True}


def test_me_with_unbound_session(client):
    response = client.get(
        "/api/sessions/me", headers={**auth(), "X-Client-Fingerprint": "fp-X"}
    )

    assert response.status_code == 200
    assert response.json() == {"bound": False, "valid": True}


def test_me_rejects_hijacked_session(client):
    bind(client)

    response = client.get(
        "/api/sessions/me", headers={**auth(), "X-Client-Fingerprint": "fp-Y"}
    )

    assert response.status_code == 401
    assert response.json() == {"detail": "Session hijacking detected"}


def test_me_requires_token(client):
    response = client.get("/api/sessions/me", headers={"X-Client-Fingerprint": "fp-X"})

    assert response.status_code == 401
    assert response.json() == {"detail": "Not authenticated"}


def test_me_requires_fingerprint(client):
    bind(client)

    response = client.get("/api/sessions/me", headers=auth())

    assert response.status_code == 400


def test_me_fails_closed_on_store_outage(client, store):
    bind(client)
    store.fail_get = True

    response = client.get(
        "/api/sessions/me", headers={**auth(), "X-Client-Fingerprint": "fp-X"}
    )

    assert response.status_code == 401
    assert response.json() == {"detail": "Session could not be verified"}


def test_security_headers(client):
    response = client.get("/health/live")

    assert response.status_code == 200
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
