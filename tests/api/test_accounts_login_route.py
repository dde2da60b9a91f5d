def test_login_refused_until_activated(client, registered, basic_auth):
    response = client.post(
        "/v1/accounts/login", headers=basic_auth("jeremy@example.com", "s3cret")
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "account not activated"


def test_login_and_me_after_activation(client, registered, basic_auth):
    client.post("/v1/accounts/activate", json={"token": registered.activation_token})

    r = client.post(
        "/v1/accounts/login", headers=basic_auth("jeremy@example.com", "s3cret")
    )
    assert r.status_code == 200, r.text
    token = r.json()["token"]
    assert token.startswith("tok-")

    r2 = client.get("/v1/accounts/me", headers={"Authorization": f"Bearer {token}"})
    assert r2.status_code == 200, r2.text
    assert r2.json() == {
        "id": registered.id,
        "email": "jeremy@example.com",
        "activation_state": "active",
    }


def test_login_invalid_credentials(client, registered, basic_auth):
    client.post("/v1/accounts/activate", json={"token": registered.activation_token})

    r = client.post(
        "/v1/accounts/login", headers=basic_auth("jeremy@example.com", "wrong")
    )
    assert r.status_code == 401
    assert r.json()["detail"] == "invalid credentials"


def test_login_unknown_account(client, basic_auth):
    r = client.post("/v1/accounts/login", headers=basic_auth("ghost@example.com", "x"))
    assert r.status_code == 401


def test_me_invalid_token(client):
    r = client.get("/v1/accounts/me", headers={"Authorization": "Bearer nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "invalid or expired token"


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
