def test_register_returns_public_fields(client):
    res = client.post("/users", json={"username": "alice", "password": "pw123"})
    assert res.status_code == 201
    body = res.json()
    assert body["username"] == "alice"
    assert set(body) == {"id", "username", "created_at"}


def test_register_trims_and_requires_fields(client):
    res = client.post("/users", json={"username": "   ", "password": "pw"})
    assert res.status_code == 400
    assert res.json() == {"error": "username and password required"}

    res = client.post("/users", json={"username": "  bob  ", "password": "pw"})
    assert res.status_code == 201
    assert res.json()["username"] == "bob"


def test_register_duplicate_username(client):
    client.post("/users", json={"username": "alice", "password": "pw123"})
    res = client.post("/users", json={"username": "alice", "password": "other"})
    assert res.status_code == 400
    assert res.json()["error"] == "username already exists"


def test_register_malformed_body_is_400(client):
    res = client.post("/users", content="not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert "error" in res.json()


def test_list_users_hides_credentials(client):
    client.post("/users", json={"username": "alice", "password": "pw123"})
    client.post("/users/login", json={"username": "alice", "password": "pw123"})
    res = client.get("/users")
    assert res.status_code == 200
    users = res.json()
    assert [u["username"] for u in users] == ["alice"]
    assert "password" not in users[0]
    assert "password_hash" not in users[0]
    assert "token" not in users[0]


def test_login_rejects_bad_credentials(client):
    client.post("/users", json={"username": "alice", "password": "pw123"})

    res = client.post("/users/login", json={"username": "alice", "password": "nope"})
    assert res.status_code == 401
    assert res.json() == {"error": "invalid username/password"}

    res = client.post("/users/login", json={"username": "ghost", "password": "pw123"})
    assert res.status_code == 401


def test_relogin_overwrites_previous_token(client, login):
    first = login("alice")
    assert client.get("/carts/me", headers=first).status_code == 200

    second = login("alice")
    assert first != second
    assert client.get("/carts/me", headers=first).status_code == 401
    assert client.get("/carts/me", headers=second).status_code == 200


def test_logout_invalidates_token(client, login):
    headers = login("alice")
    res = client.post("/users/logout", headers=headers)
    assert res.status_code == 200
    assert res.json() == {"ok": True}

    res = client.get("/carts/me", headers=headers)
    assert res.status_code == 401
    assert res.json() == {"error": "invalid token"}


def test_protected_routes_need_bearer_token(client):
    res = client.get("/carts/me")
    assert res.status_code == 401
    assert res.json() == {"error": "missing token"}

    res = client.get("/orders", headers={"Authorization": "Token abc"})
    assert res.status_code == 401
    assert res.json() == {"error": "missing token"}

    res = client.get("/orders/me", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401
    assert res.json() == {"error": "invalid token"}


def test_register_rejects_password_over_bcrypt_limit(client):
    res = client.post("/users", json={"username": "alice", "password": "x" * 73})
    assert res.status_code == 400
    assert res.json() == {"error": "password too long"}
    assert client.get("/users").json() == []

    res = client.post("/users", json={"username": "alice", "password": "x" * 72})
    assert res.status_code == 201
