def test_update_own_profile(client, auth_headers):
    headers = auth_headers()

    response = client.put(
        "/api/profile",
        json={"name": "New Name", "avatarUrl": "https://img.example/me.png", "isWatchlistPublic": True},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["name"] == "New Name"
    assert body["user"]["avatarUrl"] == "https://img.example/me.png"
    assert body["user"]["isWatchlistPublic"] is True
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.json()["name"] == "New Name"


def test_profile_update_cannot_change_role(client, auth_headers):
    response = client.put("/api/profile", json={"name": "X", "role": "ADMIN"}, headers=auth_headers())
    assert response.json()["user"]["role"] == "USER"


def test_profile_password_change(client, auth_headers):
    headers = auth_headers()
    client.put("/api/profile", json={"password": "brandnew1"}, headers=headers)

    old = client.post("/api/auth/login", json={"email": "viewer@example.com", "password": "secret123"})
    new = client.post("/api/auth/login", json={"email": "viewer@example.com", "password": "brandnew1"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_blank_password_is_ignored(client, auth_headers):
    headers = auth_headers()
    client.put("/api/profile", json={"password": "   "}, headers=headers)

    login = client.post("/api/auth/login", json={"email": "viewer@example.com", "password": "secret123"})
    assert login.status_code == 200


def test_profile_email_must_be_unique(client, auth_headers, add_user):
    add_user("other")
    response = client.put("/api/profile", json={"email": "other@example.com"}, headers=auth_headers())
    assert response.status_code == 400


def test_profile_requires_token(client):
    assert client.put("/api/profile", json={"name": "X"}).status_code == 401


def test_watchlist_toggle(client, auth_headers, add_movie):
    add_movie("42", "42/index.m3u8")
    add_movie("99", "https://external.example/movie.mp4")
    headers = auth_headers()

    assert client.put("/api/user/watchlist/42", headers=headers).json() == ["42"]
    assert client.put("/api/user/watchlist/99", headers=headers).json() == ["42", "99"]
    assert client.put("/api/user/watchlist/42", headers=headers).json() == ["99"]
    assert client.get("/api/auth/me", headers=headers).json()["watchlist"] == ["99"]


def test_watchlist_unknown_movie(client, auth_headers):
    assert client.put("/api/user/watchlist/nope", headers=auth_headers()).status_code == 404
