from streamai.models.user import UserRole


def test_admin_lists_users_without_password(client, auth_headers, add_user):
    headers = auth_headers("boss", UserRole.ADMIN)
    add_user("viewer")

    response = client.get("/api/users/", headers=headers)

    assert response.status_code == 200
    users = {u["id"]: u for u in response.json()}
    assert set(users) == {"boss", "viewer"}
    assert users["viewer"]["isActive"] is True
    assert all("password" not in u for u in users.values())


def test_viewer_cannot_manage_users(client, auth_headers, add_user):
    headers = auth_headers()
    add_user("other")

    assert client.get("/api/users/", headers=headers).status_code == 403
    assert client.put("/api/users/other", json={"name": "X"}, headers=headers).status_code == 403
    assert client.delete("/api/users/other", headers=headers).status_code == 403


def test_admin_updates_user(client, auth_headers, add_user):
    headers = auth_headers("boss", UserRole.ADMIN)
    add_user("viewer")

    response = client.put(
        "/api/users/viewer",
        json={"name": "Renamed", "role": "ADMIN", "avatarUrl": "https://img.example/a.png", "password": "newpass1"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"
    assert response.json()["role"] == "ADMIN"
    assert response.json()["avatarUrl"] == "https://img.example/a.png"
    login = client.post("/api/auth/login", json={"email": "viewer@example.com", "password": "newpass1"})
    assert login.status_code == 200


def test_admin_update_rejects_taken_email(client, auth_headers, add_user):
    headers = auth_headers("boss", UserRole.ADMIN)
    add_user("viewer")

    response = client.put("/api/users/viewer", json={"email": "boss@example.com"}, headers=headers)

    assert response.status_code == 400


def test_admin_update_unknown_user(client, auth_headers):
    response = client.put("/api/users/ghost", json={"name": "X"}, headers=auth_headers("boss", UserRole.ADMIN))
    assert response.status_code == 404


def test_deactivated_user_cannot_login(client, auth_headers, add_user):
    headers = auth_headers("boss", UserRole.ADMIN)
    add_user("viewer")

    client.put("/api/users/viewer", json={"isActive": False}, headers=headers)

    login = client.post("/api/auth/login", json={"email": "viewer@example.com", "password": "secret123"})
    assert login.status_code == 401


def test_admin_cannot_deactivate_self(client, auth_headers):
    headers = auth_headers("boss", UserRole.ADMIN)
    response = client.put("/api/users/boss", json={"isActive": False}, headers=headers)
    assert response.status_code == 400


def test_admin_deletes_user(client, auth_headers, add_user):
    headers = auth_headers("boss", UserRole.ADMIN)
    viewer = auth_headers("viewer")

    assert client.delete("/api/users/viewer", headers=headers).json() == {"success": True}
    assert client.get("/api/auth/me", headers=viewer).status_code == 401
    assert client.delete("/api/users/viewer", headers=headers).status_code == 404


def test_admin_cannot_delete_self(client, auth_headers):
    headers = auth_headers("boss", UserRole.ADMIN)
    response = client.delete("/api/users/boss", headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete your own admin account"


def test_public_profile_hides_private_watchlist(client, auth_headers, add_user):
    owner = auth_headers("viewer", watchlist=["42"])
    stranger = auth_headers("stranger")

    anonymous = client.get("/api/users/profile/viewer")
    as_stranger = client.get("/api/users/profile/viewer", headers=stranger)
    as_owner = client.get("/api/users/profile/viewer", headers=owner)

    assert anonymous.status_code == 200
    assert "email" not in anonymous.json()
    assert anonymous.json()["watchlist"] == []
    assert as_stranger.json()["watchlist"] == []
    assert as_owner.json()["watchlist"] == ["42"]


def test_public_profile_shows_public_watchlist(client, add_user):
    add_user("viewer", watchlist=["42"], is_watchlist_public=True)

    response = client.get("/api/users/profile/viewer", headers={"Authorization": "Bearer junk"})

    assert response.json()["watchlist"] == ["42"]
    assert response.json()["isWatchlistPublic"] is True


def test_public_profile_unknown_user(client):
    assert client.get("/api/users/profile/ghost").status_code == 404
