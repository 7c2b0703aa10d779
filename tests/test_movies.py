from streamai.models.user import UserRole


def test_list_and_get_movies(client, add_movie):
    add_movie("42", "42/index.m3u8", title="Big Buck Bunny")

    listing = client.get("/api/movies/")
    assert listing.status_code == 200
    assert [m["title"] for m in listing.json()] == ["Big Buck Bunny"]

    movie = client.get("/api/movies/42")
    assert movie.json()["videoUrl"] == "42/index.m3u8"


def test_get_unknown_movie(client):
    assert client.get("/api/movies/nope").status_code == 404


def test_admin_manages_catalog(client, auth_headers):
    headers = auth_headers("boss", UserRole.ADMIN)

    created = client.post(
        "/api/movies/",
        json={"title": "Sintel", "videoUrl": "sintel/index.m3u8", "genre": ["Animation"]},
        headers=headers,
    )
    assert created.status_code == 200
    movie_id = created.json()["id"]
    assert created.json()["views"] == 0

    updated = client.put(f"/api/movies/{movie_id}", json={"rating": "PG"}, headers=headers)
    assert updated.json()["rating"] == "PG"
    assert updated.json()["title"] == "Sintel"

    assert client.delete(f"/api/movies/{movie_id}", headers=headers).json() == {"success": True}
    assert client.get(f"/api/movies/{movie_id}").status_code == 404


def test_viewer_cannot_manage_catalog(client, auth_headers):
    response = client.post("/api/movies/", json={"title": "Sintel"}, headers=auth_headers())
    assert response.status_code == 403


def test_created_movie_can_be_streamed(client, auth_headers):
    headers = auth_headers("boss", UserRole.ADMIN)
    movie_id = client.post("/api/movies/", json={"title": "Tears of Steel"}, headers=headers).json()["id"]

    response = client.get(f"/api/stream/authorize/{movie_id}", headers=headers)

    assert response.status_code == 200
    assert f"/{movie_id}/index.m3u8?sig=" in response.json()["url"]
