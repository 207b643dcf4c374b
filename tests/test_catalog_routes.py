"""Tests for the catalog read and newsletter endpoints."""

import pytest
from fastapi.testclient import TestClient

from hawkeye.models.catalog import AlbumCreate, MerchItemCreate, TrackCreate
from hawkeye.services.catalog_repository import get_catalog_repository
from main import app


@pytest.fixture
def client(catalog_repo):
    """TestClient wired to a temp repository."""
    app.dependency_overrides[get_catalog_repository] = lambda: catalog_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def album(catalog_repo):
    album = catalog_repo.create_album(AlbumCreate(
        title="Milabs",
        dedicated_to="Dr. Karla Turner",
        description="Milabs is the 1st album in Hawk Eye's truth trilogy.",
        release_year="2025",
        track_count=2,
    ))
    for number, title in ((2, "Second"), (1, "First")):
        catalog_repo.create_track(TrackCreate(
            album_id=album.id, title=title, duration="3:45", track_number=number,
        ))
    return album


class TestInfo:
    def test_root(self):
        response = TestClient(app).get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "Hawk Eye Catalog API"

    def test_health(self):
        assert TestClient(app).get("/health").json() == {"status": "healthy"}

    def test_warmup_returns_503_until_ready(self, client):
        from main import set_ready

        set_ready(False)
        response = client.get("/api/albums")
        assert response.status_code == 503
        assert response.headers["Retry-After"] == "10"


class TestAlbums:
    def test_list_albums(self, client, album):
        response = client.get("/api/albums")
        assert response.status_code == 200
        assert [a["title"] for a in response.json()] == ["Milabs"]

    def test_get_album(self, client, album):
        response = client.get(f"/api/albums/{album.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == album.id
        assert data["dedicated_to"] == "Dr. Karla Turner"
        assert data["track_count"] == 2

    def test_album_tracks_ordered(self, client, album):
        response = client.get(f"/api/albums/{album.id}/tracks")
        assert response.status_code == 200
        assert [t["title"] for t in response.json()] == ["First", "Second"]

    def test_missing_album_is_404(self, client):
        response = client.get("/api/albums/999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Album not found"

    def test_tracks_of_missing_album_is_404(self, client):
        assert client.get("/api/albums/999/tracks").status_code == 404

    @pytest.mark.parametrize("path,detail", [
        ("/api/albums/99999999999999999999", "Album not found"),
        ("/api/albums/99999999999999999999/tracks", "Album not found"),
        ("/api/tracks/99999999999999999999", "Track not found"),
        ("/api/merch/9223372036854775808", "Merch item not found"),
    ])
    def test_ids_beyond_integer_range_are_not_found(self, client, path, detail):
        response = client.get(path)
        assert response.status_code == 404
        assert response.json()["detail"] == detail

    def test_leading_zeros_are_well_formed(self, client, album):
        assert client.get(f"/api/albums/00{album.id}").json()["id"] == album.id

    @pytest.mark.parametrize("path", [
        "/api/albums/abc",
        "/api/albums/1.5",
        "/api/albums/abc/tracks",
        "/api/albums/1_0",
        "/api/albums/+1",
        "/api/albums/-1",
        "/api/albums/%201",
        "/api/albums/%EF%BC%91",
    ])
    def test_non_integer_album_id_is_400(self, client, path):
        response = client.get(path)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid album ID"

    def test_empty_catalog_lists_nothing(self, client):
        assert client.get("/api/albums").json() == []


class TestTracks:
    def test_get_track(self, client, catalog_repo, album):
        track = catalog_repo.list_tracks_by_album(album.id)[0]
        response = client.get(f"/api/tracks/{track.id}")
        assert response.status_code == 200
        assert response.json()["title"] == "First"

    def test_bad_track_ids(self, client):
        assert client.get("/api/tracks/x").json()["detail"] == "Invalid track ID"
        assert client.get("/api/tracks/77").json()["detail"] == "Track not found"


class TestMerch:
    def test_list_and_get(self, client, catalog_repo):
        item = catalog_repo.create_merch_item(MerchItemCreate(
            name="Trilogy Tee", price=25.0, type="Apparel", in_stock=3,
        ))

        listed = client.get("/api/merch").json()
        assert [m["name"] for m in listed] == ["Trilogy Tee"]

        fetched = client.get(f"/api/merch/{item.id}").json()
        assert fetched["price"] == 25.0
        assert fetched["in_stock"] == 3

    def test_bad_merch_ids(self, client):
        assert client.get("/api/merch/tee").status_code == 400
        assert client.get("/api/merch/5").status_code == 404


class TestBlog:
    def test_blog_endpoints(self, client, catalog_repo):
        from hawkeye.services.content_seed import DEFAULT_BLOG_POSTS_PATH, seed_blog_posts

        count = seed_blog_posts(catalog_repo, DEFAULT_BLOG_POSTS_PATH)

        posts = client.get("/api/blog").json()
        assert len(posts) == count
        first = client.get(f"/api/blog/{posts[0]['id']}")
        assert first.status_code == 200
        assert first.json()["title"] == posts[0]["title"]

    def test_bad_blog_ids(self, client):
        assert client.get("/api/blog/latest").json()["detail"] == "Invalid blog post ID"
        assert client.get("/api/blog/3").json()["detail"] == "Blog post not found"


class TestSubscribe:
    def test_subscribe_created(self, client, catalog_repo):
        response = client.post("/api/subscribe", json={"email": "fan@example.com"})

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Successfully subscribed"
        assert data["subscriber"]["email"] == "fan@example.com"
        assert data["subscriber"]["subscribed_at"]
        assert len(catalog_repo.list_subscribers()) == 1

    @pytest.mark.parametrize("body", [
        {"email": "not-an-email"},
        {"email": ""},
        {"email": "missing-at.example.com"},
        {"email": 123},
        {"email": None},
        {"email": ["fan@example.com"]},
        {},
    ])
    def test_invalid_email_rejected_without_write(self, client, catalog_repo, body):
        response = client.post("/api/subscribe", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid email address"
        assert catalog_repo.list_subscribers() == []

    def test_duplicate_email_conflict(self, client, catalog_repo):
        client.post("/api/subscribe", json={"email": "fan@example.com"})
        response = client.post("/api/subscribe", json={"email": "fan@example.com"})

        assert response.status_code == 409
        assert len(catalog_repo.list_subscribers()) == 1

    def test_storage_failure_is_500(self, client):
        class BrokenRepo:
            def create_subscriber(self, data):
                raise RuntimeError("database is locked")

        app.dependency_overrides[get_catalog_repository] = lambda: BrokenRepo()
        response = client.post("/api/subscribe", json={"email": "fan@example.com"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to subscribe"
