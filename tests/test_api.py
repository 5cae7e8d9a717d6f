import inspect
import threading
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient
from support import GOOD_PASSWORD, ApiTestCase
from tunelist.api.dependencies import get_playlist_service
from tunelist.main import app


class TestAuthEndpoints(ApiTestCase):

    def test_register_returns_user_without_password(self):
        user = self.register()
        self.assertEqual(user["username"], "alice")
        self.assertEqual(user["firstName"], "Alice")
        self.assertNotIn("password", user)
        self.assertNotIn("passwordHash", user)

    def test_register_conflict_and_validation(self):
        self.register()
        response = self.client.post("/api/auth/register", json={
            "username": "Alice", "password": GOOD_PASSWORD, "firstName": "Other",
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "message": "Username already exists"})

        response = self.client.post("/api/auth/register", json={
            "username": "bob", "password": "abcdef1", "firstName": "Bob",
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Password must contain at least one special character")

    def test_login(self):
        user = self.register()
        response = self.client.post("/api/auth/login", json={"username": "ALICE", "password": GOOD_PASSWORD})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["user"]["id"], user["id"])

        response = self.client.post("/api/auth/login", json={"username": "alice", "password": "nope"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Invalid username or password")

        response = self.client.post("/api/auth/login", json={"username": "alice"})
        self.assertEqual(response.status_code, 400)

    def test_logout_and_check_username(self):
        self.register()
        self.assertEqual(self.client.post("/api/auth/logout").json()["success"], True)
        self.assertTrue(self.client.get("/api/auth/check-username/ALICE").json()["exists"])
        self.assertFalse(self.client.get("/api/auth/check-username/bob").json()["exists"])


class TestPlaylistEndpoints(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.user = self.register()
        self.uid = self.user["id"]

    def test_full_scenario(self):
        response = self.client.post("/api/auth/login", json={"username": "Alice", "password": GOOD_PASSWORD})
        self.assertEqual(response.json()["user"]["id"], self.uid)

        playlist = self.create_playlist(self.uid, "Road Trip")
        self.assertEqual(playlist["name"], "Road Trip")
        self.assertEqual(playlist["songs"], [])

        songs_url = f"/api/playlists/{self.uid}/{playlist['id']}/songs"
        response = self.client.post(songs_url, json={"videoId": "abc123", "title": "Song A"})
        self.assertEqual(response.status_code, 201)
        song = response.json()["song"]
        self.assertEqual(song["rating"], 0)
        self.assertIn("addedAt", song)

        response = self.client.post(songs_url, json={"videoId": "abc123", "title": "Song A"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Song already exists in playlist")

        response = self.client.patch(f"{songs_url}/abc123/rating", json={"rating": 5})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["song"]["rating"], 5)

        listed = self.client.get(f"/api/playlists/{self.uid}").json()["playlists"]
        self.assertEqual(listed[0]["songs"][0]["rating"], 5)

        response = self.client.delete(f"/api/playlists/{self.uid}/{playlist['id']}")
        self.assertEqual(response.json(), {"success": True, "message": "Playlist deleted successfully"})
        listed = self.client.get(f"/api/playlists/{self.uid}").json()["playlists"]
        self.assertEqual(listed, [])

    def test_create_playlist_requires_name(self):
        response = self.client.post(f"/api/playlists/{self.uid}", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Playlist name is required")

    def test_not_found_mapping(self):
        response = self.client.get("/api/playlists/user_unknown")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"success": False, "message": "User not found"})

        response = self.client.delete(f"/api/playlists/{self.uid}/playlist_missing")
        self.assertEqual(response.status_code, 404)

        playlist = self.create_playlist(self.uid)
        response = self.client.delete(f"/api/playlists/{self.uid}/{playlist['id']}/songs/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Song not found in playlist")

        response = self.client.patch(
            f"/api/playlists/{self.uid}/{playlist['id']}/songs/nope/rating", json={"rating": 2}
        )
        self.assertEqual(response.status_code, 404)

    def test_rating_must_be_an_integer(self):
        playlist = self.create_playlist(self.uid)
        url = f"/api/playlists/{self.uid}/{playlist['id']}/songs"
        self.client.post(url, json={"videoId": "abc123"})
        response = self.client.patch(f"{url}/abc123/rating", json={"rating": "lots"})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_rating_is_not_range_checked(self):
        playlist = self.create_playlist(self.uid)
        url = f"/api/playlists/{self.uid}/{playlist['id']}/songs"
        self.client.post(url, json={"videoId": "abc123"})
        response = self.client.patch(f"{url}/abc123/rating", json={"rating": 9})
        self.assertEqual(response.status_code, 200)

    def test_song_body_must_carry_an_id(self):
        playlist = self.create_playlist(self.uid)
        response = self.client.post(
            f"/api/playlists/{self.uid}/{playlist['id']}/songs", json={"title": "Nameless"}
        )
        self.assertEqual(response.status_code, 400)

    def test_unknown_route_uses_envelope(self):
        response = self.client.get("/api/nothing-here")
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()["success"])

    def test_unexpected_error_is_generic_500(self):
        class Broken:
            def get_user_playlists(self, user_id):
                raise RuntimeError("disk on fire at /secret/path")

        app.dependency_overrides[get_playlist_service] = lambda: Broken()
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get(f"/api/playlists/{self.uid}")
        client.close()
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "message": "Internal server error"})

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "healthy"})

    def test_server_owned_song_fields_are_ignored(self):
        playlist = self.create_playlist(self.uid)
        url = f"/api/playlists/{self.uid}/{playlist['id']}/songs"
        bodies = [
            {"videoId": "null-rating", "rating": None},
            {"videoId": "float-rating", "rating": 3.5},
            {"videoId": "text-date", "addedAt": "yesterday"},
            {"localId": "local_1", "filePath": "/uploads/x.mp3", "added_at": 12, "rating": "five"},
        ]
        for body in bodies:
            response = self.client.post(url, json={"title": "A", **body})
            self.assertEqual(response.status_code, 201, response.text)
            song = response.json()["song"]
            self.assertEqual(song["rating"], 0)
            self.assertNotEqual(song["addedAt"], "yesterday")


class TestHandlerDispatch(ApiTestCase):

    def test_blocking_handlers_run_in_threadpool(self):
        sync_prefixes = ("/api/auth", "/api/playlists", "/api/videos")
        checked = 0
        for route in app.routes:
            if isinstance(route, APIRoute) and route.path.startswith(sync_prefixes):
                self.assertFalse(inspect.iscoroutinefunction(route.endpoint), route.path)
                checked += 1
        self.assertGreater(checked, 0)

    def test_concurrent_adds_over_http(self):
        uid = self.register()["id"]
        playlist = self.create_playlist(uid)
        url = f"/api/playlists/{uid}/{playlist['id']}/songs"
        statuses = []

        def add(n):
            statuses.append(self.client.post(url, json={"videoId": f"vid{n}"}).status_code)

        threads = [threading.Thread(target=add, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(statuses, [201] * 8)
        songs = self.client.get(f"/api/playlists/{uid}").json()["playlists"][0]["songs"]
        self.assertEqual(len(songs), 8)
