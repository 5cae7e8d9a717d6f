"""
Shared test fixtures: services rooted in a temporary data directory and a
TestClient whose dependencies point at them.
"""
import tempfile
import unittest
from pathlib import Path
from fastapi.testclient import TestClient
from tunelist.api.dependencies import (
    get_playlist_service,
    get_upload_service,
    get_user_service,
)
from tunelist.db.json_store import JsonStore
from tunelist.main import app
from tunelist.services.playlist_service import PlaylistService
from tunelist.services.upload_service import UploadService
from tunelist.services.user_service import UserService

MAX_UPLOAD_SIZE = 1024 * 1024
GOOD_PASSWORD = "Sup3r!pass"
MP3_BYTES = b"ID3\x03\x00\x00\x00\x00\x00\x00" + b"\xff\xfb" * 64


class ServiceTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)
        self.upload_dir = self.data_dir / "uploads"
        self.upload_dir.mkdir()
        self.store = JsonStore()
        self.playlist_service = PlaylistService(self.store, self.data_dir / "playlists", self.upload_dir)
        self.user_service = UserService(self.store, self.data_dir / "users.json", self.playlist_service)
        self.upload_service = UploadService(
            self.upload_dir,
            self.playlist_service,
            max_size=MAX_UPLOAD_SIZE,
            chunk_size=64 * 1024,
        )

    def tearDown(self):
        self._tmp.cleanup()

    def make_user(self, username="alice", password=GOOD_PASSWORD, first_name="Alice"):
        return self.user_service.create_user(username, password, first_name)

    def uploaded_files(self):
        return sorted(p.name for p in self.upload_dir.iterdir())


class ApiTestCase(ServiceTestCase):
    def setUp(self):
        super().setUp()
        app.dependency_overrides[get_user_service] = lambda: self.user_service
        app.dependency_overrides[get_playlist_service] = lambda: self.playlist_service
        app.dependency_overrides[get_upload_service] = lambda: self.upload_service
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()
        super().tearDown()

    def register(self, username="alice", password=GOOD_PASSWORD, first_name="Alice"):
        response = self.client.post("/api/auth/register", json={
            "username": username,
            "password": password,
            "firstName": first_name,
        })
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["user"]

    def create_playlist(self, user_id, name="Road Trip"):
        response = self.client.post(f"/api/playlists/{user_id}", json={"name": name})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["playlist"]

    def upload(self, user_id, playlist_id, filename="track.mp3", content=MP3_BYTES, content_type="audio/mpeg"):
        return self.client.post(
            f"/api/upload/{user_id}/{playlist_id}",
            files={"mp3file": (filename, content, content_type)},
        )
