# ============================================================================
# FILE: tunelist/client/api_client.py
# HTTP wrapper around the Tunelist REST API
# ============================================================================
import httpx
from typing import Any, BinaryIO, Dict, Optional, Union
from urllib.parse import quote
import logging

logger = logging.getLogger(__name__)

NETWORK_ERROR = {"success": False, "message": "Network error"}


class ApiClient:
    """
    One method per REST endpoint, each returning the decoded JSON envelope.

    Transport failures never raise: they come back as a failed envelope with
    the message "Network error", so callers only ever check ``success``.
    """

    def __init__(self, base_url: str = "", http: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def _request(self, method: str, path: str, fallback: Dict[str, Any], **kwargs) -> Dict[str, Any]:
        try:
            response = self.http.request(method, path, **kwargs)
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{method} {path} failed: {e}")
            return dict(fallback)

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def register(self, username: str, password: str, first_name: str, image_url: Optional[str] = None) -> Dict[str, Any]:
        payload = {"username": username, "password": password, "firstName": first_name}
        if image_url:
            payload["imageUrl"] = image_url
        return self._request("POST", "/api/auth/register", NETWORK_ERROR, json=payload)

    def login(self, username: str, password: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/api/auth/login", NETWORK_ERROR,
            json={"username": username, "password": password},
        )

    def logout(self) -> Dict[str, Any]:
        # Logout is client-side; a server failure must not block it
        self._request("POST", "/api/auth/logout", NETWORK_ERROR)
        return {"success": True}

    def check_username(self, username: str) -> Dict[str, Any]:
        return self._request(
            "GET", f"/api/auth/check-username/{quote(username, safe='')}", {"exists": False}
        )

    # ------------------------------------------------------------------
    # Playlists
    # ------------------------------------------------------------------

    def get_playlists(self, user_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/playlists/{user_id}", {"success": False, "playlists": []})

    def create_playlist(self, user_id: str, name: str) -> Dict[str, Any]:
        return self._request("POST", f"/api/playlists/{user_id}", NETWORK_ERROR, json={"name": name})

    def delete_playlist(self, user_id: str, playlist_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/playlists/{user_id}/{playlist_id}", NETWORK_ERROR)

    def add_song_to_playlist(self, user_id: str, playlist_id: str, song: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "POST", f"/api/playlists/{user_id}/{playlist_id}/songs", NETWORK_ERROR, json=song
        )

    def remove_song_from_playlist(self, user_id: str, playlist_id: str, song_id: str) -> Dict[str, Any]:
        return self._request(
            "DELETE", f"/api/playlists/{user_id}/{playlist_id}/songs/{quote(song_id, safe='')}", NETWORK_ERROR
        )

    def update_song_rating(self, user_id: str, playlist_id: str, song_id: str, rating: int) -> Dict[str, Any]:
        return self._request(
            "PATCH",
            f"/api/playlists/{user_id}/{playlist_id}/songs/{quote(song_id, safe='')}/rating",
            NETWORK_ERROR,
            json={"rating": rating},
        )

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def upload_mp3(
        self,
        user_id: str,
        playlist_id: str,
        filename: str,
        content: Union[bytes, BinaryIO],
        content_type: str = "audio/mpeg",
    ) -> Dict[str, Any]:
        return self._request(
            "POST", f"/api/upload/{user_id}/{playlist_id}", NETWORK_ERROR,
            files={"mp3file": (filename, content, content_type)},
        )

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def search_videos(self, query: str, max_results: int = 12) -> Dict[str, Any]:
        return self._request(
            "GET", "/api/videos/search", {"success": False, "message": "Network error", "videos": []},
            params={"q": query, "maxResults": max_results},
        )

    def close(self) -> None:
        self.http.close()
