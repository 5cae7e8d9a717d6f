# ============================================================================
# FILE: tunelist/client/repository.py
# Write-through mirror of the logged-in user's playlists
# ============================================================================
from typing import Any, Dict, List, Optional, Union, BinaryIO
import logging

logger = logging.getLogger(__name__)

SORT_KEYS = ("added", "name", "rating")


def _song_id(song: Dict[str, Any]) -> Optional[str]:
    return song.get("videoId") or song.get("localId")


def filter_songs(songs: List[Dict[str, Any]], text: str) -> List[Dict[str, Any]]:
    """Songs whose title contains ``text``, ignoring case"""
    needle = (text or "").strip().lower()
    if not needle:
        return list(songs)
    return [song for song in songs if needle in (song.get("title") or "").lower()]


def sort_songs(songs: List[Dict[str, Any]], by: str = "added") -> List[Dict[str, Any]]:
    """
    Order songs for display.

    ``added`` keeps playlist order, ``name`` sorts by title and ``rating``
    puts the best rated first (unrated counts as 0). Both sorts are stable.
    """
    if by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {by}")
    if by == "name":
        return sorted(songs, key=lambda s: (s.get("title") or "").casefold())
    if by == "rating":
        return sorted(songs, key=lambda s: s.get("rating") or 0, reverse=True)
    return list(songs)


class PlaylistRepository:
    """
    Client-side cache of one session's playlists.

    Reads go to the cache and fall through to the server on a miss. Every
    mutation is sent to the server first; the cache only changes once the
    server reports success. Changes made elsewhere (another client) are not
    detected until the next ``fetch``.
    """

    def __init__(self, session):
        self.session = session
        self._cache: Optional[List[Dict[str, Any]]] = None
        self._cache_user_id: Optional[str] = None

    @property
    def api(self):
        return self.session.api

    def _user_id(self) -> Optional[str]:
        user = self.session.current_user
        return user["id"] if user else None

    def _cached_playlist(self, playlist_id: str) -> Optional[Dict[str, Any]]:
        if self._cache is None:
            return None
        for playlist in self._cache:
            if playlist["id"] == playlist_id:
                return playlist
        return None

    def invalidate(self) -> None:
        self._cache = None
        self._cache_user_id = None

    def fetch(self) -> List[Dict[str, Any]]:
        """Replace the cache with the server's copy"""
        user_id = self._user_id()
        if not user_id:
            return []
        result = self.api.get_playlists(user_id)
        if not result.get("success"):
            logger.warning(f"Could not fetch playlists: {result.get('message')}")
            return []
        self._cache = result["playlists"]
        self._cache_user_id = user_id
        return self._cache

    def playlists(self) -> List[Dict[str, Any]]:
        user_id = self._user_id()
        if not user_id:
            return []
        if self._cache is not None and self._cache_user_id == user_id:
            return self._cache
        return self.fetch()

    def get(self, playlist_id: str) -> Optional[Dict[str, Any]]:
        for playlist in self.playlists():
            if playlist["id"] == playlist_id:
                return playlist
        return None

    def create(self, name: str) -> Optional[Dict[str, Any]]:
        user_id = self._user_id()
        if not user_id:
            return None
        result = self.api.create_playlist(user_id, name)
        if not result.get("success"):
            return None
        if self._cache is not None:
            self._cache.append(result["playlist"])
        return result["playlist"]

    def delete(self, playlist_id: str) -> bool:
        user_id = self._user_id()
        if not user_id:
            return False
        result = self.api.delete_playlist(user_id, playlist_id)
        if not result.get("success"):
            return False
        if self._cache is not None:
            self._cache = [p for p in self._cache if p["id"] != playlist_id]
        return True

    def add_song(self, playlist_id: str, song: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        user_id = self._user_id()
        if not user_id:
            return None
        result = self.api.add_song_to_playlist(user_id, playlist_id, song)
        if not result.get("success"):
            return None
        playlist = self._cached_playlist(playlist_id)
        if playlist is not None:
            playlist["songs"].append(result["song"])
        return result["song"]

    def remove_song(self, playlist_id: str, song_id: str) -> bool:
        user_id = self._user_id()
        if not user_id:
            return False
        result = self.api.remove_song_from_playlist(user_id, playlist_id, song_id)
        if not result.get("success"):
            return False
        playlist = self._cached_playlist(playlist_id)
        if playlist is not None:
            playlist["songs"] = [s for s in playlist["songs"] if _song_id(s) != song_id]
        return True

    def update_rating(self, playlist_id: str, song_id: str, rating: int) -> bool:
        user_id = self._user_id()
        if not user_id:
            return False
        result = self.api.update_song_rating(user_id, playlist_id, song_id, rating)
        if not result.get("success"):
            return False
        playlist = self._cached_playlist(playlist_id)
        if playlist is not None:
            for song in playlist["songs"]:
                if _song_id(song) == song_id:
                    song["rating"] = rating
                    break
        return True

    def upload_mp3(
        self,
        playlist_id: str,
        filename: str,
        content: Union[bytes, BinaryIO],
        content_type: str = "audio/mpeg",
    ) -> Optional[Dict[str, Any]]:
        user_id = self._user_id()
        if not user_id:
            return None
        result = self.api.upload_mp3(user_id, playlist_id, filename, content, content_type)
        if not result.get("success"):
            return None
        playlist = self._cached_playlist(playlist_id)
        if playlist is not None:
            playlist["songs"].append(result["song"])
        return result["song"]

    def playlists_containing_video(self, video_id: str) -> List[Dict[str, Any]]:
        return [
            playlist for playlist in self.playlists()
            if any(song.get("videoId") == video_id for song in playlist["songs"])
        ]

    def is_video_in_any_playlist(self, video_id: str) -> bool:
        return bool(self.playlists_containing_video(video_id))
