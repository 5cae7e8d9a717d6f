# ============================================================================
# FILE: tunelist/services/playlist_service.py
# ============================================================================
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Union
from pydantic import ValidationError as PydanticValidationError
from tunelist.config import settings
from tunelist.core.errors import ConflictError, NotFoundError, ValidationError
from tunelist.core.ids import generate_id
from tunelist.db.json_store import JsonStore, json_store
from tunelist.db.models.playlist import LocalSong, Playlist, RemoteSong, song_adapter
import logging

logger = logging.getLogger(__name__)

USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

# Set by the server on every add; client values are discarded unchecked
SERVER_OWNED_SONG_FIELDS = ("rating", "addedAt", "added_at")

SongModel = Union[RemoteSong, LocalSong]


class PlaylistService:
    """
    Service layer for playlist operations.

    Each user owns one JSON file holding all of their playlists. Every
    mutation loads that file, changes it in memory and replaces it whole,
    holding the user's lock for the full cycle.
    """

    def __init__(self, store: JsonStore, playlists_dir: Path, upload_dir: Path):
        self.store = store
        self.playlists_dir = playlists_dir
        self.upload_dir = upload_dir

    def _user_file(self, user_id: str) -> Path:
        if not USER_ID_PATTERN.match(user_id or ""):
            raise NotFoundError("User not found")
        return self.playlists_dir / f"{user_id}.json"

    def _load(self, user_id: str) -> List[Playlist]:
        path = self._user_file(user_id)
        if not self.store.exists(path):
            raise NotFoundError("User not found")
        return [Playlist.model_validate(raw) for raw in self.store.read(path, [])]

    def _save(self, user_id: str, playlists: List[Playlist]) -> None:
        self.store.write(self._user_file(user_id), [p.to_record() for p in playlists])

    @staticmethod
    def _find(playlists: List[Playlist], playlist_id: str) -> Playlist:
        for playlist in playlists:
            if playlist.id == playlist_id:
                return playlist
        raise NotFoundError("Playlist not found")

    def _delete_backing_file(self, song: SongModel) -> None:
        """Remove the uploaded file behind a local song, if it is still there"""
        if not isinstance(song, LocalSong) or not song.file_path:
            return
        path = self.upload_dir / Path(song.file_path).name
        try:
            path.unlink()
            logger.info(f"Deleted uploaded file: {path.name}")
        except FileNotFoundError:
            logger.info(f"Uploaded file already gone: {path.name}")

    def init_user(self, user_id: str) -> None:
        """Create an empty playlist collection for a new user"""
        path = self._user_file(user_id)
        with self.store.locked(user_id):
            if not self.store.exists(path):
                self.store.write(path, [])

    def get_user_playlists(self, user_id: str) -> List[Playlist]:
        """Get all playlists for a user, in creation order"""
        return self._load(user_id)

    def get_playlist(self, user_id: str, playlist_id: str) -> Playlist:
        return self._find(self._load(user_id), playlist_id)

    def create_playlist(self, user_id: str, name: str) -> Playlist:
        """Create a new playlist for a user"""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Playlist name is required")

        with self.store.locked(user_id):
            playlists = self._load(user_id)
            playlist = Playlist(
                id=generate_id("playlist"),
                name=name,
                songs=[],
                created_at=datetime.now(timezone.utc),
            )
            playlists.append(playlist)
            self._save(user_id, playlists)

        logger.info(f"Playlist created: {playlist.id} for user {user_id}")
        return playlist

    def delete_playlist(self, user_id: str, playlist_id: str) -> None:
        """Delete a playlist and the uploaded files its local songs point at"""
        with self.store.locked(user_id):
            playlists = self._load(user_id)
            playlist = self._find(playlists, playlist_id)
            for song in playlist.songs:
                self._delete_backing_file(song)
            self._save(user_id, [p for p in playlists if p.id != playlist_id])

        logger.info(f"Playlist deleted: {playlist_id}")

    def add_song_to_playlist(self, user_id: str, playlist_id: str, song: Any) -> SongModel:
        """
        Add a song to a playlist.

        ``song`` may be a RemoteSong/LocalSong or a raw camelCase dict. The
        stored copy always gets a fresh ``addedAt`` and a rating of 0.
        """
        if not isinstance(song, (RemoteSong, LocalSong)):
            if isinstance(song, dict):
                song = {k: v for k, v in song.items() if k not in SERVER_OWNED_SONG_FIELDS}
            try:
                song = song_adapter.validate_python(song)
            except PydanticValidationError as e:
                raise ValidationError(_first_error(e))

        new_song = song.model_copy(update={
            "added_at": datetime.now(timezone.utc),
            "rating": 0,
        })

        with self.store.locked(user_id):
            playlists = self._load(user_id)
            playlist = self._find(playlists, playlist_id)
            duplicate = any(
                type(existing) is type(new_song) and existing.song_id == new_song.song_id
                for existing in playlist.songs
            )
            if duplicate:
                logger.info(f"Song already in playlist {playlist_id}: {new_song.song_id}")
                raise ConflictError("Song already exists in playlist")
            playlist.songs.append(new_song)
            self._save(user_id, playlists)

        logger.info(f"Song added to playlist {playlist_id}: {new_song.song_id}")
        return new_song

    def remove_song_from_playlist(self, user_id: str, playlist_id: str, song_id: str) -> None:
        """Remove a song (matched by videoId or localId) from a playlist"""
        with self.store.locked(user_id):
            playlists = self._load(user_id)
            playlist = self._find(playlists, playlist_id)
            song = playlist.find_song(song_id)
            if song is None:
                raise NotFoundError("Song not found in playlist")
            self._delete_backing_file(song)
            playlist.songs.remove(song)
            self._save(user_id, playlists)

        logger.info(f"Song removed from playlist {playlist_id}: {song_id}")

    def update_song_rating(self, user_id: str, playlist_id: str, song_id: str, rating: int) -> SongModel:
        with self.store.locked(user_id):
            playlists = self._load(user_id)
            playlist = self._find(playlists, playlist_id)
            song = playlist.find_song(song_id)
            if song is None:
                raise NotFoundError("Song not found in playlist")
            song.rating = rating
            self._save(user_id, playlists)

        logger.info(f"Rating for {song_id} in playlist {playlist_id} set to {rating}")
        return song


def _first_error(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("remote", "local"))
    message = error.get("msg", "Invalid song")
    return f"{location}: {message}" if location else message


# Create singleton instance
playlist_service = PlaylistService(json_store, settings.playlists_dir, settings.upload_dir)
