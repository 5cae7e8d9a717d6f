# ============================================================================
# FILE: tunelist/api/endpoints/playlists.py
# ============================================================================
from fastapi import APIRouter, Body, Depends, status
from typing import Any, Dict
from tunelist.api.dependencies import get_playlist_service
from tunelist.schemas.playlist import PlaylistCreate, RatingUpdate
from tunelist.services.playlist_service import PlaylistService

router = APIRouter()


@router.get("/{user_id}")
def get_playlists(
    user_id: str,
    playlists: PlaylistService = Depends(get_playlist_service)
):
    """
    Get all playlists for a user, in creation order
    """
    return {
        "success": True,
        "playlists": [p.to_record() for p in playlists.get_user_playlists(user_id)]
    }


@router.post("/{user_id}", status_code=status.HTTP_201_CREATED)
def create_playlist(
    user_id: str,
    playlist_data: PlaylistCreate,
    playlists: PlaylistService = Depends(get_playlist_service)
):
    playlist = playlists.create_playlist(user_id, playlist_data.name)
    return {"success": True, "playlist": playlist.to_record()}


@router.delete("/{user_id}/{playlist_id}")
def delete_playlist(
    user_id: str,
    playlist_id: str,
    playlists: PlaylistService = Depends(get_playlist_service)
):
    """
    Delete a playlist
    Uploaded files referenced by its local songs are deleted too
    """
    playlists.delete_playlist(user_id, playlist_id)
    return {"success": True, "message": "Playlist deleted successfully"}


@router.post("/{user_id}/{playlist_id}/songs", status_code=status.HTTP_201_CREATED)
def add_song_to_playlist(
    user_id: str,
    playlist_id: str,
    song: Dict[str, Any] = Body(...),
    playlists: PlaylistService = Depends(get_playlist_service)
):
    """
    Add a remote (videoId) or local (localId) song to a playlist
    Rating and addedAt are always set by the server
    """
    added = playlists.add_song_to_playlist(user_id, playlist_id, song)
    return {"success": True, "song": added.to_record()}


@router.delete("/{user_id}/{playlist_id}/songs/{song_id}")
def remove_song_from_playlist(
    user_id: str,
    playlist_id: str,
    song_id: str,
    playlists: PlaylistService = Depends(get_playlist_service)
):
    playlists.remove_song_from_playlist(user_id, playlist_id, song_id)
    return {"success": True, "message": "Song removed from playlist"}


@router.patch("/{user_id}/{playlist_id}/songs/{song_id}/rating")
def update_song_rating(
    user_id: str,
    playlist_id: str,
    song_id: str,
    rating_data: RatingUpdate,
    playlists: PlaylistService = Depends(get_playlist_service)
):
    song = playlists.update_song_rating(user_id, playlist_id, song_id, rating_data.rating)
    return {"success": True, "message": "Rating updated", "song": song.to_record()}
