# ============================================================================
# FILE: tunelist/api/dependencies.py
# Service providers; tests swap them through app.dependency_overrides
# ============================================================================
from tunelist.core.youtube_client import YouTubeClient, youtube_client
from tunelist.services.playlist_service import PlaylistService, playlist_service
from tunelist.services.upload_service import UploadService, upload_service
from tunelist.services.user_service import UserService, user_service


def get_user_service() -> UserService:
    return user_service


def get_playlist_service() -> PlaylistService:
    return playlist_service


def get_upload_service() -> UploadService:
    return upload_service


def get_youtube_client() -> YouTubeClient:
    return youtube_client
