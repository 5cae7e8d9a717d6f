# ============================================================================
# FILE: tunelist/api/endpoints/videos.py
# Catalog search and details proxied through the YouTube Data API
# ============================================================================
from fastapi import APIRouter, Depends, Query
from tunelist.api.dependencies import get_youtube_client
from tunelist.core.errors import CatalogUnavailableError, NotFoundError
from tunelist.core.youtube_client import YouTubeClient
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/search")
def search_videos(
    q: str = Query(..., min_length=1, description="Search query"),
    max_results: int = Query(12, ge=1, le=50, alias="maxResults"),
    youtube: YouTubeClient = Depends(get_youtube_client)
):
    """
    Search the video catalog
    Results carry the fields a remote playlist song needs
    """
    logger.info(f"Searching videos: {q} (max: {max_results})")
    videos = youtube.search(q, max_results)
    if videos is None:
        raise CatalogUnavailableError("Video search is unavailable")
    return {"success": True, "videos": videos}


@router.get("/{video_id}")
def get_video(
    video_id: str,
    youtube: YouTubeClient = Depends(get_youtube_client)
):
    """Video details plus the embed URL used for playback"""
    if not youtube.is_available:
        raise CatalogUnavailableError("Video search is unavailable")
    video = youtube.get_video(video_id)
    if not video:
        raise NotFoundError("Video not found")
    return {"success": True, "video": video}
